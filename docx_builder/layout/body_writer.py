"""Build WordprocessingML body blocks for figures, captions and text."""
from __future__ import annotations

from docx_builder.model.elements import FigureRecord
from docx_builder.utils.xml_utils import XmlElement

PICTURE_URI = "http://schemas.openxmlformats.org/drawingml/2006/picture"


def text_paragraph(text: str) -> XmlElement:
    """A ``w:p`` holding a single run of literal text."""
    paragraph = XmlElement("w:p")
    run = paragraph.add("w:r")
    run.add("w:t", {"xml:space": "preserve"}, text=text)
    return paragraph


def figure_paragraph(figure: FigureRecord) -> XmlElement:
    """A ``w:p`` holding the inline drawing that embeds ``figure``."""
    cx, cy = figure.extent.cx, figure.extent.cy
    name = f"Picture {figure.ordinal}"

    paragraph = XmlElement("w:p")
    drawing = paragraph.add("w:r").add("w:drawing")
    inline = drawing.add("wp:inline", {"distT": 0, "distB": 0, "distL": 0, "distR": 0})
    inline.add("wp:extent", {"cx": cx, "cy": cy})
    inline.add("wp:effectExtent", {"l": 0, "t": 0, "r": 0, "b": 0})
    inline.add("wp:docPr", {"id": figure.ordinal, "name": name})
    inline.add("wp:cNvGraphicFramePr").add("a:graphicFrameLocks", {"noChangeAspect": 1})

    pic = inline.add("a:graphic").add("a:graphicData", {"uri": PICTURE_URI}).add("pic:pic")
    nv_pic_pr = pic.add("pic:nvPicPr")
    nv_pic_pr.add("pic:cNvPr", {"id": figure.ordinal, "name": name})
    nv_pic_pr.add("pic:cNvPicPr")

    blip_fill = pic.add("pic:blipFill")
    blip_fill.add("a:blip", {"r:embed": figure.r_id})
    blip_fill.add("a:stretch").add("a:fillRect")

    sp_pr = pic.add("pic:spPr")
    xfrm = sp_pr.add("a:xfrm")
    xfrm.add("a:off", {"x": 0, "y": 0})
    xfrm.add("a:ext", {"cx": cx, "cy": cy})
    sp_pr.add("a:prstGeom", {"prst": "rect"}).add("a:avLst")
    return paragraph
