"""Tests covering figure geometry and body emission."""
import unittest
from xml.etree import ElementTree as ET

from docx_builder.layout.layout_engine import LayoutEngine
from docx_builder.model.elements import (
    CANONICAL_SOURCE_SIZE,
    FigureItem,
    ImageSize,
    PageGeometry,
    TextItem,
)
from docx_builder.utils.xml_utils import Namespaces

NS = {**Namespaces.WORD, **Namespaces.DRAWING}
ENVELOPE = (
    '<body xmlns:w="{w}" xmlns:r="{r}" xmlns:wp="{wp}" xmlns:a="{a}" xmlns:pic="{pic}">{{}}</body>'.format(**NS)
)


def parse_body(body_xml: str) -> ET.Element:
    return ET.fromstring(ENVELOPE.format(body_xml))


class LayoutEngineGeometryTest(unittest.TestCase):
    """Validate width and height computation."""

    def test_default_target_width(self) -> None:
        self.assertEqual(LayoutEngine().target_width, 5731510)

    def test_canonical_height_is_truncated(self) -> None:
        extent = LayoutEngine().extent_for(CANONICAL_SOURCE_SIZE)
        self.assertEqual(extent.cx, 5731510)
        self.assertEqual(extent.cy, 2000000 * 5731510 // 3000000)
        self.assertEqual(extent.cy, 3821006)
        self.assertAlmostEqual(extent.cy / extent.cx, 2 / 3, places=6)

    def test_explicit_source_size_keeps_its_ratio(self) -> None:
        extent = LayoutEngine().extent_for(ImageSize(width_emu=1000, height_emu=1000))
        self.assertEqual(extent.cx, extent.cy)

    def test_custom_geometry_changes_width(self) -> None:
        engine = LayoutEngine(PageGeometry(page_width=12240, margin_left=720, margin_right=720))
        self.assertEqual(engine.target_width, (12240 - 1440) * 635)

    def test_geometry_without_usable_width_rejected(self) -> None:
        with self.assertRaises(ValueError):
            PageGeometry(page_width=2000, margin_left=1000, margin_right=1000)

    def test_non_positive_image_size_rejected(self) -> None:
        with self.assertRaises(ValueError):
            ImageSize(width_emu=0, height_emu=10)


class LayoutEngineBodyTest(unittest.TestCase):
    """Validate the emitted body blocks and figure records."""

    def setUp(self) -> None:
        self.engine = LayoutEngine()

    def test_scenario_block_order_and_ordinals(self) -> None:
        items = [
            FigureItem(data=b"<svg>A</svg>", caption="Figure 1"),
            TextItem(body="note"),
            FigureItem(data=b"<svg>B</svg>", caption="Figure 2"),
        ]
        layout = self.engine.layout(items)

        self.assertEqual(layout.figure_count, 2)
        self.assertEqual([f.ordinal for f in layout.figures], [1, 2])
        self.assertEqual([f.data for f in layout.figures], [b"<svg>A</svg>", b"<svg>B</svg>"])
        self.assertEqual([f.part_path for f in layout.figures], ["word/media/image1.svg", "word/media/image2.svg"])

        paragraphs = parse_body(layout.body_xml).findall("w:p", NS)
        self.assertEqual(len(paragraphs), 5)

        kinds = []
        for paragraph in paragraphs:
            blip = paragraph.find(".//a:blip", NS)
            if blip is not None:
                kinds.append(blip.attrib["{%s}embed" % NS["r"]])
            else:
                kinds.append(paragraph.find(".//w:t", NS).text)
        self.assertEqual(kinds, ["rId1", "Figure 1", "note", "rId2", "Figure 2"])

    def test_drawing_declares_extent_twice(self) -> None:
        layout = self.engine.layout([FigureItem(data=b"", caption="c")])
        root = parse_body(layout.body_xml)

        extent = root.find(".//wp:extent", NS)
        ext = root.find(".//a:xfrm/a:ext", NS)
        for element in (extent, ext):
            self.assertEqual(element.attrib["cx"], "5731510")
            self.assertEqual(element.attrib["cy"], "3821006")
        self.assertEqual(root.find(".//wp:docPr", NS).attrib["name"], "Picture 1")

    def test_text_items_do_not_consume_ordinals(self) -> None:
        layout = self.engine.layout([TextItem("a"), TextItem("b"), FigureItem(b"x", "only")])
        self.assertEqual(layout.figures[0].r_id, "rId1")

    def test_empty_input(self) -> None:
        layout = self.engine.layout([])
        self.assertEqual(layout.body_xml, "")
        self.assertEqual(layout.figure_count, 0)

    def test_special_characters_round_trip(self) -> None:
        text = "Tom & Jerry <b>\"quoted\"</b> 'single' — Ünïcödé 図"
        layout = self.engine.layout([TextItem(text), FigureItem(b"", text)])
        texts = [t.text for t in parse_body(layout.body_xml).iter("{%s}t" % NS["w"])]
        self.assertEqual(texts, [text, text])

    def test_whitespace_preserved(self) -> None:
        layout = self.engine.layout([TextItem("  indented  ")])
        self.assertIn('xml:space="preserve"', layout.body_xml)
        self.assertEqual(parse_body(layout.body_xml).find(".//w:t", NS).text, "  indented  ")

    def test_line_endings_round_trip(self) -> None:
        text = "line1\r\nline2\rend\nlast"
        layout = self.engine.layout([TextItem(text), FigureItem(b"", text)])
        texts = [t.text for t in parse_body(layout.body_xml).iter("{%s}t" % NS["w"])]
        self.assertEqual(texts, [text, text])

    def test_illegal_characters_stripped_with_warning(self) -> None:
        with self.assertLogs("docx_builder.layout.layout_engine", level="WARNING") as logs:
            layout = self.engine.layout([TextItem("bad\x01text"), FigureItem(b"", "cap\x0btion")])
        self.assertIn("U+0001", logs.output[0])
        self.assertEqual(layout.figures[0].caption, "caption")
        texts = [t.text for t in parse_body(layout.body_xml).iter("{%s}t" % NS["w"])]
        self.assertEqual(texts, ["badtext", "caption"])

    def test_unknown_item_type_rejected(self) -> None:
        with self.assertRaises(TypeError):
            self.engine.layout(["not an item"])  # type: ignore[list-item]


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
