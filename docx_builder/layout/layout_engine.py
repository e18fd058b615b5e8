"""Turn ordered content items into document body markup and figure records."""
from __future__ import annotations

from typing import List, Sequence

from docx_builder.layout.body_writer import figure_paragraph, text_paragraph
from docx_builder.model.elements import (
    CANONICAL_SOURCE_SIZE,
    DEFAULT_PAGE_GEOMETRY,
    ContentItem,
    DocumentLayout,
    FigureItem,
    FigureRecord,
    ImageExtent,
    ImageSize,
    PageGeometry,
    TextItem,
)
from docx_builder.utils.logger import get_logger
from docx_builder.utils.text_sanitizer import TextSanitizer
from docx_builder.utils.units import scale_to_width
from docx_builder.utils.xml_utils import XmlElement

LOGGER = get_logger(__name__)

# Body blocks sit two levels deep: w:document > w:body > w:p
BODY_DEPTH = 2


class LayoutEngine:
    """Compute figure geometry and emit the logical document body."""

    def __init__(self, geometry: PageGeometry = DEFAULT_PAGE_GEOMETRY) -> None:
        self._geometry = geometry
        self._sanitizer = TextSanitizer()

    @property
    def target_width(self) -> int:
        """Width every figure is scaled to, in EMU."""
        return self._geometry.usable_width_emu

    # ------------------------------------------------------------------
    # Public API
    def extent_for(self, source_size: ImageSize = CANONICAL_SOURCE_SIZE) -> ImageExtent:
        """Scale ``source_size`` to the usable page width, keeping its aspect ratio."""
        width = self.target_width
        height = scale_to_width(source_size.width_emu, source_size.height_emu, width)
        return ImageExtent(cx=width, cy=height)

    def layout(self, items: Sequence[ContentItem]) -> DocumentLayout:
        """Lay out ``items`` top to bottom in input order."""
        blocks: List[XmlElement] = []
        figures: List[FigureRecord] = []

        for index, item in enumerate(items):
            if isinstance(item, FigureItem):
                record = FigureRecord(
                    ordinal=len(figures) + 1,
                    data=item.data,
                    caption=self._clean(item.caption, index),
                    extent=self.extent_for(item.source_size or CANONICAL_SOURCE_SIZE),
                )
                figures.append(record)
                blocks.append(figure_paragraph(record))
                blocks.append(text_paragraph(record.caption))
            elif isinstance(item, TextItem):
                blocks.append(text_paragraph(self._clean(item.body, index)))
            else:
                raise TypeError(f"Unsupported content item at position {index}: {type(item).__name__}")

        LOGGER.debug(
            "Laid out %d items (%d figures, %d body blocks) at width %d EMU",
            len(items),
            len(figures),
            len(blocks),
            self.target_width,
        )
        body_xml = "".join(block.render(BODY_DEPTH) for block in blocks)
        return DocumentLayout(body_xml=body_xml, figures=tuple(figures), geometry=self._geometry)

    # ------------------------------------------------------------------
    # Internal helpers
    def _clean(self, text: str, index: int) -> str:
        illegal = self._sanitizer.find_illegal(text)
        if not illegal:
            return text
        LOGGER.warning(
            "Item %d contains characters not allowed in XML (%s); removing them",
            index,
            ", ".join(sorted(set(illegal))),
        )
        return self._sanitizer.sanitize(text)
