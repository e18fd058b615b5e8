"""In-memory representation of document content and its computed layout."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from docx_builder.utils.units import twips_to_emu

MEDIA_EXTENSION = "svg"


@dataclass(frozen=True, slots=True)
class ImageSize:
    """Intrinsic size of a source image in EMU."""

    width_emu: int
    height_emu: int

    def __post_init__(self) -> None:
        if self.width_emu <= 0 or self.height_emu <= 0:
            raise ValueError(f"Image size must be positive, got {self.width_emu}x{self.height_emu}")


CANONICAL_SOURCE_SIZE = ImageSize(width_emu=3_000_000, height_emu=2_000_000)


@dataclass(frozen=True, slots=True)
class FigureItem:
    """An SVG image followed by its caption.

    ``source_size`` is the intrinsic size of the image; figures without one
    are laid out as if they had :data:`CANONICAL_SOURCE_SIZE`.
    """

    data: bytes
    caption: str
    source_size: Optional[ImageSize] = None


@dataclass(frozen=True, slots=True)
class TextItem:
    """A plain paragraph of text."""

    body: str


ContentItem = FigureItem | TextItem


@dataclass(frozen=True, slots=True)
class PageGeometry:
    """Page size and margins in twips."""

    page_width: int = 11906
    page_height: int = 16838
    margin_top: int = 1440
    margin_right: int = 1440
    margin_bottom: int = 1440
    margin_left: int = 1440

    def __post_init__(self) -> None:
        if self.usable_width <= 0:
            raise ValueError(
                f"Margins ({self.margin_left} + {self.margin_right}) leave no room on a page {self.page_width} twips wide"
            )

    @property
    def usable_width(self) -> int:
        """Width between the left and right margins, in twips."""
        return self.page_width - self.margin_left - self.margin_right

    @property
    def usable_width_emu(self) -> int:
        return twips_to_emu(self.usable_width)


DEFAULT_PAGE_GEOMETRY = PageGeometry()


@dataclass(frozen=True, slots=True)
class ImageExtent:
    """Rendered width and height of a drawing in EMU."""

    cx: int
    cy: int


@dataclass(frozen=True, slots=True)
class FigureRecord:
    """A numbered figure, shared by the document body and the package parts."""

    ordinal: int
    data: bytes
    caption: str
    extent: ImageExtent

    @property
    def r_id(self) -> str:
        return f"rId{self.ordinal}"

    @property
    def media_name(self) -> str:
        return f"image{self.ordinal}.{MEDIA_EXTENSION}"

    @property
    def relationship_target(self) -> str:
        """Target relative to ``word/document.xml``."""
        return f"media/{self.media_name}"

    @property
    def part_path(self) -> str:
        return f"word/{self.relationship_target}"


@dataclass(frozen=True, slots=True)
class DocumentLayout:
    """Body markup plus the figures it references, in ordinal order."""

    body_xml: str
    figures: Tuple[FigureRecord, ...] = ()
    geometry: PageGeometry = DEFAULT_PAGE_GEOMETRY

    @property
    def figure_count(self) -> int:
        return len(self.figures)
