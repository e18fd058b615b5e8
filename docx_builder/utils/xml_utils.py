"""Helpers to emit well-formed OpenXML markup."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional
from xml.sax.saxutils import escape

_QUOTE_ENTITIES = {'"': "&quot;", "'": "&apos;"}
# Parsers normalize a literal CR to LF, so it is written as a reference
_TEXT_ENTITIES = {**_QUOTE_ENTITIES, "\r": "&#13;"}
_ATTR_ENTITIES = {**_TEXT_ENTITIES, "\n": "&#10;", "\t": "&#9;"}

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'


@dataclass(frozen=True)
class Namespaces:
    """Common OpenXML namespace URIs used across writers."""

    WORD: Dict[str, str] = None  # type: ignore[assignment]
    RELS: Dict[str, str] = None  # type: ignore[assignment]
    CONTENT_TYPES: Dict[str, str] = None  # type: ignore[assignment]
    DRAWING: Dict[str, str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:  # pragma: no cover
        raise RuntimeError("Namespaces should not be instantiated")


Namespaces.WORD = {  # type: ignore[attr-defined]
    "w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
    "r": "http://schemas.openxmlformats.org/officeDocument/2006/relationships",
}
Namespaces.RELS = {  # type: ignore[attr-defined]
    "rel": "http://schemas.openxmlformats.org/package/2006/relationships",
}
Namespaces.CONTENT_TYPES = {  # type: ignore[attr-defined]
    "ct": "http://schemas.openxmlformats.org/package/2006/content-types",
}
Namespaces.DRAWING = {  # type: ignore[attr-defined]
    "a": "http://schemas.openxmlformats.org/drawingml/2006/main",
    "wp": "http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing",
    "pic": "http://schemas.openxmlformats.org/drawingml/2006/picture",
}


def escape_text(value: str) -> str:
    """Escape ``&``, ``<``, ``>``, ``"``, ``'`` and CR for use as element content."""
    return escape(value, _TEXT_ENTITIES)


def escape_attribute(value: str) -> str:
    """Escape a value for a double-quoted attribute, keeping whitespace intact."""
    return escape(value, _ATTR_ENTITIES)


@dataclass(slots=True)
class XmlElement:
    """Minimal element tree node that serializes with escaping applied.

    Tags and attribute names are trusted, prefixed names (``w:p``); text and
    attribute values are always escaped on output.
    """

    tag: str
    attrs: Dict[str, object] = field(default_factory=dict)
    children: List["XmlElement"] = field(default_factory=list)
    text: Optional[str] = None

    def add(self, tag: str, attrs: Optional[Dict[str, object]] = None, text: Optional[str] = None) -> "XmlElement":
        """Append a new child element and return it."""
        if self.text is not None:
            raise ValueError(f"<{self.tag}> already holds text and cannot take child elements")
        child = XmlElement(tag, dict(attrs or {}), text=text)
        self.children.append(child)
        return child

    def render(self, depth: int = 0, indent: str = "  ") -> str:
        """Serialize the element, one child per line, starting at ``depth``."""
        pad = "\n" + indent * depth
        attrs = "".join(f' {name}="{escape_attribute(str(value))}"' for name, value in self.attrs.items())
        if self.text is not None:
            return f"{pad}<{self.tag}{attrs}>{escape_text(self.text)}</{self.tag}>"
        if not self.children:
            return f"{pad}<{self.tag}{attrs}/>"
        inner = "".join(child.render(depth + 1, indent) for child in self.children)
        return f"{pad}<{self.tag}{attrs}>{inner}{pad}</{self.tag}>"
