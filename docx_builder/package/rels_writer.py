"""Write Open Packaging Convention relationship parts."""
from __future__ import annotations

from typing import Iterable, List, Sequence

from docx_builder.model.elements import FigureRecord
from docx_builder.model.package_model import RelationshipEntry
from docx_builder.utils.xml_utils import XML_DECLARATION, Namespaces, XmlElement

WORD_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"

RELTYPE_OFFICE_DOCUMENT = f"{WORD_REL_NS}/officeDocument"
RELTYPE_IMAGE = f"{WORD_REL_NS}/image"

MAIN_DOCUMENT_PART = "word/document.xml"


def package_relationships() -> List[RelationshipEntry]:
    """Root relationships: the single link from the package to the main document."""
    return [RelationshipEntry(r_id="rId1", rel_type=RELTYPE_OFFICE_DOCUMENT, target=MAIN_DOCUMENT_PART)]


def document_relationships(figures: Sequence[FigureRecord]) -> List[RelationshipEntry]:
    """One image relationship per figure, ``rId{n}`` -> ``media/image{n}.svg``."""
    return [
        RelationshipEntry(r_id=figure.r_id, rel_type=RELTYPE_IMAGE, target=figure.relationship_target)
        for figure in figures
    ]


def relationships_xml(entries: Iterable[RelationshipEntry]) -> bytes:
    """Serialize a ``.rels`` part."""
    root = XmlElement("Relationships", {"xmlns": Namespaces.RELS["rel"]})
    seen = set()
    for entry in entries:
        if entry.r_id in seen:
            raise ValueError(f"Duplicate relationship id {entry.r_id}")
        seen.add(entry.r_id)
        root.add("Relationship", {"Id": entry.r_id, "Type": entry.rel_type, "Target": entry.target})
    return (XML_DECLARATION + root.render()).encode("utf-8")
