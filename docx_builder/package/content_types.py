"""Build the ``[Content_Types].xml`` manifest."""
from __future__ import annotations

import mimetypes
from pathlib import PurePosixPath
from typing import Sequence

from docx_builder.model.elements import FigureRecord
from docx_builder.model.package_model import ContentTypeDeclaration
from docx_builder.utils.xml_utils import XML_DECLARATION, Namespaces, XmlElement

CONTENT_TYPES_PART = "[Content_Types].xml"

CT_XML = "application/xml"
CT_RELATIONSHIPS = "application/vnd.openxmlformats-package.relationships+xml"
CT_MAIN_DOCUMENT = "application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"

# mimetypes does not know every format that ends up in word/media
MEDIA_TYPES = {
    ".svg": "image/svg+xml",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".emf": "image/x-emf",
    ".wmf": "image/x-wmf",
}


def media_type_for(part_path: str) -> str:
    """Determine a media part's MIME type from its extension."""
    ext = PurePosixPath(part_path).suffix.lower()
    if ext in MEDIA_TYPES:
        return MEDIA_TYPES[ext]
    mime_type, _ = mimetypes.guess_type(part_path)
    return mime_type or "application/octet-stream"


def build_declaration(document_part: str, figures: Sequence[FigureRecord]) -> ContentTypeDeclaration:
    """Defaults for xml/rels, an override for the document and one per figure."""
    overrides = [(f"/{document_part}", CT_MAIN_DOCUMENT)]
    overrides.extend((f"/{figure.part_path}", media_type_for(figure.part_path)) for figure in figures)
    return ContentTypeDeclaration(
        defaults=(("xml", CT_XML), ("rels", CT_RELATIONSHIPS)),
        overrides=tuple(overrides),
    )


def content_types_xml(declaration: ContentTypeDeclaration) -> bytes:
    root = XmlElement("Types", {"xmlns": Namespaces.CONTENT_TYPES["ct"]})
    for extension, content_type in declaration.defaults:
        root.add("Default", {"Extension": extension, "ContentType": content_type})
    for part_name, content_type in declaration.overrides:
        root.add("Override", {"PartName": part_name, "ContentType": content_type})
    return (XML_DECLARATION + root.render()).encode("utf-8")
