"""Assemble a DOCX archive from a computed document layout."""
from __future__ import annotations

import io
import stat
import zipfile
from typing import BinaryIO

from docx_builder.errors import PartWriteFailure
from docx_builder.model.elements import DocumentLayout, PageGeometry
from docx_builder.model.package_model import DocumentPart, PackageManifest, PartTable
from docx_builder.package.content_types import CONTENT_TYPES_PART, build_declaration, content_types_xml
from docx_builder.package.rels_writer import (
    MAIN_DOCUMENT_PART,
    document_relationships,
    package_relationships,
    relationships_xml,
)
from docx_builder.package.sink import Sink, write_package
from docx_builder.utils.logger import get_logger
from docx_builder.utils.xml_utils import XML_DECLARATION

LOGGER = get_logger(__name__)

PACKAGE_REL_PATH = "_rels/.rels"
DOCUMENT_XML_PATH = MAIN_DOCUMENT_PART
DOCUMENT_RELS_PATH = "word/_rels/document.xml.rels"
MEDIA_DIR = "word/media/"

# Directory entries written up front; some consumers list folders only from these.
PACKAGE_DIRECTORIES = ("_rels/", "word/", "word/_rels/", MEDIA_DIR)

# Fixed entry timestamp so identical input yields identical bytes.
ZIP_TIMESTAMP = (1980, 1, 1, 0, 0, 0)
_MSDOS_DIRECTORY = 0x10


def document_xml(layout: DocumentLayout) -> bytes:
    """Wrap the body markup in the static ``w:document`` envelope."""
    page: PageGeometry = layout.geometry
    return f"""{XML_DECLARATION}
<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main"
            xmlns:r="http://schemas.openxmlformats.org/officeDocument/2006/relationships"
            xmlns:wp="http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing"
            xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main"
            xmlns:pic="http://schemas.openxmlformats.org/drawingml/2006/picture">
  <w:body>{layout.body_xml}
    <w:sectPr>
      <w:pgSz w:w="{page.page_width}" w:h="{page.page_height}"/>
      <w:pgMar w:top="{page.margin_top}" w:right="{page.margin_right}" w:bottom="{page.margin_bottom}" w:left="{page.margin_left}"/>
    </w:sectPr>
  </w:body>
</w:document>""".encode("utf-8")


class PackageBuilder:
    """Turn a :class:`DocumentLayout` into a WordprocessingML package."""

    def __init__(self, layout: DocumentLayout, *, compression: int = zipfile.ZIP_DEFLATED) -> None:
        self._layout = layout
        self._compression = compression

    # ------------------------------------------------------------------
    # Public API
    def manifest(self) -> PackageManifest:
        """Collect every part, relationship and content type of the package."""
        figures = self._layout.figures
        content_types = build_declaration(DOCUMENT_XML_PATH, figures)
        relationships = {
            PACKAGE_REL_PATH: package_relationships(),
            DOCUMENT_RELS_PATH: document_relationships(figures),
        }

        parts = PartTable()
        for directory in PACKAGE_DIRECTORIES:
            parts.add_directory(directory)
        parts.add_file(CONTENT_TYPES_PART, content_types_xml(content_types))
        parts.add_file(PACKAGE_REL_PATH, relationships_xml(relationships[PACKAGE_REL_PATH]))
        parts.add_file(DOCUMENT_XML_PATH, document_xml(self._layout))
        parts.add_file(DOCUMENT_RELS_PATH, relationships_xml(relationships[DOCUMENT_RELS_PATH]))
        for figure in figures:
            parts.add_file(figure.part_path, figure.data)

        return PackageManifest(parts=parts, content_types=content_types, relationships=relationships)

    def build_bytes(self) -> bytes:
        """Return the finished archive as bytes."""
        buffer = io.BytesIO()
        self.write_archive(buffer)
        return buffer.getvalue()

    def write(self, destination: Sink) -> None:
        """Build the archive and deliver it to ``destination``."""
        write_package(self.build_bytes(), destination)

    def write_archive(self, stream: BinaryIO) -> None:
        """Write the archive entries, in table order, into ``stream``."""
        manifest = self.manifest()
        LOGGER.debug(
            "Writing %d parts (%d figures)", len(manifest.parts), self._layout.figure_count
        )
        with zipfile.ZipFile(stream, "w") as archive:
            for part in manifest.parts:
                self._write_part(archive, part)

    # ------------------------------------------------------------------
    # Internal helpers
    def _write_part(self, archive: zipfile.ZipFile, part: DocumentPart) -> None:
        info = zipfile.ZipInfo(part.path, date_time=ZIP_TIMESTAMP)
        if part.is_directory:
            info.compress_type = zipfile.ZIP_STORED
            info.external_attr = ((stat.S_IFDIR | 0o755) << 16) | _MSDOS_DIRECTORY
        else:
            info.compress_type = self._compression
            info.external_attr = (stat.S_IFREG | 0o644) << 16
        try:
            archive.writestr(info, part.content)
        except (OSError, ValueError, zipfile.LargeZipFile) as exc:
            raise PartWriteFailure(part.path, str(exc)) from exc


def build_package(layout: DocumentLayout) -> bytes:
    """Convenience function returning the archive bytes for ``layout``."""
    return PackageBuilder(layout).build_bytes()
