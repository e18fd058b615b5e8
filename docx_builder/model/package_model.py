"""Data records describing the parts of an Open Packaging Convention archive."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple


class PartKind(Enum):
    """Whether an archive entry holds bytes or only marks a directory."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True, slots=True)
class DocumentPart:
    """One named member of the output package."""

    path: str
    content: bytes = b""
    kind: PartKind = PartKind.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind is PartKind.DIRECTORY


@dataclass(frozen=True, slots=True)
class RelationshipEntry:
    """A single OPC relationship as written into a ``.rels`` part."""

    r_id: str
    rel_type: str
    target: str


@dataclass(frozen=True, slots=True)
class ContentTypeDeclaration:
    """Extension defaults and per-part overrides for ``[Content_Types].xml``."""

    defaults: Tuple[Tuple[str, str], ...] = ()
    overrides: Tuple[Tuple[str, str], ...] = ()

    def content_type_for(self, part_path: str) -> Optional[str]:
        """Resolve the MIME type a consumer would assign to ``part_path``."""
        part_name = "/" + part_path.lstrip("/")
        for name, content_type in self.overrides:
            if name == part_name:
                return content_type
        # "_rels/.rels" is all extension
        _, dot, extension = part_name.rpartition("/")[2].rpartition(".")
        extension = extension.lower() if dot else ""
        for default_extension, content_type in self.defaults:
            if default_extension.lower() == extension:
                return content_type
        return None


class PartTable:
    """Ordered, path-unique collection of package parts.

    Adding a file part inserts explicit directory parts for each of its
    parent folders that are not present yet.
    """

    def __init__(self) -> None:
        self._parts: Dict[str, DocumentPart] = {}

    def add_directory(self, path: str) -> DocumentPart:
        path = self._validate(path.rstrip("/")) + "/"
        self._ensure_parents(path.rstrip("/"))
        return self._insert(DocumentPart(path=path, kind=PartKind.DIRECTORY))

    def add_file(self, path: str, content: bytes) -> DocumentPart:
        path = self._validate(path)
        self._ensure_parents(path)
        return self._insert(DocumentPart(path=path, content=content, kind=PartKind.FILE))

    def get(self, path: str) -> Optional[DocumentPart]:
        return self._parts.get(path)

    def paths(self) -> List[str]:
        return list(self._parts)

    def files(self) -> List[DocumentPart]:
        return [part for part in self._parts.values() if not part.is_directory]

    def __iter__(self) -> Iterator[DocumentPart]:
        return iter(self._parts.values())

    def __len__(self) -> int:
        return len(self._parts)

    def __contains__(self, path: object) -> bool:
        return path in self._parts

    # ------------------------------------------------------------------
    # Internal helpers
    def _insert(self, part: DocumentPart) -> DocumentPart:
        if part.path in self._parts:
            raise ValueError(f"Duplicate package part: {part.path}")
        self._parts[part.path] = part
        return part

    def _ensure_parents(self, path: str) -> None:
        segments = path.split("/")[:-1]
        for depth in range(1, len(segments) + 1):
            folder = "/".join(segments[:depth]) + "/"
            if folder not in self._parts:
                self._parts[folder] = DocumentPart(path=folder, kind=PartKind.DIRECTORY)

    @staticmethod
    def _validate(path: str) -> str:
        if not path or path.startswith("/") or "\\" in path:
            raise ValueError(f"Invalid package part path: {path!r}")
        if any(segment in ("", ".", "..") for segment in path.split("/")):
            raise ValueError(f"Invalid package part path: {path!r}")
        return path


@dataclass(slots=True)
class PackageManifest:
    """Everything the archive writer needs, assembled before any byte is written."""

    parts: PartTable
    content_types: ContentTypeDeclaration
    relationships: Dict[str, List[RelationshipEntry]] = field(default_factory=dict)
