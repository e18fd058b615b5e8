"""Exceptions raised while building a DOCX package.

Every failure aborts the current build; none of them is retried.
"""
from __future__ import annotations

from typing import Optional


class DocxBuildError(Exception):
    """Base class for all build failures."""


class ManifestError(DocxBuildError):
    """The content manifest is malformed or references unknown entry types."""


class InputReadFailure(DocxBuildError):
    """Bytes for a figure could not be obtained."""

    def __init__(self, source: str, item_index: Optional[int] = None, reason: Optional[str] = None) -> None:
        self.source = source
        self.item_index = item_index
        location = f" (item {item_index})" if item_index is not None else ""
        detail = f": {reason}" if reason else ""
        super().__init__(f"Failed to read figure {source!r}{location}{detail}")


class SinkWriteFailure(DocxBuildError):
    """The destination could not be created or written to."""

    def __init__(self, destination: str, reason: Optional[str] = None) -> None:
        self.destination = destination
        detail = f": {reason}" if reason else ""
        super().__init__(f"Failed to write package to {destination}{detail}")


class PartWriteFailure(DocxBuildError):
    """A single archive entry could not be created or filled."""

    def __init__(self, part_path: str, reason: Optional[str] = None) -> None:
        self.part_path = part_path
        detail = f": {reason}" if reason else ""
        super().__init__(f"Failed to write package part {part_path!r}{detail}")
