"""Load a JSON content manifest and resolve figure files into content items."""
from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence

from docx_builder.errors import InputReadFailure, ManifestError
from docx_builder.model.elements import ContentItem, FigureItem, ImageSize, TextItem
from docx_builder.utils.logger import get_logger

LOGGER = get_logger(__name__)

FIGURE = "figure"
TEXT = "text"


@dataclass(frozen=True, slots=True)
class ManifestEntry:
    """One manifest row before any file has been read."""

    kind: str
    text: str
    image_path: Optional[Path] = None
    source_size: Optional[ImageSize] = None


@dataclass(slots=True)
class ContentManifest:
    """Ordered manifest entries plus the directory relative paths resolve against."""

    entries: List[ManifestEntry]
    base_dir: Path

    @classmethod
    def load(cls, manifest_path: Path) -> "ContentManifest":
        """Read and validate a manifest file."""
        try:
            raw = json.loads(manifest_path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise InputReadFailure(str(manifest_path), reason=str(exc)) from exc
        except json.JSONDecodeError as exc:
            raise ManifestError(f"{manifest_path} is not valid JSON: {exc}") from exc

        manifest = cls.from_data(raw, manifest_path.resolve().parent)
        LOGGER.debug("Loaded %d manifest entries from %s", len(manifest.entries), manifest_path.name)
        return manifest

    @classmethod
    def from_data(cls, raw: Any, base_dir: Path) -> "ContentManifest":
        if isinstance(raw, Mapping):
            raw = raw.get("entries")
        if not isinstance(raw, list):
            raise ManifestError("Manifest must be a list of entries or an object with an 'entries' list")
        return cls(entries=[cls._parse_entry(index, row) for index, row in enumerate(raw)], base_dir=base_dir)

    def resolve(self, workers: int = 1) -> List[ContentItem]:
        """Read every figure and return content items in manifest order.

        With ``workers > 1`` figure files are read concurrently; the result
        order is always the manifest order.
        """
        if workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                return list(pool.map(self._resolve_entry, range(len(self.entries)), self.entries))
        return [self._resolve_entry(index, entry) for index, entry in enumerate(self.entries)]

    # ------------------------------------------------------------------
    # Internal helpers
    def _resolve_entry(self, index: int, entry: ManifestEntry) -> ContentItem:
        if entry.kind == TEXT:
            return TextItem(body=entry.text)
        if entry.image_path is None:
            raise ManifestError(f"Entry {index}: figure has no image path")
        path = entry.image_path if entry.image_path.is_absolute() else self.base_dir / entry.image_path
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise InputReadFailure(str(path), item_index=index, reason=str(exc)) from exc
        return FigureItem(data=data, caption=entry.text, source_size=entry.source_size)

    @staticmethod
    def _parse_entry(index: int, row: Any) -> ManifestEntry:
        if not isinstance(row, Mapping):
            raise ManifestError(f"Entry {index} must be an object, got {type(row).__name__}")
        kind = row.get("type")
        if kind == TEXT:
            return ManifestEntry(kind=TEXT, text=_require_str(row, "text", index))
        if kind == FIGURE:
            caption = row.get("caption", row.get("legend", ""))
            if not isinstance(caption, str):
                raise ManifestError(f"Entry {index}: 'caption' must be a string")
            return ManifestEntry(
                kind=FIGURE,
                text=caption,
                image_path=Path(_require_str(row, "svg", index)),
                source_size=_parse_size(row, index),
            )
        raise ManifestError(f"Entry {index}: unknown type {kind!r} (expected {FIGURE!r} or {TEXT!r})")


def _require_str(row: Mapping[str, Any], key: str, index: int) -> str:
    value = row.get(key)
    if not isinstance(value, str):
        raise ManifestError(f"Entry {index}: {key!r} is required and must be a string")
    return value


def _parse_size(row: Mapping[str, Any], index: int) -> Optional[ImageSize]:
    width, height = row.get("width_emu"), row.get("height_emu")
    if width is None and height is None:
        return None
    if not isinstance(width, int) or not isinstance(height, int) or isinstance(width, bool) or isinstance(height, bool):
        raise ManifestError(f"Entry {index}: 'width_emu' and 'height_emu' must both be integers")
    try:
        return ImageSize(width_emu=width, height_emu=height)
    except ValueError as exc:
        raise ManifestError(f"Entry {index}: {exc}") from exc


def load_content_items(manifest_path: Path, workers: int = 1) -> List[ContentItem]:
    """Convenience function: load a manifest and read all of its figures."""
    return ContentManifest.load(manifest_path).resolve(workers=workers)


def items_from_entries(entries: Sequence[Mapping[str, Any]], base_dir: Path, workers: int = 1) -> List[ContentItem]:
    """Resolve in-memory manifest rows, e.g. ones built by a calling program."""
    return ContentManifest.from_data(list(entries), base_dir).resolve(workers=workers)
