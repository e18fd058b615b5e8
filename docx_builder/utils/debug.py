"""Helpers to persist intermediate representations for debugging."""
from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict

from docx_builder.errors import SinkWriteFailure
from docx_builder.model.elements import DocumentLayout
from docx_builder.model.package_model import PackageManifest
from docx_builder.utils.units import emu_to_points, twips_to_points


class DebugDumper:
    """Writes a JSON summary of a build onto disk for inspection."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def dump(self, layout: DocumentLayout, manifest: PackageManifest) -> Path:
        """Persist the layout and part table; figure bytes are summarized, not copied."""
        target = self.directory / "package_summary.json"
        payload = json.dumps(self._serialize(layout, manifest), indent=2, ensure_ascii=False)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            target.write_text(payload, encoding="utf-8")
        except OSError as exc:
            raise SinkWriteFailure(str(target), str(exc)) from exc
        return target

    def _serialize(self, layout: DocumentLayout, manifest: PackageManifest) -> Dict[str, Any]:
        return {
            "geometry": asdict(layout.geometry),
            "usable_width_pt": twips_to_points(layout.geometry.usable_width),
            "figures": [
                {
                    "ordinal": figure.ordinal,
                    "r_id": figure.r_id,
                    "part": figure.part_path,
                    "caption": figure.caption,
                    "extent": asdict(figure.extent),
                    "size_pt": [emu_to_points(figure.extent.cx), emu_to_points(figure.extent.cy)],
                    "bytes": len(figure.data),
                }
                for figure in layout.figures
            ],
            "parts": [
                {
                    "path": part.path,
                    "kind": part.kind.value,
                    "bytes": len(part.content),
                    "content_type": None if part.is_directory else manifest.content_types.content_type_for(part.path),
                }
                for part in manifest.parts
            ],
            "relationships": {
                source: [asdict(entry) for entry in entries] for source, entries in manifest.relationships.items()
            },
        }
