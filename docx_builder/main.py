"""Entry-point for the figures-and-text to DOCX pipeline."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional, Sequence

from docx_builder.errors import DocxBuildError
from docx_builder.layout.layout_engine import LayoutEngine
from docx_builder.model.elements import DEFAULT_PAGE_GEOMETRY, ContentItem, DocumentLayout, PageGeometry
from docx_builder.package.package_builder import PackageBuilder
from docx_builder.package.sink import Sink
from docx_builder.parser.manifest_loader import load_content_items
from docx_builder.utils.debug import DebugDumper
from docx_builder.utils.logger import get_logger, set_verbosity

LOGGER = get_logger(__name__)


def layout_document(items: Sequence[ContentItem], geometry: Optional[PageGeometry] = None) -> DocumentLayout:
    """Compute figure geometry and body markup for ``items``."""
    return LayoutEngine(geometry or DEFAULT_PAGE_GEOMETRY).layout(items)


def build_docx(
    items: Sequence[ContentItem],
    destination: Sink,
    *,
    geometry: Optional[PageGeometry] = None,
    debug_dir: Optional[Path] = None,
) -> DocumentLayout:
    """Lay out ``items`` and write the finished package to ``destination``."""
    layout = layout_document(items, geometry)
    builder = PackageBuilder(layout)
    if debug_dir is not None:
        DebugDumper(debug_dir).dump(layout, builder.manifest())
    builder.write(destination)
    return layout


def main(
    manifest_file: str,
    output: Optional[str] = None,
    *,
    workers: int = 1,
    debug_dir: Optional[str] = None,
) -> Path:
    """Run the manifest -> layout -> package pipeline."""
    manifest_path = Path(manifest_file).resolve()
    output_path = Path(output).resolve() if output else manifest_path.with_suffix(".docx")

    LOGGER.info("Building %s from %s", output_path.name, manifest_path.name)
    items = load_content_items(manifest_path, workers=workers)
    layout = build_docx(items, output_path, debug_dir=Path(debug_dir) if debug_dir else None)
    LOGGER.info("DOCX generated at %s (%d items, %d figures)", output_path, len(items), layout.figure_count)
    return output_path


def cli(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Assemble SVG figures and text paragraphs into a DOCX file")
    parser.add_argument("manifest", help="JSON manifest listing figure and text entries in order")
    parser.add_argument("--output", "-o", help="Path of the .docx to write (default: manifest name with .docx)")
    parser.add_argument("--workers", type=int, default=1, help="Read figure files with this many threads")
    parser.add_argument("--debug", metavar="DIR", help="Write a JSON summary of the package into DIR")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    set_verbosity(args.verbose)
    try:
        main(args.manifest, args.output, workers=max(1, args.workers), debug_dir=args.debug)
    except DocxBuildError as exc:
        LOGGER.error("Failed to generate DOCX: %s", exc)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(cli())
