"""Tests for reading content manifests and figure files."""
import json
import tempfile
import unittest
from pathlib import Path

from docx_builder.errors import InputReadFailure, ManifestError
from docx_builder.model.elements import FigureItem, ImageSize, TextItem
from docx_builder.parser.manifest_loader import (
    FIGURE,
    ContentManifest,
    ManifestEntry,
    items_from_entries,
    load_content_items,
)


class ManifestLoaderTest(unittest.TestCase):
    """Validate manifest parsing and ordered figure resolution."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.base = Path(self._tmp.name)
        for i in range(1, 6):
            (self.base / f"input{i}.svg").write_bytes(f"<svg>{i}</svg>".encode())

    def _write_manifest(self, payload) -> Path:
        path = self.base / "manifest.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    def test_entries_resolved_in_order(self) -> None:
        path = self._write_manifest(
            [
                {"type": "figure", "svg": "input1.svg", "caption": "Figure 1: First SVG image."},
                {"type": "text", "text": "This is a paragraph."},
                {"type": "figure", "svg": "input2.svg", "legend": "Figure 2: Second SVG image."},
            ]
        )
        items = load_content_items(path)

        self.assertEqual(
            items,
            [
                FigureItem(data=b"<svg>1</svg>", caption="Figure 1: First SVG image."),
                TextItem(body="This is a paragraph."),
                FigureItem(data=b"<svg>2</svg>", caption="Figure 2: Second SVG image."),
            ],
        )

    def test_threaded_reads_keep_manifest_order(self) -> None:
        rows = [{"type": "figure", "svg": f"input{i}.svg", "caption": str(i)} for i in range(1, 6)]
        items = items_from_entries(rows, self.base, workers=4)
        self.assertEqual([item.caption for item in items], ["1", "2", "3", "4", "5"])
        self.assertEqual(items[4].data, b"<svg>5</svg>")

    def test_object_with_entries_key_and_source_size(self) -> None:
        path = self._write_manifest(
            {"entries": [{"type": "figure", "svg": "input1.svg", "width_emu": 400, "height_emu": 300}]}
        )
        (item,) = load_content_items(path)
        self.assertEqual(item.source_size, ImageSize(400, 300))
        self.assertEqual(item.caption, "")

    def test_missing_figure_file(self) -> None:
        path = self._write_manifest([{"type": "text", "text": "x"}, {"type": "figure", "svg": "missing.svg"}])
        with self.assertRaises(InputReadFailure) as ctx:
            load_content_items(path)
        self.assertEqual(ctx.exception.item_index, 1)
        self.assertTrue(ctx.exception.source.endswith("missing.svg"))

    def test_missing_manifest_file(self) -> None:
        with self.assertRaises(InputReadFailure):
            ContentManifest.load(self.base / "nope.json")

    def test_malformed_manifests(self) -> None:
        cases = [
            {"type": "figure"},
            [{"type": "video", "src": "x"}],
            [{"type": "text"}],
            [{"type": "figure", "svg": "input1.svg", "width_emu": 10}],
            [{"type": "figure", "svg": "input1.svg", "width_emu": 0, "height_emu": 10}],
            ["just a string"],
        ]
        for payload in cases:
            with self.subTest(payload=payload), self.assertRaises(ManifestError):
                ContentManifest.from_data(payload, self.base)

    def test_figure_entry_without_path_rejected(self) -> None:
        manifest = ContentManifest(entries=[ManifestEntry(kind=FIGURE, text="caption")], base_dir=self.base)
        with self.assertRaises(ManifestError):
            manifest.resolve()

    def test_invalid_json(self) -> None:
        path = self.base / "broken.json"
        path.write_text("[{", encoding="utf-8")
        with self.assertRaises(ManifestError):
            ContentManifest.load(path)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
