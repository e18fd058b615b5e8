"""Tests for the part table invariants."""
import unittest

from docx_builder.model.package_model import PartKind, PartTable


class PartTableTest(unittest.TestCase):
    def test_file_adds_missing_parent_directories_first(self) -> None:
        table = PartTable()
        table.add_file("word/media/image1.svg", b"<svg/>")
        self.assertEqual(table.paths(), ["word/", "word/media/", "word/media/image1.svg"])
        self.assertIs(table.get("word/").kind, PartKind.DIRECTORY)

    def test_existing_directories_not_repeated(self) -> None:
        table = PartTable()
        table.add_directory("word/")
        table.add_file("word/document.xml", b"")
        table.add_file("word/styles.xml", b"")
        self.assertEqual(table.paths(), ["word/", "word/document.xml", "word/styles.xml"])

    def test_duplicate_paths_rejected(self) -> None:
        table = PartTable()
        table.add_file("a.xml", b"1")
        with self.assertRaises(ValueError):
            table.add_file("a.xml", b"2")
        table.add_directory("word/")
        with self.assertRaises(ValueError):
            table.add_directory("word")

    def test_invalid_paths_rejected(self) -> None:
        table = PartTable()
        for path in ("/word/document.xml", "word//x.xml", "word\\x.xml", "../x.xml", ""):
            with self.subTest(path=path), self.assertRaises(ValueError):
                table.add_file(path, b"")

    def test_files_excludes_directories(self) -> None:
        table = PartTable()
        table.add_file("_rels/.rels", b"r")
        self.assertEqual([part.path for part in table.files()], ["_rels/.rels"])
        self.assertEqual(len(table), 2)
        self.assertIn("_rels/", table)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
