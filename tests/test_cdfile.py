"""Tests for the directory handoff file."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from lazynav.cdfile import broadcast_change_directory


class BroadcastChangeDirectoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.cd_file = self.root / ".lazynav-cd"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_writes_absolute_path_without_newline(self) -> None:
        broadcast_change_directory(self.root / "project", self.cd_file)
        self.assertEqual(self.cd_file.read_text(encoding="utf-8"), str(self.root / "project"))

    def test_replaces_existing_file(self) -> None:
        self.cd_file.write_text("/somewhere/else/entirely", encoding="utf-8")
        broadcast_change_directory(self.root, self.cd_file)
        self.assertEqual(self.cd_file.read_text(encoding="utf-8"), str(self.root))

    def test_relative_directory_is_made_absolute(self) -> None:
        broadcast_change_directory(Path("sub"), self.cd_file)
        self.assertEqual(self.cd_file.read_text(encoding="utf-8"), os.path.join(os.getcwd(), "sub"))


if __name__ == "__main__":
    unittest.main()
