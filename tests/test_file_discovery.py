"""Tests for input discovery."""

import tempfile
from pathlib import Path

from sharpscaffold.adapters.io.file_discovery import FileDiscoveryService
from sharpscaffold.config.models import DiscoveryConfig


class TestFileDiscoveryService:
    """Test expansion of command-line paths."""

    def setup_method(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        for relative in ["src/B.cs", "src/A.cs", "src/sub/C.cs", "src/bin/Gen.cs", "src/obj/X.cs", "src/notes.txt"]:
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("class X { }")

    def teardown_method(self):
        self.temp_dir.cleanup()

    def test_directory_expands_sorted_and_excludes(self):
        found = FileDiscoveryService().discover([self.root / "src"])

        assert [Path(p).relative_to(self.root).as_posix() for p in found] == [
            "src/A.cs",
            "src/B.cs",
            "src/sub/C.cs",
        ]

    def test_files_kept_in_caller_order_without_duplicates(self):
        b = self.root / "src" / "B.cs"
        a = self.root / "src" / "A.cs"

        found = FileDiscoveryService().discover([b, a, b])

        assert found == [str(b), str(a)]

    def test_missing_paths_are_kept(self):
        missing = self.root / "Nope.cs"
        assert FileDiscoveryService().discover([missing]) == [str(missing)]

    def test_custom_patterns(self):
        service = FileDiscoveryService(DiscoveryConfig(patterns=["*.cs"], exclude_dirs=[]))

        found = service.discover([self.root / "src"])

        assert [Path(p).name for p in found] == ["A.cs", "B.cs"]
