import os
import pytest
from pathlib import Path

from archscope.scanner import (
    ProjectScanner,
    find_schema_file,
    is_component_file,
    is_route_handler,
    node_kind,
    read_text,
)
from archscope.types import NodeKind


class TestClassification:
    """Test path-based file classification."""

    def test_route_handler_names(self):
        assert is_route_handler(Path("app/api/users/route.ts"))
        assert is_route_handler(Path("app/api/users/route.js"))
        assert not is_route_handler(Path("app/api/users/routes.ts"))
        assert not is_route_handler(Path("app/api/users/handler.ts"))

    def test_component_requires_ui_extension_and_capital(self):
        assert is_component_file(Path("components/Button.tsx"))
        assert is_component_file(Path("components/Card.jsx"))
        assert not is_component_file(Path("components/button.tsx"))
        assert not is_component_file(Path("components/Button.ts"))

    def test_node_kind_uses_directory_segments(self):
        assert node_kind("components/Header.tsx") == NodeKind.COMPONENT
        assert node_kind("src/components/ui/Button.tsx") == NodeKind.COMPONENT
        assert node_kind("lib/db.ts") == NodeKind.LIB
        assert node_kind("src/utils/format.ts") == NodeKind.LIB
        assert node_kind("app/api/users/route.ts") == NodeKind.API
        assert node_kind("app/page.tsx") == NodeKind.PAGE
        assert node_kind("pages/index.tsx") == NodeKind.PAGE
        assert node_kind("middleware.ts") == NodeKind.OTHER

    def test_schema_file_first_match_wins(self, tmp_path: Path, make_file):
        assert find_schema_file(tmp_path) is None

        make_file("prisma/schema/schema.prisma", "model A {}")
        assert find_schema_file(tmp_path) == tmp_path / "prisma/schema/schema.prisma"

        make_file("schema.prisma", "model B {}")
        assert find_schema_file(tmp_path) == tmp_path / "schema.prisma"

        make_file("prisma/schema.prisma", "model C {}")
        assert find_schema_file(tmp_path) == tmp_path / "prisma/schema.prisma"

    def test_read_text_soft_failure(self, tmp_path: Path, make_file):
        path = make_file("ok.ts", "const a = 1;")
        assert read_text(path) == "const a = 1;"
        assert read_text(tmp_path / "missing.ts") is None

        latin1 = tmp_path / "legacy.ts"
        latin1.write_bytes(b"// \xa9 Acme\nconst b = 2;")
        assert read_text(latin1) == "// \ufffd Acme\nconst b = 2;"


class TestProjectScanner:
    """Test bounded directory traversal."""

    def test_skips_ignored_directories(self, sample_project: Path):
        scanner = ProjectScanner(str(sample_project))
        files = [p.relative_to(sample_project).as_posix() for p in scanner.walk()]

        assert "lib/db.ts" in files
        assert not any(f.startswith("node_modules/") for f in files)
        assert not any(f.startswith(".next/") for f in files)

    def test_walk_order_is_deterministic(self, tmp_path: Path, make_file):
        make_file("b/z.ts")
        make_file("b/a.ts")
        make_file("a/nested/x.ts")
        make_file("a/y.ts")
        make_file("root.ts")

        scanner = ProjectScanner(str(tmp_path))
        files = [p.relative_to(tmp_path).as_posix() for p in scanner.walk()]

        assert files == ["root.ts", "a/y.ts", "a/nested/x.ts", "b/a.ts", "b/z.ts"]
        assert files == [p.relative_to(tmp_path).as_posix() for p in scanner.walk()]

    def test_file_cap_truncates_reproducibly(self, tmp_path: Path, make_file):
        for i in range(10):
            make_file(f"src/file{i}.ts", "")
        make_file("src/notes.md", "")

        scanner = ProjectScanner(str(tmp_path), max_files=4)
        first = scanner.collect_source_files()
        second = scanner.collect_source_files()

        assert len(first) == 4
        assert first == second
        assert [p.name for p in first] == ["file0.ts", "file1.ts", "file2.ts", "file3.ts"]

    def test_source_files_only(self, sample_project: Path):
        scanner = ProjectScanner(str(sample_project))
        files = scanner.collect_source_files()

        assert all(p.suffix in (".ts", ".tsx", ".js", ".jsx") for p in files)
        assert len(files) == 12

    def test_extra_ignored_dirs(self, tmp_path: Path, make_file):
        make_file("keep/a.ts")
        make_file("fixtures/b.ts")

        scanner = ProjectScanner(str(tmp_path), ignored_dirs={"fixtures"})
        files = [p.name for p in scanner.walk()]

        assert files == ["a.ts"]

    def test_symlink_cycle_terminates(self, tmp_path: Path, make_file):
        make_file("pkg/a.ts")
        try:
            os.symlink(tmp_path / "pkg", tmp_path / "pkg" / "loop", target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("Symlinks not supported")

        scanner = ProjectScanner(str(tmp_path))
        files = [p.name for p in scanner.walk()]

        assert files == ["a.ts"]

    def test_missing_start_yields_nothing(self, tmp_path: Path):
        scanner = ProjectScanner(str(tmp_path))
        assert list(scanner.walk(tmp_path / "nope")) == []
