"""Tests for claude_starter.detection.project."""

from __future__ import annotations

from typing import TYPE_CHECKING

from claude_starter.config import StarterConfig
from claude_starter.detection.classifier import StackDescriptor
from claude_starter.detection.project import (
    ProjectInfo,
    analyze_project,
    build_ignore_predicate,
    count_source_files,
    detect_metadata,
    read_gitignore,
)
from claude_starter.detection.signals import collect_signals

if TYPE_CHECKING:
    from pathlib import Path


class TestIgnorePredicate:
    def test_exact_prefix_and_glob(self) -> None:
        ignore = build_ignore_predicate(["node_modules", "*.log", "/coverage"])
        assert ignore("node_modules")
        assert ignore("node_modules/react")
        assert ignore("debug.log")
        assert ignore("coverage")
        assert not ignore("src")

    def test_empty_patterns_ignore_nothing(self) -> None:
        ignore = build_ignore_predicate(["", "/"])
        assert not ignore("anything")


class TestGitignore:
    def test_comments_and_blanks_dropped(self, tmp_path: Path) -> None:
        (tmp_path / ".gitignore").write_text("# comment\n\ngenerated/\n*.tmp\n")
        assert read_gitignore(tmp_path) == ["generated", "*.tmp"]

    def test_missing_gitignore(self, tmp_path: Path) -> None:
        assert read_gitignore(tmp_path) == []


class TestCountSourceFiles:
    def test_counts_source_extensions_only(self, tmp_path: Path) -> None:
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "app.ts").write_text("")
        (tmp_path / "src" / "util.py").write_text("")
        (tmp_path / "README.md").write_text("")
        assert count_source_files(tmp_path) == 2

    def test_default_ignores(self, tmp_path: Path) -> None:
        (tmp_path / "node_modules" / "pkg").mkdir(parents=True)
        (tmp_path / "node_modules" / "pkg" / "index.js").write_text("")
        (tmp_path / ".venv").mkdir()
        (tmp_path / ".venv" / "site.py").write_text("")
        (tmp_path / "main.go").write_text("")
        assert count_source_files(tmp_path) == 1

    def test_gitignore_patterns_applied(self, tmp_path: Path) -> None:
        (tmp_path / ".gitignore").write_text("generated/\n*.gen.ts\n")
        (tmp_path / "generated").mkdir()
        (tmp_path / "generated" / "a.ts").write_text("")
        (tmp_path / "b.gen.ts").write_text("")
        (tmp_path / "c.ts").write_text("")
        assert count_source_files(tmp_path) == 1

    def test_extra_ignores(self, tmp_path: Path) -> None:
        (tmp_path / "vendor").mkdir()
        (tmp_path / "vendor" / "lib.rb").write_text("")
        (tmp_path / "app.rb").write_text("")
        assert count_source_files(tmp_path, extra_ignores=["vendor"]) == 1

    def test_depth_cap(self, tmp_path: Path) -> None:
        deep = tmp_path / "a" / "b" / "c"
        deep.mkdir(parents=True)
        (tmp_path / "a" / "top.py").write_text("")
        (deep / "deep.py").write_text("")
        assert count_source_files(tmp_path, max_depth=1) == 1
        assert count_source_files(tmp_path, max_depth=3) == 2

    def test_symlink_loop_not_followed(self, tmp_path: Path) -> None:
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "main.py").write_text("")
        (tmp_path / "src" / "loop").symlink_to(tmp_path, target_is_directory=True)
        assert count_source_files(tmp_path) == 1


class TestMetadata:
    def test_package_json_name_and_description(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text(
            '{"name": "@acme/web", "description": "Storefront"}'
        )
        name, description = detect_metadata(tmp_path, collect_signals(tmp_path))
        assert name == "web"
        assert description == "Storefront"

    def test_pyproject_project_table(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(
            '[project]\nname = "billing"\ndescription = "Invoices"\n'
        )
        name, description = detect_metadata(tmp_path, collect_signals(tmp_path))
        assert (name, description) == ("billing", "Invoices")

    def test_poetry_table(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[tool.poetry]\nname = "legacy-app"\n')
        name, description = detect_metadata(tmp_path, collect_signals(tmp_path))
        assert name == "legacy-app"
        assert description is None

    def test_malformed_pyproject_falls_back_to_dir_name(self, tmp_path: Path) -> None:
        project = tmp_path / "my-dir"
        project.mkdir()
        (project / "pyproject.toml").write_text("[project\nname=")
        name, description = detect_metadata(project, collect_signals(project))
        assert name == "my-dir"
        assert description is None


class TestAnalyzeProject:
    def test_empty_directory(self, tmp_path: Path) -> None:
        info = analyze_project(tmp_path)
        assert info.file_count == 0
        assert not info.is_existing
        assert info.stack == StackDescriptor()
        assert info.name == tmp_path.name

    def test_existing_project(self, tmp_path: Path) -> None:
        (tmp_path / "requirements.txt").write_text("fastapi\n")
        (tmp_path / "main.py").write_text("")
        info = analyze_project(tmp_path)
        assert info.is_existing
        assert info.stack.languages == ("python",)
        assert info.stack.frameworks == ("fastapi",)

    def test_config_depth_applies(self, tmp_path: Path) -> None:
        (tmp_path / "pkg" / "sub").mkdir(parents=True)
        (tmp_path / "pkg" / "sub" / "mod.py").write_text("")
        info = analyze_project(tmp_path, StarterConfig(max_depth=1))
        assert info.file_count == 0

    def test_with_stack_keeps_description_when_none(self, tmp_path: Path) -> None:
        info = ProjectInfo(root=tmp_path, name="x", description="d", stack=StackDescriptor())
        updated = info.with_stack(StackDescriptor(languages=("go",)))
        assert updated.description == "d"
        assert updated.stack.languages == ("go",)
