"""Tests for claude_starter.detection.signals."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from claude_starter.detection.signals import SignalBundle, collect_signals, read_manifest

if TYPE_CHECKING:
    from pathlib import Path


class TestRootListing:
    def test_empty_directory(self, tmp_path: Path) -> None:
        signals = collect_signals(tmp_path)
        assert signals == SignalBundle()

    def test_entries_sorted_and_dirs_marked(self, tmp_path: Path) -> None:
        (tmp_path / "b.txt").write_text("")
        (tmp_path / "a.txt").write_text("")
        (tmp_path / "packages").mkdir()
        signals = collect_signals(tmp_path)
        assert signals.root_entries == ("a.txt", "b.txt", "packages")
        assert signals.has("a.txt")
        assert signals.has_dir("packages")
        assert not signals.has_dir("a.txt")

    def test_missing_root_gives_empty_bundle(self, tmp_path: Path) -> None:
        signals = collect_signals(tmp_path / "does-not-exist")
        assert signals.root_entries == ()
        assert signals.manifest is None


class TestManifest:
    def test_valid_manifest(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text('{"name": "demo", "dependencies": {"react": "18"}}')
        assert read_manifest(tmp_path) == {"name": "demo", "dependencies": {"react": "18"}}

    def test_missing_manifest(self, tmp_path: Path) -> None:
        assert read_manifest(tmp_path) is None

    def test_malformed_manifest_is_absent(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text("{not json")
        assert read_manifest(tmp_path) is None

    def test_non_object_manifest_is_absent(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text("[1, 2, 3]")
        assert read_manifest(tmp_path) is None

    def test_malformed_manifest_keeps_other_signals(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text("{broken")
        (tmp_path / "requirements.txt").write_text("fastapi\n")
        signals = collect_signals(tmp_path)
        assert signals.manifest is None
        assert signals.has("package.json")
        assert signals.declarations == {"requirements.txt": "fastapi\n"}


class TestDeclarations:
    def test_reads_known_declaration_files(self, tmp_path: Path) -> None:
        (tmp_path / "go.mod").write_text("module x\n")
        (tmp_path / "Gemfile").write_text("gem 'rails'\n")
        (tmp_path / "notes.txt").write_text("ignored")
        signals = collect_signals(tmp_path)
        assert set(signals.declarations) == {"go.mod", "Gemfile"}

    def test_undecodable_declaration_is_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "requirements.txt").write_bytes(b"\xff\xfe\x00bad")
        signals = collect_signals(tmp_path)
        assert "requirements.txt" not in signals.declarations


class TestCiWorkflows:
    def test_workflows_dir(self, tmp_path: Path) -> None:
        (tmp_path / ".github" / "workflows").mkdir(parents=True)
        assert collect_signals(tmp_path).has_ci_workflows

    def test_github_without_workflows(self, tmp_path: Path) -> None:
        (tmp_path / ".github").mkdir()
        assert not collect_signals(tmp_path).has_ci_workflows


class TestExistingConfig:
    def test_config_dir_files_listed(self, tmp_path: Path) -> None:
        (tmp_path / ".claude" / "skills").mkdir(parents=True)
        (tmp_path / ".claude" / "settings.json").write_text("{}")
        (tmp_path / ".claude" / "skills" / "x.md").write_text("")
        signals = collect_signals(tmp_path)
        assert signals.has_config_dir
        assert signals.config_paths == (".claude/settings.json", ".claude/skills/x.md")

    def test_legacy_marker_without_dir(self, tmp_path: Path) -> None:
        (tmp_path / "CLAUDE.md").write_text("# legacy\n")
        signals = collect_signals(tmp_path)
        assert not signals.has_config_dir
        assert signals.config_paths == ("CLAUDE.md",)

    def test_walk_respects_depth_limit(self, tmp_path: Path) -> None:
        deep = tmp_path / ".claude" / "a" / "b" / "c"
        deep.mkdir(parents=True)
        (deep / "deep.md").write_text("")
        (tmp_path / ".claude" / "a" / "shallow.md").write_text("")
        signals = collect_signals(tmp_path, max_depth=1)
        assert signals.config_paths == (".claude/a/shallow.md",)

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_symlink_cycle_terminates(self, tmp_path: Path) -> None:
        config = tmp_path / ".claude"
        config.mkdir()
        (config / "loop").symlink_to(config, target_is_directory=True)
        (config / "settings.json").write_text("{}")
        signals = collect_signals(tmp_path)
        # The symlink itself is listed as an entry but never descended into.
        assert ".claude/settings.json" in signals.config_paths
        assert all(not p.startswith(".claude/loop/") for p in signals.config_paths)
