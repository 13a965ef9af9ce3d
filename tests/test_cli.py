"""Tests for the claude-starter command line."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from click.testing import CliRunner

from claude_starter import __version__
from claude_starter.cli import main
from claude_starter.prompts import NewProjectPreferences

if TYPE_CHECKING:
    from pathlib import Path

    import pytest


def _run_json(project: Path, *extra: str) -> dict[str, Any]:
    runner = CliRunner()
    result = runner.invoke(main, ["--project", str(project), "--json", "-y", *extra])
    assert result.exit_code == 0, result.output
    data: dict[str, Any] = json.loads(result.output)
    return data


class TestBasics:
    def test_version(self) -> None:
        result = CliRunner().invoke(main, ["-v"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_short_help(self) -> None:
        result = CliRunner().invoke(main, ["-h"])
        assert result.exit_code == 0
        assert "--dry-run" in result.output

    def test_missing_project_dir(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(main, ["--project", str(tmp_path / "nope")])
        assert result.exit_code == 2


class TestGenerate:
    def test_empty_directory(self, tmp_path: Path) -> None:
        data = _run_json(tmp_path)
        assert ".claude/state/task.md" in data["created"]
        assert data["updated"] == []
        assert data["skipped"] == []
        stack = data["stack"]
        assert isinstance(stack, dict)
        assert stack["languages"] == []
        assert stack["package_manager"] is None

        task = (tmp_path / ".claude" / "state" / "task.md").read_text()
        assert "No active task" in task
        assert "## Tech Stack" not in (tmp_path / ".claude" / "CLAUDE.md").read_text()

    def test_next_with_bun(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text('{"dependencies": {"next": "14", "react": "18"}}')
        (tmp_path / "bun.lockb").write_bytes(b"")
        data = _run_json(tmp_path)
        stack = data["stack"]
        assert isinstance(stack, dict)
        assert stack["primary_framework"] == "nextjs"
        assert stack["package_manager"] == "bun"
        assert (tmp_path / ".claude" / "skills" / "nextjs-patterns.md").is_file()

    def test_rerun_preserves_and_force_overwrites(self, tmp_path: Path) -> None:
        _run_json(tmp_path)
        (tmp_path / ".claude" / "CLAUDE.md").write_text("# mine\n")

        second = _run_json(tmp_path)
        assert second["created"] == []
        assert sorted(second["skipped"]) == [
            ".claude/CLAUDE.md",
            ".claude/state/task.md",
        ]
        assert (tmp_path / ".claude" / "CLAUDE.md").read_text() == "# mine\n"

        forced = _run_json(tmp_path, "--force")
        assert forced["skipped"] == []
        assert (tmp_path / ".claude" / "CLAUDE.md").read_text() != "# mine\n"

    def test_config_preserve_entries(self, tmp_path: Path) -> None:
        (tmp_path / ".claude-starter.yml").write_text(
            "preserve:\n  - .claude/rules/code-style.md\n"
        )
        _run_json(tmp_path)
        data = _run_json(tmp_path)
        assert ".claude/rules/code-style.md" in data["skipped"]

    def test_table_output(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(main, ["--project", str(tmp_path), "-y"])
        assert result.exit_code == 0, result.output
        assert "created" in result.output
        assert "Ready!" in result.output


class TestDryRun:
    def test_nothing_written(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(main, ["--project", str(tmp_path), "-y", "--dry-run"])
        assert result.exit_code == 0, result.output
        assert not (tmp_path / ".claude").exists()

    def test_json_plan(self, tmp_path: Path) -> None:
        data = _run_json(tmp_path, "--dry-run")
        planned = data["artifacts"]
        assert isinstance(planned, list)
        assert planned[0] == {"path": ".claude/CLAUDE.md", "kind": "claude-md", "is_new": True}
        assert not (tmp_path / ".claude").exists()


class TestErrors:
    def test_invalid_config_exits_before_writing(self, tmp_path: Path) -> None:
        (tmp_path / ".claude-starter.yml").write_text("max_depth: -3\n")
        result = CliRunner().invoke(main, ["--project", str(tmp_path), "-y"])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert not (tmp_path / ".claude").exists()

    def test_write_failure_exits_nonzero(self, tmp_path: Path) -> None:
        (tmp_path / ".claude").write_text("a file, not a directory")
        result = CliRunner().invoke(main, ["--project", str(tmp_path), "-y"])
        assert result.exit_code == 1
        assert "Error:" in result.output


class TestNewProjectPrompt:
    def test_answers_shape_the_stack(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        prefs = NewProjectPreferences(
            description="Invoice service", primary_language="python", framework="fastapi"
        )
        monkeypatch.setattr("claude_starter.cli._stdin_is_interactive", lambda: True)
        monkeypatch.setattr("claude_starter.prompts.ask_preferences", lambda: prefs)

        result = CliRunner().invoke(main, ["--project", str(tmp_path)])
        assert result.exit_code == 0, result.output

        task = (tmp_path / ".claude" / "state" / "task.md").read_text()
        assert "**Task:** Invoice service" in task
        instructions = (tmp_path / ".claude" / "CLAUDE.md").read_text()
        assert "> Invoice service" in instructions
        assert "- **Framework**: FastAPI" in instructions
        assert (tmp_path / ".claude" / "skills" / "fastapi-patterns.md").is_file()

    def test_no_prompt_with_flag(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        def fail() -> NewProjectPreferences:
            raise AssertionError("should not prompt")

        monkeypatch.setattr("claude_starter.cli._stdin_is_interactive", lambda: True)
        monkeypatch.setattr("claude_starter.prompts.ask_preferences", fail)
        result = CliRunner().invoke(main, ["--project", str(tmp_path), "-y"])
        assert result.exit_code == 0, result.output
