"""Tests for claude_starter.prompts."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from claude_starter.detection.classifier import StackDescriptor
from claude_starter.detection.project import ProjectInfo
from claude_starter.prompts import (
    DEFAULT_TASK,
    NewProjectPreferences,
    apply_preferences,
    ask_preferences,
    stack_from_preferences,
)


def _empty_info() -> ProjectInfo:
    return ProjectInfo(root=Path("."), name="fresh", description=None, stack=StackDescriptor())


class TestStackFromPreferences:
    def test_python_defaults(self) -> None:
        stack = stack_from_preferences(
            NewProjectPreferences(
                description="API", primary_language="python", framework="fastapi"
            )
        )
        assert stack.languages == ("python",)
        assert stack.frameworks == ("fastapi",)
        assert stack.package_manager == "pip"
        assert stack.testing_framework == "pytest"
        assert stack.linter == "ruff"
        assert stack.formatter == "ruff"

    def test_opt_out_of_tooling(self) -> None:
        stack = stack_from_preferences(
            NewProjectPreferences(
                description="x",
                primary_language="typescript",
                include_tests=False,
                include_linting=False,
            )
        )
        assert stack.package_manager == "npm"
        assert stack.testing_framework is None
        assert stack.linter is None
        assert stack.formatter is None
        assert stack.frameworks == ()

    def test_unknown_language_has_no_tools(self) -> None:
        prefs = NewProjectPreferences(description="x", primary_language="zig")
        stack = stack_from_preferences(prefs)
        assert stack.languages == ("zig",)
        assert stack.package_manager is None


class TestApplyPreferences:
    def test_description_and_stack_replaced(self) -> None:
        prefs = NewProjectPreferences(description="A CLI", primary_language="go")
        info = apply_preferences(_empty_info(), prefs)
        assert info.description == "A CLI"
        assert info.stack.languages == ("go",)
        assert info.stack.testing_framework == "go-test"
        assert info.name == "fresh"

    def test_existing_config_flags_carried_over(self) -> None:
        info = ProjectInfo(
            root=Path("."),
            name="fresh",
            description=None,
            stack=StackDescriptor(
                has_existing_config=True,
                existing_config_paths=frozenset({"CLAUDE.md"}),
            ),
        )
        updated = apply_preferences(info, NewProjectPreferences("x", "rust"))
        assert updated.stack.has_existing_config
        assert updated.stack.existing_config_paths == frozenset({"CLAUDE.md"})


class TestAskPreferences:
    def test_answers_collected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        answers = iter(["Todo API", "python", "fastapi", "y", "n"])
        monkeypatch.setattr("builtins.input", lambda *args: next(answers))
        prefs = ask_preferences(Console(file=io.StringIO()))
        assert prefs == NewProjectPreferences(
            description="Todo API",
            primary_language="python",
            framework="fastapi",
            include_tests=True,
            include_linting=False,
        )

    def test_defaults_on_empty_answers(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("builtins.input", lambda *args: "")
        prefs = ask_preferences(Console(file=io.StringIO()))
        assert prefs.description == DEFAULT_TASK
        assert prefs.primary_language == "typescript"
        assert prefs.framework is None
        assert prefs.include_tests
        assert prefs.include_linting
