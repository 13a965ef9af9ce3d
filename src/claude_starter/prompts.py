"""Interactive questions for projects with nothing to detect."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from claude_starter.detection.classifier import StackDescriptor

if TYPE_CHECKING:
    from rich.console import Console

    from claude_starter.detection.project import ProjectInfo

DEFAULT_TASK = "Explore and set up project"

LANGUAGE_CHOICES = ("typescript", "javascript", "python", "go", "rust")

FRAMEWORK_CHOICES: dict[str, tuple[str, ...]] = {
    "typescript": ("nextjs", "react", "vue", "svelte", "express", "nestjs", "hono"),
    "javascript": ("nextjs", "react", "vue", "svelte", "express"),
    "python": ("fastapi", "django", "flask"),
    "go": ("gin", "echo", "fiber"),
    "rust": ("axum", "actix"),
}

# language -> (package manager, testing framework, linter, formatter)
DEFAULT_TOOLS: dict[str, tuple[str, str, str, str]] = {
    "typescript": ("npm", "vitest", "eslint", "prettier"),
    "javascript": ("npm", "vitest", "eslint", "prettier"),
    "python": ("pip", "pytest", "ruff", "ruff"),
    "go": ("go", "go-test", "golangci-lint", "gofmt"),
    "rust": ("cargo", "rust-test", "clippy", "rustfmt"),
}


@dataclass(frozen=True)
class NewProjectPreferences:
    """Answers collected for a brand-new project."""

    description: str
    primary_language: str
    framework: str | None = None
    include_tests: bool = True
    include_linting: bool = True


def ask_preferences(console: Console | None = None) -> NewProjectPreferences:
    """Ask what the user is building and which stack they intend to use."""
    from rich.console import Console
    from rich.prompt import Confirm, Prompt

    console = console or Console()
    console.print("\n[yellow]New project detected[/yellow]\n")

    description = Prompt.ask("What are you building?", default=DEFAULT_TASK, console=console)
    language = Prompt.ask(
        "Primary language",
        choices=list(LANGUAGE_CHOICES),
        default="typescript",
        console=console,
    )
    framework = Prompt.ask(
        "Framework",
        choices=["none", *FRAMEWORK_CHOICES.get(language, ())],
        default="none",
        console=console,
    )
    include_tests = Confirm.ask("Set up testing?", default=True, console=console)
    include_linting = Confirm.ask("Set up linting and formatting?", default=True, console=console)

    return NewProjectPreferences(
        description=description.strip() or DEFAULT_TASK,
        primary_language=language,
        framework=None if framework == "none" else framework,
        include_tests=include_tests,
        include_linting=include_linting,
    )


def stack_from_preferences(prefs: NewProjectPreferences) -> StackDescriptor:
    languages = (prefs.primary_language,)
    frameworks = (prefs.framework,) if prefs.framework else ()
    tools = DEFAULT_TOOLS.get(prefs.primary_language)
    if tools is None:
        return StackDescriptor(languages=languages, frameworks=frameworks)

    package_manager, testing, linter, formatter = tools
    return StackDescriptor(
        languages=languages,
        frameworks=frameworks,
        package_manager=package_manager,
        testing_framework=testing if prefs.include_tests else None,
        linter=linter if prefs.include_linting else None,
        formatter=formatter if prefs.include_linting else None,
    )


def apply_preferences(info: ProjectInfo, prefs: NewProjectPreferences) -> ProjectInfo:
    """Replace the (empty) detected stack of *info* with the intended one.

    The answer to "What are you building?" becomes the project description.
    """
    stack = stack_from_preferences(prefs)
    stack = replace(
        stack,
        has_existing_config=info.stack.has_existing_config,
        existing_config_paths=info.stack.existing_config_paths,
    )
    return info.with_stack(stack, description=prefs.description)
