"""Permissions manifest (``.claude/settings.json``)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from claude_starter.generation.models import Artifact

if TYPE_CHECKING:
    from claude_starter.detection.classifier import StackDescriptor

SETTINGS_PATH = ".claude/settings.json"
SETTINGS_SCHEMA = "https://json.schemastore.org/claude-code-settings.json"

_BASE = ("Read(**)", "Edit(**)", "Write(.claude/**)", "Bash(git:*)")
_JS_PACKAGE_MANAGERS = ("npm", "yarn", "pnpm", "bun", "npx")
_UTILITIES = ("ls", "mkdir", "cat", "echo", "grep", "find")

# Extra executables allowed per detected language.
_LANGUAGE_COMMANDS: dict[str, tuple[str, ...]] = {
    "typescript": ("node", "tsc"),
    "javascript": ("node", "tsc"),
    "python": ("python", "pip", "poetry", "pytest", "uvicorn"),
    "go": ("go",),
    "rust": ("cargo", "rustc"),
    "ruby": ("ruby", "bundle", "rails", "rake"),
}

_TESTING_COMMANDS: dict[str, tuple[str, ...]] = {
    "jest": ("jest",),
    "vitest": ("vitest",),
    "playwright": ("playwright",),
    "cypress": ("cypress",),
    "pytest": ("pytest",),
    "rspec": ("rspec",),
}

_DOCKER_COMMANDS = ("docker", "docker-compose")


def _bash(command: str) -> str:
    return f"Bash({command}:*)"


def build_permissions(stack: StackDescriptor) -> list[str]:
    """Return the allow-list for *stack*, deduplicated and sorted.

    Fragments are appended freely and only collapsed into a set at the end;
    sorting keeps the file byte-stable across reruns.
    """
    permissions: list[str] = list(_BASE)
    permissions.extend(_bash(pm) for pm in _JS_PACKAGE_MANAGERS)

    for language in stack.languages:
        permissions.extend(_bash(c) for c in _LANGUAGE_COMMANDS.get(language, ()))

    if stack.testing_framework:
        permissions.extend(_bash(c) for c in _TESTING_COMMANDS.get(stack.testing_framework, ()))
    if stack.linter:
        permissions.append(_bash(stack.linter))
    if stack.formatter:
        permissions.append(_bash(stack.formatter))

    permissions.extend(_bash(c) for c in _UTILITIES)

    if stack.has_docker:
        permissions.extend(_bash(c) for c in _DOCKER_COMMANDS)

    return sorted(set(permissions))


def generate_settings(stack: StackDescriptor) -> Artifact:
    settings = {
        "$schema": SETTINGS_SCHEMA,
        "permissions": {"allow": build_permissions(stack)},
    }
    return Artifact(
        kind="settings",
        path=SETTINGS_PATH,
        content=json.dumps(settings, indent=2, ensure_ascii=False) + "\n",
    )
