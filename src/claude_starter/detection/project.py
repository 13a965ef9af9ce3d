"""Project analysis: stack, metadata, and a source-file census."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from fnmatch import fnmatch
from typing import TYPE_CHECKING, Any

from claude_starter.config import DEFAULT_MAX_DEPTH, StarterConfig
from claude_starter.detection.classifier import StackDescriptor, classify
from claude_starter.detection.signals import collect_signals

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from pathlib import Path

    from claude_starter.detection.signals import SignalBundle

logger = logging.getLogger(__name__)

SOURCE_EXTENSIONS = (
    # JavaScript / TypeScript
    ".js",
    ".jsx",
    ".mjs",
    ".cjs",
    ".ts",
    ".tsx",
    ".py",
    ".go",
    ".rs",
    # Java / Kotlin
    ".java",
    ".kt",
    ".kts",
    ".rb",
    ".cs",
    ".swift",
    ".php",
    # C / C++
    ".c",
    ".cpp",
    ".cc",
    ".cxx",
    ".h",
    ".hpp",
)

DEFAULT_IGNORES = (
    ".git",
    "node_modules",
    "__pycache__",
    ".venv",
    "venv",
    "target",
    "dist",
    "build",
)


@dataclass(frozen=True)
class ProjectInfo:
    """Everything the synthesizer needs to know about a project."""

    root: Path
    name: str
    description: str | None
    stack: StackDescriptor
    file_count: int = 0

    @property
    def is_existing(self) -> bool:
        return self.file_count > 0

    def with_stack(self, stack: StackDescriptor, description: str | None = None) -> ProjectInfo:
        return replace(self, stack=stack, description=description or self.description)


# ---------------------------------------------------------------------------
# Ignore rules and file counting
# ---------------------------------------------------------------------------


def read_gitignore(project_root: Path) -> list[str]:
    """Return usable patterns from ``.gitignore`` (comments and blanks dropped)."""
    try:
        text = (project_root / ".gitignore").read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return []
    patterns: list[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            patterns.append(stripped.rstrip("/"))
    return [p for p in patterns if p]


def build_ignore_predicate(patterns: Iterable[str]) -> Callable[[str], bool]:
    """Build a predicate matching entry names against *patterns*.

    A name matches when it equals a pattern, lives under it (``pattern/...``),
    or matches it as a shell glob.
    """
    compiled = tuple(p.lstrip("/") for p in patterns if p.lstrip("/"))

    def should_ignore(name: str) -> bool:
        for pattern in compiled:
            if name == pattern or name.startswith(f"{pattern}/") or fnmatch(name, pattern):
                return True
        return False

    return should_ignore


def count_source_files(
    project_root: Path,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    extra_ignores: Iterable[str] = (),
) -> int:
    """Count source files under *project_root*.

    The walk is iterative, never follows symlinked directories and does not
    descend more than *max_depth* levels below the root.
    """
    should_ignore = build_ignore_predicate(
        [*DEFAULT_IGNORES, *read_gitignore(project_root), *extra_ignores]
    )

    count = 0
    pending: list[tuple[Path, int]] = [(project_root, 0)]
    while pending:
        directory, depth = pending.pop()
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as exc:
            logger.debug("Skipping unreadable directory %s: %s", directory, exc)
            continue
        for entry in entries:
            if should_ignore(entry.name):
                continue
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                continue
            if is_dir:
                if depth < max_depth:
                    pending.append((directory / entry.name, depth + 1))
            elif entry.name.endswith(SOURCE_EXTENSIONS):
                count += 1
    return count


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


def _read_toml(path: Path) -> dict[str, Any]:
    """Read and parse a TOML file, returning empty dict on failure."""
    import sys

    _tomllib: Any = None
    if sys.version_info >= (3, 11):
        import tomllib

        _tomllib = tomllib
    else:
        try:
            import tomli  # declared for Python <3.11

            _tomllib = tomli
        except ImportError:
            return {}

    try:
        result: dict[str, Any] = _tomllib.loads(path.read_bytes().decode("utf-8"))
        return result
    except (OSError, _tomllib.TOMLDecodeError, UnicodeDecodeError, ValueError):
        return {}


def _pyproject_metadata(project_root: Path) -> dict[str, str]:
    path = project_root / "pyproject.toml"
    if not path.is_file():
        return {}
    data = _read_toml(path)
    result: dict[str, str] = {}
    tool = data.get("tool")
    poetry = tool.get("poetry") if isinstance(tool, dict) else None
    for section in (data.get("project"), poetry):
        if not isinstance(section, dict):
            continue
        for key in ("name", "description"):
            value = section.get(key)
            if key not in result and isinstance(value, str) and value.strip():
                result[key] = value.strip()
    return result


def detect_metadata(project_root: Path, signals: SignalBundle) -> tuple[str, str | None]:
    """Return ``(name, description)`` for the project.

    ``package.json`` wins, then ``pyproject.toml``; the name falls back to the
    directory name.
    """
    name: str | None = None
    description: str | None = None

    manifest = signals.manifest or {}
    raw_name = manifest.get("name")
    if isinstance(raw_name, str) and raw_name.strip():
        # Scoped packages: @org/name -> name.
        name = raw_name.strip().split("/")[-1]
    raw_description = manifest.get("description")
    if isinstance(raw_description, str) and raw_description.strip():
        description = raw_description.strip()

    if name is None or description is None:
        pyproject = _pyproject_metadata(project_root)
        name = name or pyproject.get("name")
        description = description or pyproject.get("description")

    return name or project_root.resolve().name, description


def analyze_project(project_root: Path, config: StarterConfig | None = None) -> ProjectInfo:
    """Analyze *project_root*: classify its stack and gather metadata."""
    config = config or StarterConfig()
    signals = collect_signals(project_root, max_depth=config.max_depth)
    stack = classify(signals)
    name, description = detect_metadata(project_root, signals)
    file_count = count_source_files(
        project_root,
        max_depth=config.max_depth,
        extra_ignores=config.ignore,
    )
    logger.info("Analyzed %s: %d source files", name, file_count)
    return ProjectInfo(
        root=project_root,
        name=name,
        description=description,
        stack=stack,
        file_count=file_count,
    )
