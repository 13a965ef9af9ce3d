"""Signal collection: raw file-system evidence for stack classification.

Everything here is a pure read.  Each signal is collected independently and
any failure (missing file, unreadable directory, malformed JSON) degrades to
an absence value for that one signal only.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from claude_starter.config import CONFIG_DIR, DEFAULT_MAX_DEPTH

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "package.json"

# Ecosystem declaration files whose raw text feeds the framework fallback.
DECLARATION_FILES = (
    "requirements.txt",
    "pyproject.toml",
    "Gemfile",
    "go.mod",
    "Cargo.toml",
)

# Legacy instructions file checked when the config directory is absent.
LEGACY_MARKER = "CLAUDE.md"


@dataclass(frozen=True)
class SignalBundle:
    """Everything the classifier is allowed to look at."""

    root_entries: tuple[str, ...] = ()
    root_dirs: frozenset[str] = field(default_factory=frozenset)
    manifest: dict[str, Any] | None = None
    declarations: dict[str, str] = field(default_factory=dict)
    has_ci_workflows: bool = False
    has_config_dir: bool = False
    config_paths: tuple[str, ...] = ()

    def has(self, name: str) -> bool:
        """Return whether *name* is an immediate entry of the root."""
        return name in self.root_entries

    def has_dir(self, name: str) -> bool:
        return name in self.root_dirs


# ---------------------------------------------------------------------------
# Individual readers
# ---------------------------------------------------------------------------


def _list_root(project_root: Path) -> tuple[tuple[str, ...], frozenset[str]]:
    """Return sorted entry names and the subset that are directories."""
    names: list[str] = []
    dirs: set[str] = set()
    try:
        with os.scandir(project_root) as it:
            for entry in it:
                names.append(entry.name)
                try:
                    if entry.is_dir():
                        dirs.add(entry.name)
                except OSError:
                    logger.debug("Cannot stat %s", entry.path)
    except OSError as exc:
        logger.debug("Cannot list %s: %s", project_root, exc)
        return (), frozenset()
    return tuple(sorted(names)), frozenset(dirs)


def read_manifest(project_root: Path) -> dict[str, Any] | None:
    """Read and parse ``package.json``, returning *None* on any failure."""
    path = project_root / MANIFEST_FILENAME
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, json.JSONDecodeError, UnicodeDecodeError, ValueError) as exc:
        logger.debug("Ignoring unreadable %s: %s", path, exc)
        return None
    if isinstance(data, dict):
        return data
    logger.debug("Ignoring %s: top-level value is not an object", path)
    return None


def _is_dir(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError:
        return False


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Cannot read %s: %s", path, exc)
        return None


def _read_declarations(project_root: Path) -> dict[str, str]:
    result: dict[str, str] = {}
    for name in DECLARATION_FILES:
        text = _read_text(project_root / name)
        if text is not None:
            result[name] = text
    return result


def _walk_files(base: Path, prefix: str, *, max_depth: int) -> list[str]:
    """List files under *base* as ``prefix/...`` POSIX paths.

    Symlinked directories are not followed and recursion stops below
    *max_depth* levels.
    """
    found: list[str] = []
    pending: list[tuple[Path, str, int]] = [(base, prefix, 0)]
    while pending:
        directory, rel, depth = pending.pop()
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as exc:
            logger.debug("Cannot list %s: %s", directory, exc)
            continue
        for entry in entries:
            rel_path = f"{rel}/{entry.name}"
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                continue
            if is_dir:
                if depth < max_depth:
                    pending.append((directory / entry.name, rel_path, depth + 1))
                else:
                    logger.debug("Depth limit reached at %s", rel_path)
            else:
                found.append(rel_path)
    return sorted(found)


def _scan_existing_config(
    project_root: Path,
    *,
    max_depth: int,
) -> tuple[bool, tuple[str, ...]]:
    config_dir = project_root / CONFIG_DIR
    if _is_dir(config_dir):
        return True, tuple(_walk_files(config_dir, CONFIG_DIR, max_depth=max_depth))
    if _is_file(project_root / LEGACY_MARKER):
        return False, (LEGACY_MARKER,)
    return False, ()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def collect_signals(project_root: Path, *, max_depth: int = DEFAULT_MAX_DEPTH) -> SignalBundle:
    """Collect every detection signal under *project_root*.

    Never raises: an unreadable project simply produces an empty bundle.
    """
    entries, dirs = _list_root(project_root)
    has_config_dir, config_paths = _scan_existing_config(project_root, max_depth=max_depth)

    bundle = SignalBundle(
        root_entries=entries,
        root_dirs=dirs,
        manifest=read_manifest(project_root),
        declarations=_read_declarations(project_root),
        has_ci_workflows=_is_dir(project_root / ".github" / "workflows"),
        has_config_dir=has_config_dir,
        config_paths=config_paths,
    )
    logger.debug(
        "Collected %d root entries, manifest=%s, declarations=%s",
        len(entries),
        bundle.manifest is not None,
        sorted(bundle.declarations),
    )
    return bundle
