"""Write generated artifacts to disk under the preserve/regenerate policy.

Preserved paths (the instructions document and the task state, plus anything
listed under ``preserve`` in ``.claude-starter.yml``) are user-owned: once
they exist, only a forced run rewrites them.  Everything else is regenerated
on every run so it tracks the latest detected stack.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from claude_starter.config import CONFIG_DIR

if TYPE_CHECKING:
    from collections.abc import Iterable

    from claude_starter.generation.models import Artifact

logger = logging.getLogger(__name__)

PRESERVED_PATHS: frozenset[str] = frozenset({".claude/CLAUDE.md", ".claude/state/task.md"})


@dataclass
class WriteOutcome:
    """Paths written by one run, partitioned by what happened to them."""

    created: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.created) + len(self.updated) + len(self.skipped)

    def as_dict(self) -> dict[str, list[str]]:
        return {
            "created": list(self.created),
            "updated": list(self.updated),
            "skipped": list(self.skipped),
        }


def _resolve_target(project_root: Path, relative: str) -> Path:
    """Map an artifact path onto the filesystem, refusing anything outside ``.claude/``."""
    pure = PurePosixPath(relative)
    if pure.is_absolute() or ".." in pure.parts or not pure.parts or pure.parts[0] != CONFIG_DIR:
        msg = f"Refusing to write outside {CONFIG_DIR}/: {relative}"
        raise ValueError(msg)

    root = project_root.resolve()
    config_dir = (root / CONFIG_DIR).resolve()
    target = (root / Path(*pure.parts)).resolve()
    try:
        target.relative_to(config_dir)
    except ValueError:
        msg = f"Refusing to write outside {CONFIG_DIR}/: {relative}"
        raise ValueError(msg) from None
    return target


def _target_mode(path: Path) -> int:
    """Mode the written file should carry: the existing one, else umask-derived."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _atomic_write_text(path: Path, data: str) -> None:
    """Write *data* to *path* via a temp file in the same directory.

    The temp file is created owner-only, so it is given the target's mode
    before it replaces the target.
    """
    mode = _target_mode(path)
    handle = tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        newline="\n",
        dir=str(path.parent),
        prefix=f".{path.name}.",
        delete=False,
    )
    temp_name = handle.name
    try:
        with handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(temp_name, mode)
        os.replace(temp_name, path)
    finally:
        if os.path.exists(temp_name):
            os.remove(temp_name)


def write_artifacts(
    artifacts: Iterable[Artifact],
    project_root: Path,
    *,
    force: bool = False,
    preserved: frozenset[str] = PRESERVED_PATHS,
) -> WriteOutcome:
    """Write *artifacts* beneath *project_root* and report what happened.

    Raises:
        ValueError: If an artifact path escapes ``.claude/`` or appears
            twice.  Raised before that artifact is touched; earlier artifacts
            stay written.
        OSError: On any filesystem failure.  Earlier writes are not rolled
            back.
    """
    outcome = WriteOutcome()
    seen: set[str] = set()
    for artifact in artifacts:
        if artifact.path in seen:
            raise ValueError(f"Duplicate artifact path: {artifact.path}")
        seen.add(artifact.path)
        target = _resolve_target(project_root, artifact.path)
        target.parent.mkdir(parents=True, exist_ok=True)
        exists = target.exists()

        if exists and not force and artifact.path in preserved:
            logger.debug("Preserving %s", artifact.path)
            outcome.skipped.append(artifact.path)
            continue

        _atomic_write_text(target, artifact.content)
        if exists:
            logger.debug("Updated %s", artifact.path)
            outcome.updated.append(artifact.path)
        else:
            logger.debug("Created %s", artifact.path)
            outcome.created.append(artifact.path)

    logger.info(
        "Wrote artifacts: %d created, %d updated, %d skipped",
        len(outcome.created),
        len(outcome.updated),
        len(outcome.skipped),
    )
    return outcome
