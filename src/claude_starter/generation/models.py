"""Artifact model shared by the synthesizer and the writer."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

# Artifact kinds, in generation order.
KINDS = ("claude-md", "settings", "skill", "agent", "rule", "command", "state")


@dataclass
class Artifact:
    """A generated document before it is written to disk.

    ``path`` is POSIX-style and relative to the project root.  ``is_new`` is
    not known at synthesis time; it is filled in from disk by
    :func:`claude_starter.generation.synthesizer.mark_existing`.
    ``summary`` is the short line used in the instructions index.
    """

    kind: str
    path: str
    content: str
    is_new: bool = True
    summary: str | None = None

    def __post_init__(self) -> None:
        if self.kind not in KINDS:
            msg = f"Unknown artifact kind {self.kind!r} for {self.path}"
            raise ValueError(msg)

    @property
    def name(self) -> str:
        """File stem, e.g. ``pattern-discovery`` for a skill."""
        return PurePosixPath(self.path).stem
