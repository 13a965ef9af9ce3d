"""Artifact synthesis: turn a classified project into ``.claude/`` documents."""

from claude_starter.generation.models import KINDS, Artifact
from claude_starter.generation.synthesizer import generate_artifacts, mark_existing

__all__ = [
    "KINDS",
    "Artifact",
    "generate_artifacts",
    "mark_existing",
]
