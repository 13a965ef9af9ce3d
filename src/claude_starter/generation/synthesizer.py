"""Assemble the full artifact set for a project."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from claude_starter.generation.agents import generate_agents
from claude_starter.generation.claude_md import generate_claude_md
from claude_starter.generation.commands import generate_commands
from claude_starter.generation.rules import generate_rules
from claude_starter.generation.settings import generate_settings
from claude_starter.generation.skills import generate_skills
from claude_starter.generation.state import generate_task_state

if TYPE_CHECKING:
    from pathlib import Path

    from claude_starter.detection.project import ProjectInfo
    from claude_starter.generation.models import Artifact

logger = logging.getLogger(__name__)


def generate_artifacts(info: ProjectInfo, task: str | None = None) -> list[Artifact]:
    """Synthesize every document for *info*.

    Order is fixed: instructions, settings, skills, agents, rules, commands,
    task state.  The result is a pure function of *info* and *task*.

    Raises:
        ValueError: If two artifacts share a path.
    """
    stack = info.stack
    skills = generate_skills(stack)
    agents = generate_agents(stack)

    artifacts: list[Artifact] = [
        generate_claude_md(info, skills, agents),
        generate_settings(stack),
        *skills,
        *agents,
        *generate_rules(stack),
        *generate_commands(),
        generate_task_state(info, task),
    ]

    seen: set[str] = set()
    for artifact in artifacts:
        if artifact.path in seen:
            raise ValueError(f"Duplicate artifact path: {artifact.path}")
        seen.add(artifact.path)

    logger.debug("Synthesized %d artifacts for %s", len(artifacts), info.name)
    return artifacts


def mark_existing(artifacts: list[Artifact], project_root: Path) -> list[Artifact]:
    """Set ``is_new`` on each artifact from what is currently on disk."""
    for artifact in artifacts:
        artifact.is_new = not (project_root / artifact.path).exists()
    return artifacts
