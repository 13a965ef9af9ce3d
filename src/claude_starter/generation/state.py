"""Task-tracking document (``.claude/state/task.md``).

The document is user-owned once written: the writer preserves it on reruns,
so this content only ever seeds a fresh project.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from claude_starter.detection.classifier import summarize_stack
from claude_starter.generation.models import Artifact

if TYPE_CHECKING:
    from claude_starter.detection.project import ProjectInfo

TASK_STATE_PATH = ".claude/state/task.md"

NO_ACTIVE_TASK = "No active task. Start one with `/task <description>`."

_QUICK_COMMANDS = """\
- `/task` - Start working on something
- `/status` - See current state
- `/analyze` - Deep dive into code
- `/done` - Mark task complete
"""

_NEW_PROJECT_STEPS = """\
1. Define project structure
2. Set up development environment
3. Start implementation
"""


def _ready(info: ProjectInfo) -> str:
    if info.is_existing:
        summary = "This is an existing codebase. Use `/analyze` to explore specific areas."
    else:
        summary = "New project - no existing code yet."
    stack_line = summarize_stack(info.stack)
    if stack_line:
        summary = f"{summary}\n\n{stack_line}"

    return (
        "# Current Task\n"
        "\n"
        "## Status: Ready\n"
        "\n"
        "## Task\n"
        "\n"
        f"{NO_ACTIVE_TASK}\n"
        "\n"
        "## Project Summary\n"
        "\n"
        f"{summary}\n"
        "\n"
        "## Next Steps\n"
        "\n"
        f"{_QUICK_COMMANDS}"
        "\n"
        "## Decisions\n"
        "\n"
        "(None yet)\n"
    )


def _in_progress(task: str) -> str:
    return (
        "# Current Task\n"
        "\n"
        "## Status: In Progress\n"
        "\n"
        "## Task\n"
        "\n"
        f"**Task:** {task}\n"
        "\n"
        "## Context\n"
        "\n"
        "New project - no existing code yet.\n"
        "\n"
        "## Next Steps\n"
        "\n"
        f"{_NEW_PROJECT_STEPS}"
        "\n"
        "## Decisions\n"
        "\n"
        "(None yet - starting fresh)\n"
    )


def generate_task_state(info: ProjectInfo, task: str | None = None) -> Artifact:
    """Seed the task document.

    With a *task* (a new project whose owner described what they are
    building) the document starts "In Progress"; otherwise it records that no
    task is active.
    """
    task = (task or "").strip()
    content = _in_progress(task) if task else _ready(info)
    return Artifact(kind="state", path=TASK_STATE_PATH, content=content)
