"""Primary instructions document (``.claude/CLAUDE.md``)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from claude_starter.generation.labels import common_commands, format_framework, format_language
from claude_starter.generation.models import Artifact

if TYPE_CHECKING:
    from collections.abc import Sequence

    from claude_starter.detection.classifier import StackDescriptor
    from claude_starter.detection.project import ProjectInfo

CLAUDE_MD_PATH = ".claude/CLAUDE.md"

_COMMAND_TABLE = (
    "| Command | Purpose |",
    "|---------|---------|",
    "| `/task <desc>` | Start or switch to a new task |",
    "| `/status` | Show current task state |",
    "| `/done` | Mark current task complete |",
    "| `/analyze <area>` | Deep-dive into specific code |",
)

_RULES = (
    "1. **State First** - Always read `.claude/state/task.md` when resuming",
    "2. **One Task** - Focus on one thing at a time",
    "3. **Test Before Done** - Run tests before marking complete",
    "4. **Update State** - Keep task.md current as you work",
    "5. **Match Patterns** - Follow existing code conventions",
)


def tech_stack_lines(stack: StackDescriptor) -> list[str]:
    """Bullet lines for the "Tech Stack" section; empty when nothing is known."""
    lines: list[str] = []
    if stack.primary_language:
        lines.append(f"- **Language**: {format_language(stack.primary_language)}")
    if stack.primary_framework:
        lines.append(f"- **Framework**: {format_framework(stack.primary_framework)}")
    if stack.package_manager:
        lines.append(f"- **Package Manager**: {stack.package_manager}")
    if stack.testing_framework:
        lines.append(f"- **Testing**: {stack.testing_framework}")
    if stack.linter:
        lines.append(f"- **Linter**: {stack.linter}")
    return lines


def generate_claude_md(
    info: ProjectInfo,
    skills: Sequence[Artifact] = (),
    agents: Sequence[Artifact] = (),
) -> Artifact:
    """Build the instructions document.

    The skill and agent indexes list exactly the artifacts passed in, so the
    document never points at a file that was not generated.
    """
    stack = info.stack
    lines: list[str] = [f"# {info.name}", ""]

    if info.description:
        lines += [f"> {info.description}", ""]

    lines += ["## Start Here", "", "Check `.claude/state/task.md` for your current task.", ""]

    stack_lines = tech_stack_lines(stack)
    if stack_lines:
        lines += ["## Tech Stack", "", *stack_lines, ""]

    lines += ["## Commands", "", *_COMMAND_TABLE, ""]
    lines += ["## Common Operations", "", "```bash", common_commands(stack), "```", ""]
    lines += ["## Rules", "", *_RULES, ""]

    if skills:
        lines += ["## Skills", "", "Reference these for specialized workflows:"]
        lines += [f"- `{skill.path}` - {skill.summary or skill.name}" for skill in skills]
        lines.append("")

    if agents:
        lines += ["## Agents", "", "Specialized agents available:"]
        lines += [f"- `{agent.name}` - {agent.summary or agent.name}" for agent in agents]
        lines.append("")

    lines += [
        "## File References",
        "",
        "Use `path/to/file.ts:123` format when referencing code.",
        "",
    ]

    return Artifact(kind="claude-md", path=CLAUDE_MD_PATH, content="\n".join(lines))
