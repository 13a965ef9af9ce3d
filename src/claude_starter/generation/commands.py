"""Slash-command documents under ``.claude/commands``.

The set is fixed and does not depend on the detected stack.
"""

from __future__ import annotations

from claude_starter.generation import frontmatter
from claude_starter.generation.models import Artifact

COMMANDS_DIR = ".claude/commands"

_TASK = """\
# Start Task

## Current State
!cat .claude/state/task.md 2>/dev/null || echo "No existing task"

## Your Task

Start or switch to the task: **$ARGUMENTS**

1. Read current state from `.claude/state/task.md`
2. If switching tasks, summarize previous progress
3. Update `.claude/state/task.md` with:
   - Status: In Progress
   - Task description
   - Initial context/understanding
   - Planned next steps

4. Begin working on the task
"""

_STATUS = """\
# Status Check

## Current Task State
!cat .claude/state/task.md 2>/dev/null || echo "No task in progress"

## Your Response

Provide a concise status update:

1. **Current Task**: What are you working on?
2. **Progress**: What's been completed?
3. **Blockers**: Any issues or questions?
4. **Next Steps**: What's coming up?

Keep it brief - this is a quick check-in.
"""

_DONE = """\
# Complete Task

## Current State
!cat .claude/state/task.md

## Completion Checklist

Before marking complete, verify:

1. [ ] All requirements met
2. [ ] Tests pass (if applicable)
3. [ ] No linting errors
4. [ ] Code reviewed for quality

## Your Task

1. Run final checks (tests, lint)
2. Update `.claude/state/task.md`:
   - Status: **Completed**
   - Summary of what was done
   - Files changed
   - Any follow-up items

3. Show git status/diff for review
"""

_ANALYZE = """\
# Analyze: $ARGUMENTS

## Analysis Scope

Perform deep analysis of: **$ARGUMENTS**

## Process

1. **Locate relevant files** using Glob and Grep
2. **Read and understand** the code structure
3. **Identify patterns** and conventions
4. **Document findings** with file:line references

## Output Format

### Overview
Brief description of what this area does.

### Key Files
- `path/to/file.ts:10` - Purpose

### Patterns Found
- Pattern 1: Description
- Pattern 2: Description

### Dependencies
What this area depends on and what depends on it.

### Recommendations
Any improvements or concerns noted.
"""

# name -> (front-matter, body); order is the generation order.
_COMMANDS: dict[str, tuple[dict[str, str], str]] = {
    "task": (
        {
            "allowed-tools": "Read, Write, Edit, Glob, Grep",
            "argument-hint": "[task description]",
            "description": "Start or switch to a new task",
        },
        _TASK,
    ),
    "status": (
        {
            "allowed-tools": "Read, Glob",
            "description": "Show current task and session state",
        },
        _STATUS,
    ),
    "done": (
        {
            "allowed-tools": "Read, Write, Edit, Glob, Bash(git diff), Bash(git status)",
            "description": "Mark current task complete",
        },
        _DONE,
    ),
    "analyze": (
        {
            "allowed-tools": "Read, Glob, Grep",
            "argument-hint": "[area to analyze]",
            "description": "Deep analysis of a specific area",
        },
        _ANALYZE,
    ),
}


def generate_commands() -> list[Artifact]:
    return [
        Artifact(
            kind="command",
            path=f"{COMMANDS_DIR}/{name}.md",
            content=frontmatter.render(meta, body),
            summary=meta["description"],
        )
        for name, (meta, body) in _COMMANDS.items()
    ]
