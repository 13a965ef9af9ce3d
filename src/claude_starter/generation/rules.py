"""Path-scoped rule documents under ``.claude/rules``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from claude_starter.generation import frontmatter
from claude_starter.generation.models import Artifact

if TYPE_CHECKING:
    from claude_starter.detection.classifier import StackDescriptor

RULES_DIR = ".claude/rules"

_TYPESCRIPT = """\
# TypeScript Rules

## Type Safety

- Avoid `any` - use `unknown` and narrow types
- Prefer interfaces for objects, types for unions/intersections
- Use strict mode (`strict: true` in tsconfig)
- Enable `noUncheckedIndexedAccess` for safer array access

## Patterns

```typescript
// Prefer
const user: User | undefined = users.find(u => u.id === id);
if (user) { /* use user */ }

// Avoid
const user = users.find(u => u.id === id) as User;
```

## Naming

- Interfaces: PascalCase (e.g., `UserProfile`)
- Types: PascalCase (e.g., `ApiResponse`)
- Functions: camelCase (e.g., `getUserById`)
- Constants: SCREAMING_SNAKE_CASE for true constants

## Imports

- Group imports: external, internal, relative
- Use path aliases when configured
- Prefer named exports over default exports
"""

_PYTHON = '''\
# Python Rules

## Style

- Follow PEP 8
- Use type hints for function signatures
- Docstrings for public functions (Google style)
- Max line length: 88 (Black default)

## Patterns

```python
# Prefer
def get_user(user_id: int) -> User | None:
    """Fetch user by ID.

    Args:
        user_id: The user's unique identifier.

    Returns:
        User object if found, None otherwise.
    """
    return db.query(User).filter(User.id == user_id).first()

# Avoid
def get_user(id):
    return db.query(User).filter(User.id == id).first()
```

## Naming

- Functions/variables: snake_case
- Classes: PascalCase
- Constants: SCREAMING_SNAKE_CASE
- Private: _leading_underscore

## Imports

```python
# Standard library
import os
from pathlib import Path

# Third-party
from fastapi import FastAPI
from pydantic import BaseModel

# Local
from app.models import User
from app.services import UserService
```
'''

_CODE_STYLE_HEAD = """\
# Code Style

## General Principles

1. **Clarity over cleverness** - Code is read more than written
2. **Consistency** - Match existing patterns in the codebase
3. **Simplicity** - Prefer simple solutions over complex ones

## Formatting
"""

_CODE_STYLE_TAIL = """\
## Comments

- Write self-documenting code first
- Comment the "why", not the "what"
- Keep comments up to date with code changes
- Use TODO/FIXME with context

## Error Handling

- Handle errors at appropriate boundaries
- Provide meaningful error messages
- Log errors with context
- Don't swallow errors silently

## Git Commits

- Write clear, concise commit messages
- Use conventional commits format when applicable
- Keep commits focused and atomic
"""


def _rule(name: str, content: str) -> Artifact:
    return Artifact(kind="rule", path=f"{RULES_DIR}/{name}.md", content=content)


def typescript_rules() -> Artifact:
    return _rule("typescript", frontmatter.render({"paths": ["**/*.ts", "**/*.tsx"]}, _TYPESCRIPT))


def python_rules() -> Artifact:
    return _rule("python", frontmatter.render({"paths": ["**/*.py"]}, _PYTHON))


def code_style_rules(stack: StackDescriptor) -> Artifact:
    """Universal style rule; mentions the formatter and linter when known."""
    if stack.formatter:
        formatting = (
            f"This project uses **{stack.formatter}** for formatting. Run it before committing."
        )
    else:
        formatting = "Format code consistently with the existing codebase."

    parts = [_CODE_STYLE_HEAD, formatting + "\n"]
    if stack.linter:
        parts.append(f"This project uses **{stack.linter}** for linting. Fix all warnings.\n")
    parts.append(_CODE_STYLE_TAIL)
    return _rule("code-style", "\n".join(parts))


def generate_rules(stack: StackDescriptor) -> list[Artifact]:
    rules: list[Artifact] = []
    if "typescript" in stack.languages:
        rules.append(typescript_rules())
    if "python" in stack.languages:
        rules.append(python_rules())
    rules.append(code_style_rules(stack))
    return rules
