"""Agent persona documents (reviewer, test writer, docker helper)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from claude_starter.generation import frontmatter
from claude_starter.generation.labels import lint_command, run_tests_command
from claude_starter.generation.models import Artifact

if TYPE_CHECKING:
    from claude_starter.detection.classifier import StackDescriptor

AGENTS_DIR = ".claude/agents"


def _agent(name: str, meta: dict[str, str], summary: str, body: str) -> Artifact:
    return Artifact(
        kind="agent",
        path=f"{AGENTS_DIR}/{name}.md",
        content=frontmatter.render({"name": name, **meta}, body),
        summary=summary,
    )


def _style_references(stack: StackDescriptor) -> list[str]:
    refs: list[str] = []
    if stack.linter == "eslint":
        refs.append("- `eslint.config.js` or `.eslintrc.*`")
    elif stack.linter == "biome":
        refs.append("- `biome.json`")
    elif stack.linter == "ruff":
        refs.append("- `ruff.toml` or `[tool.ruff]` in `pyproject.toml`")
    elif stack.linter == "flake8":
        refs.append("- `.flake8` or `setup.cfg`")
    if stack.formatter == "prettier":
        refs.append("- `.prettierrc`")
    if "typescript" in stack.languages:
        refs.append("- `tsconfig.json`")
    if "python" in stack.languages:
        refs.append("- `pyproject.toml` or `setup.cfg`")
    return refs


def build_code_reviewer(stack: StackDescriptor) -> Artifact:
    lint = lint_command(stack)
    tools = "Read, Grep, Glob" + (f", Bash({lint})" if lint else "")

    sections = ["You are a senior code reviewer with expertise in security and performance.\n"]

    refs = _style_references(stack)
    if refs:
        sections.append(
            "## Code Style Reference\n\n"
            "Read these files to understand project conventions:\n" + "\n".join(refs) + "\n"
        )
    if lint:
        sections.append(f"Run `{lint}` to check violations programmatically.\n")

    sections.append(
        "## Review Process\n"
        "\n"
        "1. Run `git diff` to identify changed files\n"
        "2. Analyze each change for:\n"
        "   - Security vulnerabilities (OWASP Top 10)\n"
        "   - Performance issues\n"
        "   - Code style violations\n"
        "   - Missing error handling\n"
        "   - Test coverage gaps\n"
    )
    sections.append(
        "## Output Format\n"
        "\n"
        "For each finding:\n"
        "\n"
        "- **Critical**: Must fix before merge\n"
        "- **Warning**: Should address\n"
        "- **Suggestion**: Consider improving\n"
        "\n"
        "Include file:line references for each issue.\n"
    )

    return _agent(
        "code-reviewer",
        {
            "description": "Reviews code for quality, security issues, and best practices",
            "tools": tools,
            "disallowedTools": "Write, Edit",
            "model": "sonnet",
        },
        "Reviews code for quality and security",
        "\n".join(sections),
    )


def build_test_writer(stack: StackDescriptor) -> Artifact:
    command = run_tests_command(stack)
    body = (
        "You are a testing expert who writes thorough, maintainable tests.\n"
        "\n"
        "## Testing Framework\n"
        "\n"
        f"This project uses: **{stack.testing_framework or 'unknown'}**\n"
        "\n"
        "## Your Process\n"
        "\n"
        "1. Read the code to be tested\n"
        "2. Identify test cases:\n"
        "   - Happy path scenarios\n"
        "   - Edge cases\n"
        "   - Error conditions\n"
        "   - Boundary values\n"
        "3. Write tests following project patterns\n"
        "4. Run tests to verify they pass\n"
        "\n"
        "## Test Structure\n"
        "\n"
        "Follow the AAA pattern:\n"
        "- **Arrange**: Set up test data\n"
        "- **Act**: Execute the code\n"
        "- **Assert**: Verify results\n"
        "\n"
        "## Guidelines\n"
        "\n"
        "- One assertion focus per test\n"
        "- Descriptive test names\n"
        "- Mock external dependencies\n"
        "- Don't test implementation details\n"
        "- Aim for behavior coverage\n"
        "\n"
        "## Run Tests\n"
        "\n"
        "```bash\n"
        f"{command}\n"
        "```\n"
    )
    return _agent(
        "test-writer",
        {
            "description": "Generates comprehensive tests for code",
            "tools": f"Read, Grep, Glob, Write, Edit, Bash({command})",
            "model": "sonnet",
        },
        "Generates tests for code",
        body,
    )


_DOCKER_HELPER = """\
You help with Docker images, compose files and container workflows.

## Before Changing Anything

1. Read `Dockerfile` and any `docker-compose.yml` / `docker-compose.yaml`
2. Note the base image, exposed ports, volumes and environment variables
3. Check `.dockerignore` before adding new build context

## Guidelines

- Pin base image versions; avoid `latest`
- Use multi-stage builds to keep runtime images small
- Copy dependency manifests before source code to preserve layer caching
- Run as a non-root user where possible
- Never bake secrets into images; pass them at runtime

## Useful Commands

```bash
docker compose build
docker compose up -d
docker compose logs -f
docker compose down
```
"""


def build_docker_helper() -> Artifact:
    return _agent(
        "docker-helper",
        {
            "description": "Helps with Docker images, compose files and containerization",
            "tools": "Read, Grep, Glob, Edit, Bash(docker:*), Bash(docker-compose:*)",
            "model": "sonnet",
        },
        "Helps with Docker and containerization",
        _DOCKER_HELPER,
    )


def generate_agents(stack: StackDescriptor) -> list[Artifact]:
    agents = [build_code_reviewer(stack), build_test_writer(stack)]
    if stack.has_docker:
        agents.append(build_docker_helper())
    return agents
