"""Display names and stack-derived shell commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from claude_starter.detection.classifier import StackDescriptor

LANGUAGE_NAMES: dict[str, str] = {
    "typescript": "TypeScript",
    "javascript": "JavaScript",
    "python": "Python",
    "go": "Go",
    "rust": "Rust",
    "java": "Java",
    "ruby": "Ruby",
    "csharp": "C#",
    "swift": "Swift",
    "kotlin": "Kotlin",
    "php": "PHP",
    "cpp": "C++",
}

FRAMEWORK_NAMES: dict[str, str] = {
    "nextjs": "Next.js",
    "react": "React",
    "vue": "Vue.js",
    "nuxt": "Nuxt",
    "svelte": "Svelte",
    "sveltekit": "SvelteKit",
    "angular": "Angular",
    "astro": "Astro",
    "remix": "Remix",
    "gatsby": "Gatsby",
    "solid": "Solid.js",
    "express": "Express",
    "nestjs": "NestJS",
    "fastify": "Fastify",
    "hono": "Hono",
    "elysia": "Elysia",
    "koa": "Koa",
    "fastapi": "FastAPI",
    "django": "Django",
    "flask": "Flask",
    "starlette": "Starlette",
    "gin": "Gin",
    "echo": "Echo",
    "fiber": "Fiber",
    "actix": "Actix",
    "axum": "Axum",
    "rocket": "Rocket",
    "rails": "Rails",
    "sinatra": "Sinatra",
    "spring": "Spring",
    "quarkus": "Quarkus",
    "tailwind": "Tailwind CSS",
    "shadcn": "shadcn/ui",
    "chakra": "Chakra UI",
    "mui": "Material UI",
    "prisma": "Prisma",
    "drizzle": "Drizzle",
    "typeorm": "TypeORM",
    "sequelize": "Sequelize",
    "mongoose": "Mongoose",
    "sqlalchemy": "SQLAlchemy",
}


def format_language(tag: str) -> str:
    return LANGUAGE_NAMES.get(tag, tag)


def format_framework(tag: str) -> str:
    return FRAMEWORK_NAMES.get(tag, tag)


def _js_runner(stack: StackDescriptor) -> str:
    return "bun" if stack.package_manager == "bun" else "npx"


def lint_command(stack: StackDescriptor) -> str:
    """Shell command running the detected linter, or ``""`` if unknown."""
    if stack.linter == "eslint":
        return f"{_js_runner(stack)} eslint ."
    if stack.linter == "biome":
        return f"{_js_runner(stack)} biome check ."
    if stack.linter == "ruff":
        return "ruff check ."
    return ""


def run_tests_command(stack: StackDescriptor) -> str:
    """Shell command running the test suite; always non-empty."""
    manager = stack.package_manager or "npm"
    framework = stack.testing_framework
    if framework in ("vitest", "jest"):
        run = "run " if stack.package_manager == "npm" else ""
        return f"{manager} {run}test"
    if framework == "bun-test":
        return "bun test"
    if framework == "pytest":
        return "pytest"
    if framework == "go-test":
        return "go test ./..."
    if framework == "rust-test":
        return "cargo test"
    return f"{manager} test"


# Per package manager: (comment, command) steps for "Common Operations".
_COMMON_STEPS: dict[str, tuple[tuple[str, str], ...]] = {
    "bun": (
        ("Install dependencies", "bun install"),
        ("Run development server", "bun dev"),
        ("Run tests", "bun test"),
        ("Build", "bun run build"),
    ),
    "pnpm": (
        ("Install dependencies", "pnpm install"),
        ("Run development server", "pnpm dev"),
        ("Run tests", "pnpm test"),
    ),
    "yarn": (
        ("Install dependencies", "yarn"),
        ("Run development server", "yarn dev"),
        ("Run tests", "yarn test"),
    ),
    "npm": (
        ("Install dependencies", "npm install"),
        ("Run development server", "npm run dev"),
        ("Run tests", "npm test"),
    ),
    "pip": (
        ("Install dependencies", "pip install -r requirements.txt"),
        ("Run tests", "pytest"),
        ("Run server", "uvicorn main:app --reload"),
    ),
    "poetry": (
        ("Install dependencies", "poetry install"),
        ("Run tests", "pytest"),
        ("Run server", "uvicorn main:app --reload"),
    ),
    "cargo": (
        ("Build", "cargo build"),
        ("Run tests", "cargo test"),
        ("Run", "cargo run"),
    ),
    "go": (
        ("Run tests", "go test ./..."),
        ("Build", "go build"),
        ("Run", "go run ."),
    ),
}


def common_commands(stack: StackDescriptor) -> str:
    """Body of the "Common Operations" bash block."""
    steps = _COMMON_STEPS.get(stack.package_manager or "")
    blocks: list[str] = []
    if steps is None:
        blocks.append("# No package manager detected\n# Add your common commands here")
    else:
        blocks.extend(f"# {comment}\n{command}" for comment, command in steps)

    lint = lint_command(stack)
    if lint:
        blocks.append(f"# Lint\n{lint}")

    return "\n\n".join(blocks)
