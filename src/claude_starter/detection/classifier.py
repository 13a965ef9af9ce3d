"""Stack classification: turn a :class:`SignalBundle` into a :class:`StackDescriptor`.

Single-valued properties (package manager, test runner, linter, ...) are
resolved by ordered ``(predicate, tag)`` chains where the first match wins.
Languages and most frameworks are additive.  Front-end frameworks form an
exclusive chain: a meta-framework hides the base framework it is built on.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from claude_starter.detection.signals import collect_signals

if TYPE_CHECKING:
    from pathlib import Path

    from claude_starter.detection.signals import SignalBundle

logger = logging.getLogger(__name__)

Predicate = Callable[["SignalBundle"], bool]
Rule = tuple[Predicate, str]


@dataclass(frozen=True)
class StackDescriptor:
    """Detected technology stack.  Immutable once produced."""

    languages: tuple[str, ...] = ()
    frameworks: tuple[str, ...] = ()
    package_manager: str | None = None
    testing_framework: str | None = None
    linter: str | None = None
    formatter: str | None = None
    bundler: str | None = None
    is_monorepo: bool = False
    has_docker: bool = False
    has_cicd: bool = False
    cicd_platform: str | None = None
    has_existing_config: bool = False
    existing_config_paths: frozenset[str] = field(default_factory=frozenset)

    @property
    def primary_language(self) -> str | None:
        return self.languages[0] if self.languages else None

    @property
    def primary_framework(self) -> str | None:
        return self.frameworks[0] if self.frameworks else None

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation."""
        return {
            "languages": list(self.languages),
            "primary_language": self.primary_language,
            "frameworks": list(self.frameworks),
            "primary_framework": self.primary_framework,
            "package_manager": self.package_manager,
            "testing_framework": self.testing_framework,
            "linter": self.linter,
            "formatter": self.formatter,
            "bundler": self.bundler,
            "is_monorepo": self.is_monorepo,
            "has_docker": self.has_docker,
            "has_cicd": self.has_cicd,
            "cicd_platform": self.cicd_platform,
            "has_existing_config": self.has_existing_config,
            "existing_config_paths": sorted(self.existing_config_paths),
        }


# ---------------------------------------------------------------------------
# Predicate builders
# ---------------------------------------------------------------------------


def dependencies(signals: SignalBundle) -> dict[str, Any]:
    """Merged ``dependencies`` and ``devDependencies`` of the manifest."""
    manifest = signals.manifest
    if manifest is None:
        return {}
    merged: dict[str, Any] = {}
    for key in ("dependencies", "devDependencies"):
        section = manifest.get(key)
        if isinstance(section, dict):
            merged.update(section)
    return merged


def _file(*names: str) -> Predicate:
    return lambda s: any(s.has(n) for n in names)


def _dir(*names: str) -> Predicate:
    return lambda s: any(s.has_dir(n) for n in names)


def _prefix(*prefixes: str) -> Predicate:
    return lambda s: any(e.startswith(prefixes) for e in s.root_entries)


def _suffix(*suffixes: str) -> Predicate:
    return lambda s: any(e.endswith(suffixes) for e in s.root_entries)


def _dep(*names: str) -> Predicate:
    def check(s: SignalBundle) -> bool:
        deps = dependencies(s)
        return any(n in deps for n in names)

    return check


def _any(*predicates: Predicate) -> Predicate:
    return lambda s: any(p(s) for p in predicates)


def _eslint_config(s: SignalBundle) -> bool:
    return any(
        e.startswith("eslint.config") or e == ".eslintrc" or e.startswith(".eslintrc.")
        for e in s.root_entries
    )


def _bun_test_script(s: SignalBundle) -> bool:
    if s.manifest is None:
        return False
    scripts = s.manifest.get("scripts")
    if not isinstance(scripts, dict):
        return False
    test = scripts.get("test")
    return isinstance(test, str) and "bun test" in test


def _workspaces(s: SignalBundle) -> bool:
    return bool(s.manifest and s.manifest.get("workspaces"))


def _first_match(rules: Iterable[Rule], signals: SignalBundle) -> str | None:
    for predicate, tag in rules:
        if predicate(signals):
            return tag
    return None


# ---------------------------------------------------------------------------
# Rule tables
# ---------------------------------------------------------------------------

_LANGUAGE_RULES: tuple[Rule, ...] = (
    (
        _any(
            _file("tsconfig.json", "tsconfig.base.json"),
            _dep("typescript"),
            _suffix(".ts", ".tsx"),
        ),
        "typescript",
    ),
    (_any(lambda s: s.manifest is not None, _suffix(".js", ".mjs", ".cjs")), "javascript"),
    (
        _any(
            _file("pyproject.toml", "setup.py", "requirements.txt", "Pipfile"),
            _suffix(".py"),
        ),
        "python",
    ),
    (_file("go.mod", "go.sum"), "go"),
    (_file("Cargo.toml", "Cargo.lock"), "rust"),
    (_file("Gemfile", "Gemfile.lock"), "ruby"),
    (_file("pom.xml", "build.gradle", "build.gradle.kts"), "java"),
    (_suffix(".kt", ".kts"), "kotlin"),
    (_suffix(".csproj", ".sln"), "csharp"),
    (_any(_file("Package.swift"), _suffix(".swift")), "swift"),
    (_any(_file("composer.json"), _suffix(".php")), "php"),
)

# A looser language is dropped when its stricter sibling already matched.
_SUPPRESSED_BY = {"javascript": "typescript"}

# Most specific meta-framework first, its base framework last.
_FRONTEND_CHAIN: tuple[Rule, ...] = (
    (_dep("next"), "nextjs"),
    (_dep("nuxt", "nuxt3"), "nuxt"),
    (_dep("@sveltejs/kit"), "sveltekit"),
    (_dep("svelte"), "svelte"),
    (_dep("astro"), "astro"),
    (_dep("@remix-run/react"), "remix"),
    (_dep("gatsby"), "gatsby"),
    (_dep("solid-js"), "solid"),
    (_dep("@angular/core"), "angular"),
    (_dep("vue"), "vue"),
    (_dep("react"), "react"),
)

_ADDITIVE_FRAMEWORKS: tuple[Rule, ...] = (
    # Backend
    (_dep("@nestjs/core"), "nestjs"),
    (_dep("express"), "express"),
    (_dep("fastify"), "fastify"),
    (_dep("hono"), "hono"),
    (_dep("elysia"), "elysia"),
    (_dep("koa"), "koa"),
    # CSS / UI
    (_dep("tailwindcss"), "tailwind"),
    (_file("components.json"), "shadcn"),
    (_dep("@chakra-ui/react"), "chakra"),
    (_dep("@mui/material"), "mui"),
    # Database / ORM
    (_dep("prisma", "@prisma/client"), "prisma"),
    (_dep("drizzle-orm"), "drizzle"),
    (_dep("typeorm"), "typeorm"),
    (_dep("sequelize"), "sequelize"),
    (_dep("mongoose"), "mongoose"),
)

# (declaration files searched together, lower-case needle, tag)
_ECOSYSTEM_FALLBACK: tuple[tuple[tuple[str, ...], str, str], ...] = (
    (("requirements.txt", "pyproject.toml"), "fastapi", "fastapi"),
    (("requirements.txt", "pyproject.toml"), "django", "django"),
    (("requirements.txt", "pyproject.toml"), "flask", "flask"),
    (("requirements.txt", "pyproject.toml"), "starlette", "starlette"),
    (("requirements.txt", "pyproject.toml"), "sqlalchemy", "sqlalchemy"),
    (("Gemfile",), "rails", "rails"),
    (("Gemfile",), "sinatra", "sinatra"),
    (("go.mod",), "gin-gonic", "gin"),
    (("go.mod",), "labstack/echo", "echo"),
    (("go.mod",), "gofiber", "fiber"),
    (("Cargo.toml",), "actix", "actix"),
    (("Cargo.toml",), "axum", "axum"),
    (("Cargo.toml",), "rocket", "rocket"),
)

# Lock files first, fastest manager first.
PACKAGE_MANAGER_RULES: tuple[Rule, ...] = (
    (_file("bun.lockb", "bun.lock"), "bun"),
    (_file("pnpm-lock.yaml"), "pnpm"),
    (_file("yarn.lock"), "yarn"),
    (_file("package-lock.json"), "npm"),
    (_file("poetry.lock"), "poetry"),
    (_file("Pipfile.lock", "requirements.txt"), "pip"),
    (_file("Cargo.lock"), "cargo"),
    (_file("go.sum"), "go"),
    (_file("Gemfile.lock"), "bundler"),
    (_file("pom.xml"), "maven"),
    (_file("build.gradle", "build.gradle.kts"), "gradle"),
)

TESTING_RULES: tuple[Rule, ...] = (
    (_dep("vitest"), "vitest"),
    (_dep("jest"), "jest"),
    (_dep("mocha"), "mocha"),
    (_dep("@playwright/test"), "playwright"),
    (_dep("cypress"), "cypress"),
    (_bun_test_script, "bun-test"),
    (_file("pytest.ini", "conftest.py"), "pytest"),
    (_file("go.mod"), "go-test"),
    (_file("Cargo.toml"), "rust-test"),
    (_file("Gemfile"), "rspec"),
)

LINTER_RULES: tuple[Rule, ...] = (
    (_eslint_config, "eslint"),
    (_file("biome.json", "biome.jsonc"), "biome"),
    (_dep("eslint"), "eslint"),
    (_dep("@biomejs/biome"), "biome"),
    (_file("ruff.toml", ".ruff.toml"), "ruff"),
    (_file(".flake8", "setup.cfg"), "flake8"),
)

FORMATTER_RULES: tuple[Rule, ...] = (
    (_any(_prefix(".prettierrc"), _file("prettier.config.js", "prettier.config.mjs")), "prettier"),
    (_file("biome.json", "biome.jsonc"), "biome"),
    (_dep("prettier"), "prettier"),
    (_dep("@biomejs/biome"), "biome"),
    (_file("pyproject.toml"), "black"),
)

BUNDLER_RULES: tuple[Rule, ...] = (
    (_prefix("vite.config"), "vite"),
    (_prefix("webpack.config"), "webpack"),
    (_file("tsup.config.ts", "tsup.config.js"), "tsup"),
    (_prefix("rollup.config"), "rollup"),
    (_prefix("esbuild"), "esbuild"),
    (_dep("vite"), "vite"),
    (_dep("webpack"), "webpack"),
    (_dep("tsup"), "tsup"),
    (_dep("esbuild"), "esbuild"),
    (_dep("rollup"), "rollup"),
    (_dep("parcel"), "parcel"),
    (_dep("@vercel/turbopack"), "turbopack"),
    (_dep("@rspack/core"), "rspack"),
)

CICD_RULES: tuple[Rule, ...] = (
    (lambda s: s.has_ci_workflows, "github-actions"),
    (_file(".gitlab-ci.yml"), "gitlab-ci"),
    (_dir(".circleci"), "circleci"),
    (_file(".travis.yml"), "travis"),
    (_file("azure-pipelines.yml"), "azure-devops"),
    (_file("Jenkinsfile"), "jenkins"),
)

_MONOREPO_CHECKS: tuple[Predicate, ...] = (
    _file("pnpm-workspace.yaml", "lerna.json", "nx.json", "turbo.json"),
    _workspaces,
    _dir("packages", "apps"),
)

_DOCKER_CHECKS: tuple[Predicate, ...] = (
    _file("Dockerfile", "docker-compose.yml", "docker-compose.yaml"),
)


# ---------------------------------------------------------------------------
# Batteries
# ---------------------------------------------------------------------------


class _OrderedTags:
    """Insertion-ordered tag list guarded by a seen-set."""

    def __init__(self) -> None:
        self._tags: list[str] = []
        self._seen: set[str] = set()

    def add(self, tag: str) -> None:
        if tag not in self._seen:
            self._seen.add(tag)
            self._tags.append(tag)

    def __contains__(self, tag: object) -> bool:
        return tag in self._seen

    def as_tuple(self) -> tuple[str, ...]:
        return tuple(self._tags)


def detect_languages(signals: SignalBundle) -> tuple[str, ...]:
    languages = _OrderedTags()
    for predicate, tag in _LANGUAGE_RULES:
        stricter = _SUPPRESSED_BY.get(tag)
        if stricter is not None and stricter in languages:
            continue
        if predicate(signals):
            languages.add(tag)
    return languages.as_tuple()


def detect_frameworks(signals: SignalBundle) -> tuple[str, ...]:
    frameworks = _OrderedTags()

    if signals.manifest is None:
        texts: dict[tuple[str, ...], str] = {}
        for files, needle, tag in _ECOSYSTEM_FALLBACK:
            if files not in texts:
                texts[files] = "".join(signals.declarations.get(f, "") for f in files).lower()
            if needle in texts[files]:
                frameworks.add(tag)
        return frameworks.as_tuple()

    frontend = _first_match(_FRONTEND_CHAIN, signals)
    if frontend is not None:
        frameworks.add(frontend)

    for predicate, tag in _ADDITIVE_FRAMEWORKS:
        if predicate(signals):
            frameworks.add(tag)

    return frameworks.as_tuple()


def classify(signals: SignalBundle) -> StackDescriptor:
    """Classify *signals*.  Pure: equal bundles give equal descriptors."""
    cicd_platform = _first_match(CICD_RULES, signals)
    stack = StackDescriptor(
        languages=detect_languages(signals),
        frameworks=detect_frameworks(signals),
        package_manager=_first_match(PACKAGE_MANAGER_RULES, signals),
        testing_framework=_first_match(TESTING_RULES, signals),
        linter=_first_match(LINTER_RULES, signals),
        formatter=_first_match(FORMATTER_RULES, signals),
        bundler=_first_match(BUNDLER_RULES, signals),
        is_monorepo=any(check(signals) for check in _MONOREPO_CHECKS),
        has_docker=any(check(signals) for check in _DOCKER_CHECKS),
        has_cicd=cicd_platform is not None,
        cicd_platform=cicd_platform,
        has_existing_config=signals.has_config_dir or bool(signals.config_paths),
        existing_config_paths=frozenset(signals.config_paths),
    )
    logger.debug("Classified stack: %s", stack.to_dict())
    return stack


def detect_stack(project_root: Path, *, max_depth: int | None = None) -> StackDescriptor:
    """Collect signals under *project_root* and classify them."""
    if max_depth is None:
        return classify(collect_signals(project_root))
    return classify(collect_signals(project_root, max_depth=max_depth))


def summarize_stack(stack: StackDescriptor) -> str:
    """One-line human-readable summary, e.g. ``Language: python | Testing: pytest``."""
    parts: list[str] = []
    if stack.primary_language:
        parts.append(f"Language: {stack.primary_language}")
    if stack.primary_framework:
        parts.append(f"Framework: {stack.primary_framework}")
    if stack.package_manager:
        parts.append(f"Package Manager: {stack.package_manager}")
    if stack.testing_framework:
        parts.append(f"Testing: {stack.testing_framework}")
    if stack.is_monorepo:
        parts.append("Monorepo: yes")
    return " | ".join(parts)
