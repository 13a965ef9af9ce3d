"""Shared test fixtures for claude-starter."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


def write_files(root: Path, files: dict[str, Any]) -> Path:
    """Create *files* under *root*; dict values are dumped as JSON."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, dict):
            path.write_text(json.dumps(content), encoding="utf-8")
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture()
def make_project(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Return a factory that lays out a project in ``tmp_path``."""

    def factory(files: dict[str, Any]) -> Path:
        return write_files(tmp_path, files)

    return factory
