"""YAML front-matter headers for skill, agent, rule and command documents."""

from __future__ import annotations

from typing import Any

import yaml


def render(meta: dict[str, Any], body: str) -> str:
    """Prefix *body* with a ``---`` delimited YAML header built from *meta*.

    Keys keep their insertion order.
    """
    header = yaml.safe_dump(
        meta,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=4096,
    )
    return f"---\n{header}---\n\n{body}"

