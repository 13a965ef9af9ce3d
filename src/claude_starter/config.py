"""Optional per-project settings read from ``.claude-starter.yml``."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".claude-starter.yml"

# Name of the reserved configuration subtree under the project root.
CONFIG_DIR = ".claude"

DEFAULT_MAX_DEPTH = 5


class ConfigError(ValueError):
    """Raised when ``.claude-starter.yml`` cannot be used."""


@dataclass(frozen=True)
class StarterConfig:
    """Tunables for a single run.

    ``ignore`` extends the source-file counting exclusions, ``preserve`` adds
    paths (relative to the project root) that a non-forced run never
    overwrites.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    ignore: tuple[str, ...] = ()
    preserve: frozenset[str] = field(default_factory=frozenset)


def _str_list(data: dict[str, Any], key: str) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        msg = f"{CONFIG_FILENAME}: '{key}' must be a list of strings"
        raise ConfigError(msg)
    return tuple(v.strip() for v in value if v.strip())


def load_config(project_root: Path) -> StarterConfig:
    """Load ``.claude-starter.yml`` from *project_root*.

    A missing file yields the defaults.  Unparseable YAML or values of the
    wrong type raise :class:`ConfigError`.
    """
    path = project_root / CONFIG_FILENAME
    if not path.is_file():
        return StarterConfig()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"cannot read {CONFIG_FILENAME}: {exc}"
        raise ConfigError(msg) from exc
    except yaml.YAMLError as exc:
        msg = f"invalid YAML in {CONFIG_FILENAME}: {exc}"
        raise ConfigError(msg) from exc

    if data is None:
        return StarterConfig()
    if not isinstance(data, dict):
        msg = f"{CONFIG_FILENAME} must contain a mapping"
        raise ConfigError(msg)

    unknown = set(data) - {"max_depth", "ignore", "preserve"}
    if unknown:
        logger.warning("Ignoring unknown keys in %s: %s", CONFIG_FILENAME, sorted(unknown))

    max_depth = data.get("max_depth", DEFAULT_MAX_DEPTH)
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
        msg = f"{CONFIG_FILENAME}: 'max_depth' must be a non-negative integer"
        raise ConfigError(msg)

    preserve = frozenset(p.removeprefix("./") for p in _str_list(data, "preserve"))
    return StarterConfig(
        max_depth=max_depth,
        ignore=_str_list(data, "ignore"),
        preserve=preserve,
    )
