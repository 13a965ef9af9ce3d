"""Tests for claude_starter.config."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from claude_starter.config import CONFIG_FILENAME, ConfigError, StarterConfig, load_config

if TYPE_CHECKING:
    from pathlib import Path


def _write_config(root: Path, text: str) -> None:
    (root / CONFIG_FILENAME).write_text(text, encoding="utf-8")


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_config(tmp_path) == StarterConfig()

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "")
        assert load_config(tmp_path) == StarterConfig()

    def test_full_config(self, tmp_path: Path) -> None:
        _write_config(
            tmp_path,
            "max_depth: 3\n"
            "ignore:\n  - vendor\n  - '*.gen.ts'\n"
            "preserve:\n  - ./.claude/rules/code-style.md\n",
        )
        config = load_config(tmp_path)
        assert config.max_depth == 3
        assert config.ignore == ("vendor", "*.gen.ts")
        assert config.preserve == frozenset({".claude/rules/code-style.md"})

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "ignore: [unclosed\n")
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_config(tmp_path)

    def test_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(tmp_path)

    @pytest.mark.parametrize("value", ["-1", "deep", "true"])
    def test_bad_max_depth(self, tmp_path: Path, value: str) -> None:
        _write_config(tmp_path, f"max_depth: {value}\n")
        with pytest.raises(ConfigError, match="max_depth"):
            load_config(tmp_path)

    def test_ignore_must_be_string_list(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "ignore: vendor\n")
        with pytest.raises(ConfigError, match="'ignore'"):
            load_config(tmp_path)

    def test_config_error_is_value_error(self) -> None:
        assert issubclass(ConfigError, ValueError)

    def test_unknown_keys_warn(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        _write_config(tmp_path, "max_depth: 2\ncolour: blue\n")
        with caplog.at_level(logging.WARNING, logger="claude_starter.config"):
            config = load_config(tmp_path)
        assert config.max_depth == 2
        assert "colour" in caplog.text
