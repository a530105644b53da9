from __future__ import annotations

from pathlib import Path

import pytest

from settings.config import ConfigError, load_config


def _write_config(root: Path, toml_content: str) -> None:
    (root / "symref.toml").write_text(toml_content, encoding="utf-8")


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.default_notation == "canonical"
    assert config.json_output is False
    assert config.convert_targets == ["canonical", "ssa", "trace"]


def test_empty_config_accepted(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    config = load_config(tmp_path)

    assert config.default_notation == "canonical"


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
default_notation = "trace"
json_output = true
convert_targets = ["ssa", "canonical"]
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.default_notation == "trace"
    assert config.json_output is True
    assert config.convert_targets == ["ssa", "canonical"]


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError, match="Invalid config"):
        load_config(tmp_path)


def test_unknown_notation_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, 'default_notation = "llvm"')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "default_notation = ")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


@pytest.mark.parametrize(
    ("toml_content", "message"),
    [
        ("convert_targets = []", "at least one notation"),
        ('convert_targets = ["ssa", "ssa"]', "repeats notations: ssa"),
        ('convert_targets = "ssa"', "must be a list"),
        ('convert_targets = ["ssa", "llvm"]', "Invalid config"),
    ],
)
def test_convert_targets_rejected(
    tmp_path: Path, toml_content: str, message: str
) -> None:
    _write_config(tmp_path, toml_content)

    with pytest.raises(ConfigError, match=message):
        load_config(tmp_path)
