"""Tests for compiler configuration loading."""

from pathlib import Path

import pytest

from cdl.config import CompilerOptions, apply_cli_overrides, load_config, locate_config_file
from cdl.errors import CDLConfigError


def test_defaults_without_config(tmp_path: Path):
    assert load_config(tmp_path) == CompilerOptions()


def test_cdl_toml_compiler_table(tmp_path: Path):
    (tmp_path / "cdl.toml").write_text(
        '[compiler]\nstrict = true\nsubstitution = "text"\nlayout = "row"\n',
        encoding="utf-8",
    )

    options = load_config(tmp_path)

    assert options.strict is True
    assert options.substitution == "text"
    assert options.layout == "row"
    assert options.event == "input"


def test_pyproject_tool_table(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "site"\n\n[tool.cdl]\nevent = "change"\n',
        encoding="utf-8",
    )

    assert load_config(tmp_path).event == "change"


def test_cdl_toml_takes_precedence(tmp_path: Path):
    (tmp_path / "cdl.toml").write_text("[compiler]\nstrict = true\n", encoding="utf-8")
    (tmp_path / "pyproject.toml").write_text("[tool.cdl]\nstrict = false\n", encoding="utf-8")

    assert locate_config_file(tmp_path) == tmp_path / "cdl.toml"
    assert load_config(tmp_path).strict is True


def test_explicit_config_file(tmp_path: Path):
    custom = tmp_path / "custom.toml"
    custom.write_text('[compiler]\nlog_level = "debug"\n', encoding="utf-8")

    assert load_config(tmp_path, custom).log_level == "debug"


def test_missing_explicit_config_file(tmp_path: Path):
    with pytest.raises(CDLConfigError) as exc_info:
        load_config(tmp_path, tmp_path / "nope.toml")

    assert "not found" in exc_info.value.message


def test_unknown_key_is_rejected(tmp_path: Path):
    (tmp_path / "cdl.toml").write_text("[compiler]\nminify = true\n", encoding="utf-8")

    with pytest.raises(CDLConfigError) as exc_info:
        load_config(tmp_path)

    assert exc_info.value.key == "minify"
    assert exc_info.value.path.endswith("cdl.toml")


def test_invalid_value_reports_file(tmp_path: Path):
    (tmp_path / "cdl.toml").write_text('[compiler]\nsubstitution = "regex"\n', encoding="utf-8")

    with pytest.raises(CDLConfigError) as exc_info:
        load_config(tmp_path)

    assert exc_info.value.key == "substitution"
    assert exc_info.value.path.endswith("cdl.toml")


def test_strict_must_be_boolean(tmp_path: Path):
    (tmp_path / "cdl.toml").write_text('[compiler]\nstrict = "yes"\n', encoding="utf-8")

    with pytest.raises(CDLConfigError):
        load_config(tmp_path)


def test_invalid_toml(tmp_path: Path):
    (tmp_path / "cdl.toml").write_text("[compiler\n", encoding="utf-8")

    with pytest.raises(CDLConfigError) as exc_info:
        load_config(tmp_path)

    assert "Invalid TOML" in exc_info.value.message


@pytest.mark.parametrize(
    "kwargs",
    [
        {"substitution": "regex"},
        {"layout": "grid"},
        {"event": ""},
        {"event": "on click"},
        {"log_level": "LOUD"},
    ],
)
def test_options_validate_fields(kwargs):
    with pytest.raises(CDLConfigError):
        CompilerOptions(**kwargs)


def test_cli_overrides_only_replace_given_values():
    base = CompilerOptions(substitution="text", event="change")

    assert apply_cli_overrides(base) is base
    updated = apply_cli_overrides(base, strict=True, layout="row")
    assert updated == CompilerOptions(strict=True, substitution="text", event="change", layout="row")
