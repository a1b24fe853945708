from __future__ import annotations

from pathlib import Path

import pytest

from src.config.loader import ConfigError, load_config, resolve_config
from src.models.field_schema import DEFAULT_INVOICE_ROW_SCHEMA, FieldKind


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.output_directory == "./out"
    assert cfg.logs_directory == "./logs"
    assert cfg.row_schema.field_names[:2] == ["Customer", "Cust No"]
    rules = {r.name: r for r in cfg.row_schema}
    assert rules["Cust No"].kind is FieldKind.TEXT_OR_NUMBER
    assert rules["Quantity"].kind is FieldKind.NUMBER
    assert rules["Customer"].required is True
    assert rules["Notes"].required is False


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError, match="config file not found"):
        load_config(temp_workdir / "config" / "not_exists.yml")


def test_load_config_missing_required(write_config: Path):
    write_config.write_text("output_directory: ./out\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value) and "required property" in str(e.value)


def test_load_config_invalid_kind(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("kind: number}", "kind: integer}", 1)
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_load_config_extra_field(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_load_config_duplicate_field_names(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "  - {name: Customer, kind: text}\n"
    text = text.replace("output_directory: ./out\nlogs_directory: ./logs\n", "")
    write_config.write_text("output_directory: ./out\n" + text, encoding="utf-8")
    with pytest.raises(ConfigError, match="duplicate field names"):
        load_config(write_config)


def test_load_config_invalid_yaml(write_config: Path):
    write_config.write_text("row_schema: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(write_config)


def test_resolve_config_falls_back_to_builtin_schema(temp_workdir: Path):
    cfg = resolve_config()
    assert cfg.row_schema == DEFAULT_INVOICE_ROW_SCHEMA
    assert cfg.output_directory is None


def test_resolve_config_uses_default_path(write_config: Path):
    cfg = resolve_config()
    assert "Notes" in cfg.row_schema.field_names


def test_resolve_config_env_var(temp_workdir: Path, sample_config_yaml: str, monkeypatch):
    alt = temp_workdir / "alt.yml"
    alt.write_text(sample_config_yaml, encoding="utf-8")
    monkeypatch.setenv("INVOICE_IMPORT_CONFIG", str(alt))
    assert resolve_config().output_directory == "./out"


def test_resolve_config_explicit_missing_is_error(temp_workdir: Path):
    with pytest.raises(ConfigError):
        resolve_config(temp_workdir / "missing.yml")
