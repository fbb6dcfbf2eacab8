"""Tests for settings loading, persistence and vault resolution."""

import json

import pytest
from pydantic import ValidationError

from timelog.config import (
    DEFAULT_HEADER_FORMAT,
    TimelogConfig,
    load_daily_note_format,
    resolve_vault_root,
)


def test_defaults():
    config = TimelogConfig()
    assert config.replacement_interval == 30
    assert config.use_list is False
    assert config.log_format == "HH:mm"
    assert config.debounce_ms == 500


def test_persisted_aliases_are_accepted():
    config = TimelogConfig.model_validate(
        {"replacementInterval": 45, "useList": True, "logFormat": "HH:mm:ss", "debounceMs": 250}
    )
    assert config.replacement_interval == 45
    assert config.use_list is True
    assert config.log_format == "HH:mm:ss"
    assert config.debounce_ms == 250


def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        TimelogConfig(log_format="")
    with pytest.raises(ValidationError):
        TimelogConfig(replacement_interval=0)
    with pytest.raises(ValidationError):
        TimelogConfig(debounce_ms=-1)


def test_config_is_frozen():
    config = TimelogConfig()
    with pytest.raises(ValidationError):
        config.use_list = True


def test_load_without_file_uses_defaults(vault_paths):
    assert TimelogConfig.load(vault_paths) == TimelogConfig()


def test_save_then_load(vault_paths):
    """Test that saved settings are read back from config.toml."""
    config = TimelogConfig(replacement_interval=45, use_list=True, log_format='HH:mm "sharp"')

    config_file = config.save(vault_paths)

    assert "replacementInterval = 45" in config_file.read_text()
    assert TimelogConfig.load(vault_paths) == config


def test_malformed_file_is_ignored(vault_paths):
    vault_paths.config_file.write_text("replacementInterval = = 3\n")
    assert TimelogConfig.load(vault_paths) == TimelogConfig()


def test_invalid_persisted_values_are_ignored(vault_paths):
    vault_paths.config_file.write_text('replacementInterval = 0\nlogFormat = "HH:mm"\n')
    assert TimelogConfig.load(vault_paths) == TimelogConfig()


def test_interval_above_setter_range_loads(vault_paths):
    vault_paths.config_file.write_text('replacementInterval = 300\nuseList = true\nlogFormat = "HH:mm:ss"\n')

    config = TimelogConfig.load(vault_paths)

    assert config.replacement_interval == 300
    assert config.use_list is True
    assert config.log_format == "HH:mm:ss"


def test_invalid_field_falls_back_alone(vault_paths):
    vault_paths.config_file.write_text('replacementInterval = 90\ndebounceMs = -5\nlogFormat = "HH:mm:ss"\n')

    config = TimelogConfig.load(vault_paths)

    assert config.replacement_interval == 90
    assert config.log_format == "HH:mm:ss"
    assert config.debounce_ms == 500


def test_env_overrides(vault_paths, monkeypatch):
    TimelogConfig(replacement_interval=45).save(vault_paths)
    monkeypatch.setenv("TIMELOG_USE_LIST", "yes")
    monkeypatch.setenv("TIMELOG_LOG_FORMAT", "HH:mm:ss")

    config = TimelogConfig.load(vault_paths)

    assert config.replacement_interval == 45
    assert config.use_list is True
    assert config.log_format == "HH:mm:ss"
    assert TimelogConfig.load(vault_paths, apply_env=False).use_list is False


def test_invalid_env_overrides_keep_snapshot(vault_paths, monkeypatch):
    TimelogConfig(replacement_interval=45, log_format="HH:mm:ss").save(vault_paths)
    monkeypatch.setenv("TIMELOG_LOG_FORMAT", "")
    monkeypatch.setenv("TIMELOG_REPLACEMENT_INTERVAL", "abc")
    monkeypatch.setenv("TIMELOG_DEBOUNCE_MS", "250")

    config = TimelogConfig.load(vault_paths)

    assert config.replacement_interval == 45
    assert config.log_format == "HH:mm:ss"
    assert config.debounce_ms == 250


def test_daily_note_format_default(vault_paths):
    assert load_daily_note_format(vault_paths) == DEFAULT_HEADER_FORMAT


def test_daily_note_format_from_settings(vault_paths):
    vault_paths.daily_notes_settings.write_text(json.dumps({"format": "DD.MM.YYYY", "folder": "Daily"}))
    assert load_daily_note_format(vault_paths) == "DD.MM.YYYY"


def test_daily_note_format_blank_or_broken(vault_paths):
    vault_paths.daily_notes_settings.write_text(json.dumps({"format": ""}))
    assert load_daily_note_format(vault_paths) == DEFAULT_HEADER_FORMAT

    vault_paths.daily_notes_settings.write_text("{not json")
    assert load_daily_note_format(vault_paths) == DEFAULT_HEADER_FORMAT


def test_resolve_vault_from_cli(temp_vault):
    assert resolve_vault_root(cli_vault_path=str(temp_vault)) == temp_vault.resolve()


def test_resolve_vault_missing_cli_path(tmp_path):
    with pytest.raises(FileNotFoundError):
        resolve_vault_root(cli_vault_path=str(tmp_path / "missing"))


def test_resolve_vault_from_env(temp_vault, monkeypatch):
    monkeypatch.setenv("TIMELOG_VAULT", str(temp_vault))
    assert resolve_vault_root() == temp_vault.resolve()


def test_resolve_vault_walks_up_from_document(temp_vault):
    note = temp_vault / "Journal" / "2024" / "Log.md"
    note.parent.mkdir(parents=True)
    note.write_text("")
    assert resolve_vault_root(note) == temp_vault.resolve()
