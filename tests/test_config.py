from pathlib import Path

import pytest

from snip.config import get_settings, load_config


def test_load_config_defaults():
    conf = load_config()
    assert conf.STORAGE_PATH == Path.home() / ".snip" / "snippets.json"
    assert conf.LOG_LEVEL == "INFO"
    assert conf.LOG_FORMAT == "json"
    assert conf.AUTOSAVE_INTERVAL_SECONDS == 0
    assert conf.JSON_INDENT == 2


def test_load_config_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("SNIP_STORAGE_PATH", str(tmp_path / "s.json"))
    monkeypatch.setenv("SNIP_LOG_LEVEL", "debug")
    monkeypatch.setenv("SNIP_LOG_FORMAT", "Console")
    monkeypatch.setenv("SNIP_AUTOSAVE_INTERVAL_SECONDS", "30")
    conf = load_config()
    assert conf.STORAGE_PATH == tmp_path / "s.json"
    assert conf.LOG_LEVEL == "DEBUG"
    assert conf.LOG_FORMAT == "console"
    assert conf.AUTOSAVE_INTERVAL_SECONDS == 30.0


def test_storage_path_expands_user(monkeypatch):
    monkeypatch.setenv("SNIP_STORAGE_PATH", "~/notes/snip.json")
    conf = load_config()
    assert conf.STORAGE_PATH == Path.home() / "notes" / "snip.json"


@pytest.mark.parametrize(
    "key,value",
    [
        ("SNIP_LOG_LEVEL", "verbose"),
        ("SNIP_LOG_FORMAT", "xml"),
        ("SNIP_AUTOSAVE_INTERVAL_SECONDS", "-1"),
        ("SNIP_JSON_INDENT", "20"),
    ],
)
def test_invalid_values_raise_value_error(monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(ValueError):
        load_config()


def test_get_settings_is_cached(monkeypatch, tmp_path):
    monkeypatch.setenv("SNIP_STORAGE_PATH", str(tmp_path / "a.json"))
    first = get_settings()
    monkeypatch.setenv("SNIP_STORAGE_PATH", str(tmp_path / "b.json"))
    assert get_settings() is first
    get_settings.cache_clear()
    assert get_settings().STORAGE_PATH == tmp_path / "b.json"
