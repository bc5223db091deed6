import pytest

from grc.utils.settings import get_settings, refresh_settings_cache


def test_defaults():
    settings = get_settings()
    assert settings.log_level == "INFO"
    assert settings.items_per_page == 30
    assert settings.max_items_per_page == 100
    assert settings.change_log_enabled is True
    assert settings.audit_trail_enabled is True


def test_settings_are_cached_until_refresh(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("PAGINATION_ITEMS_PER_PAGE", "10")
    assert get_settings() is first

    refresh_settings_cache()
    assert get_settings().items_per_page == 10


@pytest.mark.parametrize("env_name,attr", [
    ("CHANGE_LOG_ENABLED", "change_log_enabled"),
    ("AUDIT_TRAIL_ENABLED", "audit_trail_enabled"),
])
def test_toggle_disabled_via_env(monkeypatch, env_name, attr):
    monkeypatch.setenv(env_name, "false")
    refresh_settings_cache()
    assert getattr(get_settings(), attr) is False


@pytest.mark.parametrize("raw_value", ["maybe", "2"])
def test_invalid_toggle_falls_back_to_default(monkeypatch, raw_value):
    monkeypatch.setenv("CHANGE_LOG_ENABLED", raw_value)
    refresh_settings_cache()
    assert get_settings().change_log_enabled is True


@pytest.mark.parametrize("raw_value", ["zero", "-5", "0"])
def test_invalid_page_size_falls_back_to_default(monkeypatch, raw_value):
    monkeypatch.setenv("PAGINATION_ITEMS_PER_PAGE", raw_value)
    refresh_settings_cache()
    assert get_settings().items_per_page == 30


def test_page_size_capped_by_maximum(monkeypatch):
    monkeypatch.setenv("PAGINATION_ITEMS_PER_PAGE", "50")
    monkeypatch.setenv("PAGINATION_MAX_ITEMS_PER_PAGE", "20")
    refresh_settings_cache()
    settings = get_settings()
    assert settings.items_per_page == 20
    assert settings.max_items_per_page == 20


def test_log_level_is_upper_cased(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    refresh_settings_cache()
    assert get_settings().log_level == "DEBUG"
