import pytest

from portal.utils.feature_flags import (
    get_feature_flags,
    is_feature_enabled,
    legacy_admin_redirects_enabled,
    refresh_feature_flag_cache,
)

ENV_NAME = "LEGACY_ADMIN_REDIRECTS_ENABLED"


@pytest.fixture(autouse=True)
def reset_flags(monkeypatch):
    """Clear env + cached values for each test to avoid cross-contamination."""
    monkeypatch.delenv(ENV_NAME, raising=False)
    refresh_feature_flag_cache()
    yield
    refresh_feature_flag_cache()


def test_get_feature_flags_defaults_true():
    assert get_feature_flags() == {"legacy_admin_redirects_enabled": True}
    assert legacy_admin_redirects_enabled() is True


@pytest.mark.parametrize("raw_value", ["false", "0", "no", "off", "OFF"])
def test_flag_disabled_via_env(monkeypatch, raw_value):
    monkeypatch.setenv(ENV_NAME, raw_value)
    refresh_feature_flag_cache()

    assert is_feature_enabled("legacy_admin_redirects_enabled") is False
    assert legacy_admin_redirects_enabled() is False


@pytest.mark.parametrize("raw_value", ["maybe", "junk", "2", "", "   "])
def test_invalid_value_falls_back_to_default(monkeypatch, raw_value):
    monkeypatch.setenv(ENV_NAME, raw_value)
    refresh_feature_flag_cache()

    assert legacy_admin_redirects_enabled() is True


def test_refresh_feature_flag_cache_forces_reload(monkeypatch):
    monkeypatch.setenv(ENV_NAME, "false")
    refresh_feature_flag_cache()
    assert legacy_admin_redirects_enabled() is False

    # Update env without clearing cache; the stale value is still returned
    monkeypatch.setenv(ENV_NAME, "true")
    assert legacy_admin_redirects_enabled() is False

    refresh_feature_flag_cache()
    assert legacy_admin_redirects_enabled() is True
