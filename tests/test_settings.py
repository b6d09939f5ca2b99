import pytest

from social_authorize.exceptions import ConfigurationError
from social_authorize.settings import (
    ClientCredential,
    DeveloperKey,
    StrategySettings,
    get_settings,
    resolve_settings,
)
from social_authorize.strategies import GoogleStrategy

from conftest import CLIENT_SETTINGS


@pytest.mark.parametrize(
    "overrides",
    [
        {"application_name": None},
        {"redirect_url": ""},
        {"secret": None},
        {"id": None},
        {"id": None, "secret": None},
    ],
)
def test_incomplete_settings_raise(overrides):
    settings = {**CLIENT_SETTINGS, **overrides}
    with pytest.raises(ConfigurationError):
        resolve_settings(settings)


def test_strategy_construction_fails_fast():
    with pytest.raises(ConfigurationError):
        GoogleStrategy({"application_name": "x", "redirect_url": "https://x/cb"})


def test_client_credential_resolved():
    settings = resolve_settings(CLIENT_SETTINGS)
    assert isinstance(settings.credential, ClientCredential)
    assert settings.client.id == CLIENT_SETTINGS["id"]
    assert settings.developer_key is None
    assert settings.state is None


def test_developer_key_resolved():
    settings = resolve_settings(
        {"application_name": "x", "redirect_url": "https://x/cb", "developer_key": "AIza-key", "id": "lonely-id"}
    )
    assert isinstance(settings.credential, DeveloperKey)
    assert settings.developer_key == "AIza-key"
    assert settings.client is None


def test_client_pair_wins_over_developer_key():
    settings = resolve_settings({**CLIENT_SETTINGS, "developer_key": "AIza-key", "state": "xyz"})
    assert isinstance(settings.credential, ClientCredential)
    assert settings.developer_key is None
    assert settings.state == "xyz"


def test_resolved_settings_are_immutable():
    settings = resolve_settings(CLIENT_SETTINGS)
    assert resolve_settings(settings) is settings
    with pytest.raises(Exception):
        settings.redirect_url = "https://elsewhere"  # type: ignore[misc]
    assert isinstance(settings, StrategySettings)


def test_env_settings(monkeypatch):
    monkeypatch.setenv("SOCIAL_AUTHORIZE_GOOGLE__CLIENT_ID", "env-id")
    monkeypatch.setenv("SOCIAL_AUTHORIZE_GOOGLE__MAX_PAGES", "5")
    get_settings.cache_clear()  # type: ignore[attr-defined]

    google = get_settings().google
    assert google.client_id == "env-id"
    assert google.max_pages == 5
    assert "https://www.google.com/m8/feeds/" in google.scope_list()
    assert google.strategy_settings(state="s")["id"] == "env-id"
