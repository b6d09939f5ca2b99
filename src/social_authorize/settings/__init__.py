from social_authorize.settings.config import GoogleSettings, Settings, get_settings
from social_authorize.settings.strategy import (
    ClientCredential,
    DeveloperKey,
    StrategySettings,
    resolve_settings,
)

__all__ = [
    "ClientCredential",
    "DeveloperKey",
    "GoogleSettings",
    "Settings",
    "StrategySettings",
    "get_settings",
    "resolve_settings",
]
