"""Pluggable OAuth2 sign-in strategies with provider-agnostic users and contacts."""

from social_authorize.exceptions import (
    AuthenticationError,
    AuthorizeError,
    ConfigurationError,
    PaginationLimitExceeded,
)
from social_authorize.models import AccessCredential, AuthClaims, Contact, FeedPage, User
from social_authorize.sessions import CallbackSession, DictSession
from social_authorize.strategies import GoogleStrategy, SingleSignOnStrategy

__all__ = [
    "AccessCredential",
    "AuthClaims",
    "AuthenticationError",
    "AuthorizeError",
    "CallbackSession",
    "ConfigurationError",
    "Contact",
    "DictSession",
    "FeedPage",
    "GoogleStrategy",
    "PaginationLimitExceeded",
    "SingleSignOnStrategy",
    "User",
]
