from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from social_authorize.exceptions import AuthenticationError
from social_authorize.models import Contact, User
from social_authorize.pagination import collect_entries
from social_authorize.routers import RedirectRouter
from social_authorize.settings import GoogleSettings, StrategySettings, get_settings, resolve_settings
from social_authorize.strategies.base import SingleSignOnStrategy
from social_authorize.transports.google import GoogleTransport
from social_authorize.types import Router, Session, Transport


logger = logging.getLogger(__name__)

STATE_KEY = "oauth_state"


class GoogleStrategy(SingleSignOnStrategy):
    """Google sign-in via the authorization-code flow.

    Args:
        settings: mapping with ``application_name``, ``redirect_url``, and
            either ``id``/``secret`` or ``developer_key``; optional ``state``.
        session: where the configured state is kept across the redirect.
        router: performs the redirect in ``login``.
        transport: Google API client, ``GoogleTransport`` by default.
        max_pages: ceiling on contact feed pages fetched per call.
    """

    def __init__(
        self,
        settings: Mapping[str, Any] | StrategySettings,
        session: Optional[Session] = None,
        router: Optional[Router] = None,
        *,
        transport: Optional[Transport] = None,
        google: Optional[GoogleSettings] = None,
        scopes: Optional[Sequence[str]] = None,
        max_pages: Optional[int] = None,
    ) -> None:
        self.settings = resolve_settings(settings)
        self._google = google or get_settings().google
        self.session = session
        self.router = router or RedirectRouter()
        self.transport = transport or GoogleTransport(self.settings, self._google)
        self.scopes = list(scopes) if scopes is not None else self._google.scope_list()
        self.max_pages = max_pages if max_pages is not None else self._google.max_pages

    def authorize_url(self) -> str:
        return self.transport.build_authorize_url(self.scopes, self.settings.state)

    def login(self, parameters: Optional[Mapping[str, Any]] = None) -> Any:
        url = self.authorize_url()
        if self.session is not None and self.settings.state is not None:
            self.session.store(STATE_KEY, self.settings.state)
        return self.router.redirect(url)

    async def get_user(self, parameters: Optional[Mapping[str, Any]] = None) -> User:
        credential = await self.resolve_credential(parameters)
        if not credential.id_token:
            raise AuthenticationError("Credential carries no identity token", error="invalid_token")

        profile = await self.transport.fetch_profile(credential, "me")
        claims = await self.transport.verify_identity_token(credential.id_token)
        name = _primary_name(profile)

        return User(
            id=claims.subject,
            email=claims.email,
            access_token=credential.access_token,
            firstname=str(name.get("givenName") or ""),
            lastname=str(name.get("familyName") or ""),
        )

    async def get_friends(self, parameters: Optional[Mapping[str, Any]] = None) -> List[Contact]:
        credential = await self.resolve_credential(parameters)

        async def fetch_page(url: str) -> Dict[str, Any]:
            return await self.transport.authenticated_request(url, credential)

        entries = await collect_entries(fetch_page, self._google.contacts_url, max_pages=self.max_pages)
        logger.debug("collected %d contact entries", len(entries))
        return [Contact.from_entry(entry) for entry in entries]


def _primary_name(profile: Mapping[str, Any]) -> Mapping[str, Any]:
    names = profile.get("names") or []
    for name in names:
        if (name.get("metadata") or {}).get("primary"):
            return name
    return names[0] if names else {}
