from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Sequence
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

import httpx

from social_authorize.exceptions import AuthenticationError, ConfigurationError
from social_authorize.jwt import verify_id_token
from social_authorize.models import AccessCredential, AuthClaims
from social_authorize.settings import GoogleSettings, StrategySettings, get_settings


logger = logging.getLogger(__name__)


class GoogleTransport:
    """httpx-backed calls against Google's OAuth2, People and Contacts APIs."""

    def __init__(
        self,
        settings: StrategySettings,
        google: Optional[GoogleSettings] = None,
        *,
        timeout: float | None = None,
    ) -> None:
        self._settings = settings
        self._google = google or get_settings().google
        self._timeout = timeout if timeout is not None else self._google.timeout

    @property
    def google(self) -> GoogleSettings:
        return self._google

    def build_authorize_url(self, scopes: Sequence[str], state: str | None = None) -> str:
        client = self._require_client("building an authorization URL")
        params: Dict[str, Any] = {
            "response_type": "code",
            "redirect_uri": self._settings.redirect_url,
            "client_id": client.id,
            "scope": " ".join(scopes),
            "access_type": "online",
            "approval_prompt": "auto",
        }
        if state is not None:
            params["state"] = state
        return _append_query(self._google.authorize_url, params)

    async def exchange_code(self, code: str) -> AccessCredential:
        client = self._require_client("exchanging an authorization code")
        data = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self._settings.redirect_url,
            "client_id": client.id,
            "client_secret": client.secret,
        }
        async with httpx.AsyncClient(timeout=self._timeout) as http:
            resp = await http.post(
                self._google.token_url,
                data=data,
                headers={"Accept": "application/json"},
            )

        if resp.status_code >= 400:
            payload = _safe_json(resp)
            raise AuthenticationError(
                "Token exchange failed",
                error=_error_code(payload),
                description=_error_description(payload, resp.text),
                status_code=resp.status_code,
                details=payload,
            )

        return AccessCredential.from_response(_safe_json(resp))

    async def fetch_profile(self, credential: AccessCredential, subject: str = "me") -> Dict[str, Any]:
        url = self._google.profile_url.format(subject=subject)
        params = {"personFields": self._google.profile_fields}
        return await self._get_json(url, credential, params=params)

    async def verify_identity_token(self, id_token: str) -> AuthClaims:
        client = self._settings.client
        async with httpx.AsyncClient(timeout=self._timeout) as http:
            claims = await verify_id_token(
                http,
                id_token,
                jwks_url=self._google.jwks_url,
                audience=client.id if client else None,
                issuers=self._google.issuer_list(),
            )
        return AuthClaims.from_claims(claims)

    async def authenticated_request(self, url: str, credential: AccessCredential) -> Dict[str, Any]:
        return await self._get_json(url, credential, headers={"GData-Version": "3.0"})

    async def _get_json(
        self,
        url: str,
        credential: AccessCredential,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Dict[str, Any]:
        query: Dict[str, Any] = dict(params or {})
        if self._settings.developer_key:
            query["key"] = self._settings.developer_key
        request_headers = {
            "Authorization": f"Bearer {credential.access_token}",
            "Accept": "application/json",
            "User-Agent": self._settings.application_name,
        }
        request_headers.update(headers or {})

        logger.debug("GET %s", url)
        async with httpx.AsyncClient(timeout=self._timeout) as http:
            resp = await http.get(url, params=query or None, headers=request_headers)
            resp.raise_for_status()
        return resp.json()

    def _require_client(self, action: str):
        client = self._settings.client
        if client is None:
            raise ConfigurationError(
                f"A client id and secret are required for {action}",
                error="configuration_error",
            )
        return client


def _append_query(url: str, params: Mapping[str, Any]) -> str:
    parsed = urlparse(url)
    query_params = parse_qsl(parsed.query, keep_blank_values=True)
    query_params.extend((str(k), str(v)) for k, v in params.items() if v is not None)
    new_query = urlencode(query_params, doseq=True)
    return urlunparse(parsed._replace(query=new_query))


def _safe_json(resp: httpx.Response) -> Dict[str, Any]:
    try:
        data = resp.json()
    except ValueError:
        return {"raw": resp.text}
    return data if isinstance(data, dict) else {"raw": data}


def _error_code(payload: Mapping[str, Any]) -> str | None:
    for key in ("error", "error_code", "code"):
        value = payload.get(key)
        if isinstance(value, str):
            return value
    return None


def _error_description(payload: Mapping[str, Any], default: str) -> str:
    for key in ("error_description", "message", "error_message"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return default
