from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from social_authorize.exceptions import AuthenticationError


@dataclass(frozen=True)
class AccessCredential:
    """Provider-issued token material for the current request only."""

    access_token: str
    id_token: str | None = None
    token_type: str = "Bearer"
    expires_in: int | None = None
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_response(cls, data: Mapping[str, Any]) -> "AccessCredential":
        access_token = data.get("access_token")
        if not isinstance(access_token, str) or not access_token.strip():
            raise AuthenticationError(
                "Token response did not include an access_token",
                error="invalid_token",
                details=data,
            )
        expires_in = data.get("expires_in")
        id_token = data.get("id_token")
        return cls(
            access_token=access_token.strip(),
            id_token=id_token if isinstance(id_token, str) and id_token else None,
            token_type=str(data.get("token_type") or "Bearer"),
            expires_in=int(expires_in) if expires_in is not None else None,
            raw=dict(data),
        )

    @classmethod
    def from_token(cls, token: Any, id_token: str | None = None) -> "AccessCredential":
        """Build a credential from a caller-supplied token.

        ``token`` may be a token bundle mapping, the JSON text of one, or a
        bare access token string. An explicit ``id_token`` overrides any
        identity token found in the bundle.
        """
        if isinstance(token, Mapping):
            bundle: Dict[str, Any] = dict(token)
        elif isinstance(token, str) and token.lstrip().startswith("{"):
            try:
                bundle = json.loads(token)
            except ValueError as exc:
                raise AuthenticationError("Malformed access token bundle", error="invalid_token") from exc
            if not isinstance(bundle, dict):
                raise AuthenticationError("Malformed access token bundle", error="invalid_token")
        elif isinstance(token, str):
            bundle = {"access_token": token}
        else:
            raise AuthenticationError("Unsupported access token type", error="invalid_token")

        if id_token:
            bundle["id_token"] = id_token
        return cls.from_response(bundle)

    def as_bundle(self) -> Dict[str, Any]:
        bundle: Dict[str, Any] = dict(self.raw)
        bundle.update({"access_token": self.access_token, "token_type": self.token_type})
        if self.id_token:
            bundle["id_token"] = self.id_token
        if self.expires_in is not None:
            bundle["expires_in"] = self.expires_in
        return bundle


@dataclass(frozen=True)
class AuthClaims:
    subject: str
    email: str
    claims: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_claims(cls, claims: Mapping[str, Any]) -> "AuthClaims":
        subject = claims.get("sub")
        email = claims.get("email")
        if not subject or not email:
            raise AuthenticationError("Identity token is missing sub or email", error="invalid_token")
        return cls(subject=str(subject), email=str(email), claims=dict(claims))


@dataclass
class User:
    id: str
    email: str
    access_token: str
    firstname: str = ""
    lastname: str = ""


@dataclass
class Contact:
    email: str = ""
    display_name: str = ""

    @classmethod
    def from_entry(cls, entry: Mapping[str, Any]) -> "Contact":
        email = ""
        emails = entry.get("gd$email") or []
        if emails and isinstance(emails[0], Mapping) and emails[0].get("address") is not None:
            email = str(emails[0]["address"])

        display_name = ""
        title = entry.get("title")
        if isinstance(title, Mapping) and title.get("$t") is not None:
            display_name = str(title["$t"])

        return cls(email=email, display_name=display_name)


@dataclass(frozen=True)
class FeedPage:
    entries: List[Mapping[str, Any]]
    next_page_url: Optional[str] = None

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> "FeedPage":
        feed = payload.get("feed") or {}
        entries = list(feed.get("entry") or [])
        next_page_url = None
        for link in feed.get("link") or []:
            if link.get("rel") == "next" and link.get("href"):
                next_page_url = link["href"]
                break
        return cls(entries=entries, next_page_url=next_page_url)
