import time
from typing import Any, Dict, List, Optional

import pytest
from authlib.jose import JsonWebKey, jwt

from social_authorize.exceptions import AuthenticationError
from social_authorize.models import AccessCredential, AuthClaims
from social_authorize.settings import get_settings


CLIENT_ID = "client-123.apps.googleusercontent.com"

CLIENT_SETTINGS = {
    "application_name": "Contacts Importer",
    "redirect_url": "https://app.example.com/auth/callback",
    "id": CLIENT_ID,
    "secret": "shh",
}


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()  # type: ignore[attr-defined]
    yield
    get_settings.cache_clear()  # type: ignore[attr-defined]


def feed_page(entries: List[Dict[str, Any]], next_url: Optional[str] = None) -> Dict[str, Any]:
    links = [{"rel": "self", "href": "https://feeds.example.com/self"}]
    if next_url:
        links.append({"rel": "next", "href": next_url})
    return {"feed": {"entry": entries, "link": links}}


def contact_entry(n: int) -> Dict[str, Any]:
    return {"title": {"$t": f"Contact {n}"}, "gd$email": [{"address": f"c{n}@example.com"}]}


class FakeTransport:
    """In-memory stand-in for GoogleTransport."""

    def __init__(
        self,
        *,
        pages: Optional[Dict[str, Any]] = None,
        profile: Optional[Dict[str, Any]] = None,
        claims: Optional[Dict[str, Any]] = None,
        token_response: Optional[Dict[str, Any]] = None,
        valid_id_token: str = "valid.id.token",
    ) -> None:
        self.pages = pages or {}
        self.profile = profile if profile is not None else {
            "names": [{"givenName": "Ada", "familyName": "Lovelace", "metadata": {"primary": True}}]
        }
        self.claims = claims or {"sub": "1234567890", "email": "ada@example.com"}
        self.token_response = token_response or {
            "access_token": "ya29.from-code",
            "id_token": valid_id_token,
            "token_type": "Bearer",
            "expires_in": 3599,
        }
        self.valid_id_token = valid_id_token
        self.exchanged: List[str] = []
        self.fetched: List[str] = []
        self.profile_requests: List[tuple] = []
        self.authorize_requests: List[tuple] = []

    def build_authorize_url(self, scopes, state=None):
        self.authorize_requests.append((list(scopes), state))
        return "https://accounts.example.com/auth?client_id=test"

    async def exchange_code(self, code):
        self.exchanged.append(code)
        return AccessCredential.from_response(self.token_response)

    async def fetch_profile(self, credential, subject="me"):
        self.profile_requests.append((credential.access_token, subject))
        return self.profile

    async def verify_identity_token(self, id_token):
        if id_token != self.valid_id_token:
            raise AuthenticationError("Identity token verification failed", error="invalid_token")
        return AuthClaims.from_claims(self.claims)

    async def authenticated_request(self, url, credential):
        self.fetched.append(url)
        page = self.pages[url]
        if isinstance(page, Exception):
            raise page
        return page


@pytest.fixture
def signing_key():
    return JsonWebKey.generate_key("RSA", 2048, is_private=True)


@pytest.fixture
def jwks(signing_key):
    return {"keys": [signing_key.as_dict(is_private=False, kid="test-key", alg="RS256", use="sig")]}


def make_id_token(key, **overrides) -> str:
    now = int(time.time())
    claims = {
        "iss": "https://accounts.google.com",
        "aud": CLIENT_ID,
        "sub": "1234567890",
        "email": "ada@example.com",
        "iat": now,
        "exp": now + 3600,
    }
    claims.update(overrides)
    token = jwt.encode({"alg": "RS256", "kid": "test-key"}, claims, key)
    return token.decode() if isinstance(token, bytes) else token
