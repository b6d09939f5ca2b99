from __future__ import annotations

import base64
import json
from typing import Any, Dict, Sequence

import httpx
from authlib.jose import JsonWebKey, jwt
from authlib.jose.errors import JoseError

from social_authorize.exceptions import AuthenticationError


def b64url_decode(data: str) -> bytes:
    padding = '=' * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


async def fetch_jwks(client: httpx.AsyncClient, jwks_url: str) -> Dict[str, Any]:
    resp = await client.get(jwks_url)
    resp.raise_for_status()
    return resp.json()


def pick_jwk(jwks: Dict[str, Any], kid: str | None) -> Dict[str, Any] | None:
    keys = jwks.get("keys", [])
    if kid:
        for k in keys:
            if k.get("kid") == kid:
                return k
        return None
    return keys[0] if keys else None


def read_header(id_token: str) -> Dict[str, Any]:
    try:
        header_part, _, _ = id_token.split(".")
        header = json.loads(b64url_decode(header_part))
    except ValueError as exc:
        raise AuthenticationError("Malformed identity token", error="invalid_token") from exc
    if not isinstance(header, dict):
        raise AuthenticationError("Malformed identity token", error="invalid_token")
    return header


async def verify_id_token(
    client: httpx.AsyncClient,
    id_token: str,
    *,
    jwks_url: str,
    audience: str | None,
    issuers: Sequence[str] = (),
) -> Dict[str, Any]:
    """Verify signature, expiry, issuer and audience; return the claims.

    JWKS fetch failures are transport errors and propagate as ``httpx`` errors.
    Everything else that makes the token unverifiable raises
    ``AuthenticationError``.
    """
    header = read_header(id_token)

    jwks = await fetch_jwks(client, jwks_url)
    jwk_dict = pick_jwk(jwks, header.get("kid"))
    if not jwk_dict:
        raise AuthenticationError("No JWK found to verify token", error="invalid_token")

    try:
        key = JsonWebKey.import_key(jwk_dict)
        claims = jwt.decode(id_token, key)
        claims.validate()
    except (JoseError, ValueError) as exc:
        raise AuthenticationError("Identity token verification failed", error="invalid_token", description=str(exc)) from exc

    if issuers and claims.get("iss") not in issuers:
        raise AuthenticationError("Invalid issuer", error="invalid_token")
    if audience:
        aud = claims.get("aud")
        if isinstance(aud, list):
            if audience not in aud:
                raise AuthenticationError("Invalid audience", error="invalid_token")
        elif aud != audience:
            raise AuthenticationError("Invalid audience", error="invalid_token")

    return dict(claims)
