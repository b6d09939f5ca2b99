from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional

from social_authorize.exceptions import AuthenticationError
from social_authorize.models import AccessCredential, Contact, User
from social_authorize.types import Transport


class SingleSignOnStrategy(ABC):
    """Contract shared by the redirect-based providers.

    ``login`` sends the user to the provider, the framework captures the
    callback parameters named by ``expects`` and hands them to ``endpoint``.
    ``get_user`` and ``get_friends`` accept ``{"access_token": ...}`` (with an
    optional ``id_token``) or ``{"code": ...}``.
    """

    transport: Transport

    @abstractmethod
    def login(self, parameters: Optional[Mapping[str, Any]] = None) -> Any:
        ...

    @abstractmethod
    async def get_user(self, parameters: Optional[Mapping[str, Any]] = None) -> User:
        ...

    @abstractmethod
    async def get_friends(self, parameters: Optional[Mapping[str, Any]] = None) -> List[Contact]:
        ...

    def expects(self) -> List[str]:
        return ["code"]

    async def endpoint(self, parameters: Optional[Mapping[str, Any]] = None) -> User:
        parameters = parameters or {}
        if not parameters.get("code"):
            raise AuthenticationError("Missing authorization code", error="invalid_request")
        credential = await self.transport.exchange_code(parameters["code"])
        return await self.get_user({"access_token": credential.as_bundle()})

    async def resolve_credential(self, parameters: Optional[Mapping[str, Any]] = None) -> AccessCredential:
        """An access token is trusted as-is; otherwise a code is exchanged."""
        parameters = parameters or {}
        access_token = parameters.get("access_token")
        if access_token:
            return AccessCredential.from_token(access_token, id_token=parameters.get("id_token"))
        code = parameters.get("code")
        if code:
            return await self.transport.exchange_code(code)
        raise AuthenticationError("No access token or authorization code supplied", error="invalid_request")
