from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

from social_authorize.models import AccessCredential, AuthClaims, Contact, User


class Session(Protocol):
    def store(self, key: str, value: Any) -> None:
        ...

    def load(self, key: str) -> Any:
        ...


class Router(Protocol):
    def redirect(self, url: str) -> Any:
        ...


class Transport(Protocol):
    def build_authorize_url(self, scopes: Sequence[str], state: str | None = None) -> str:
        ...

    async def exchange_code(self, code: str) -> AccessCredential:
        ...

    async def fetch_profile(self, credential: AccessCredential, subject: str = "me") -> Dict[str, Any]:
        ...

    async def verify_identity_token(self, id_token: str) -> AuthClaims:
        ...

    async def authenticated_request(self, url: str, credential: AccessCredential) -> Dict[str, Any]:
        ...


class Strategy(Protocol):
    def login(self, parameters: Optional[Mapping[str, Any]] = None) -> Any:
        ...

    async def get_user(self, parameters: Optional[Mapping[str, Any]] = None) -> User:
        ...

    async def get_friends(self, parameters: Optional[Mapping[str, Any]] = None) -> List[Contact]:
        ...

    async def endpoint(self, parameters: Optional[Mapping[str, Any]] = None) -> User:
        ...

    def expects(self) -> List[str]:
        ...
