from __future__ import annotations

from typing import Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from social_authorize.exceptions import ConfigurationError


class ClientCredential(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["client"] = "client"
    id: str
    secret: str


class DeveloperKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["developer_key"] = "developer_key"
    key: str


class StrategySettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    application_name: str
    redirect_url: str
    credential: Union[ClientCredential, DeveloperKey] = Field(discriminator="kind")
    state: Optional[str] = None

    @property
    def client(self) -> ClientCredential | None:
        return self.credential if isinstance(self.credential, ClientCredential) else None

    @property
    def developer_key(self) -> str | None:
        return self.credential.key if isinstance(self.credential, DeveloperKey) else None


def _present(raw: Mapping[str, Any], key: str) -> bool:
    value = raw.get(key)
    return value is not None and value != ""


def resolve_settings(raw: Mapping[str, Any] | StrategySettings) -> StrategySettings:
    """Validate a strategy settings mapping.

    Requires ``application_name`` and ``redirect_url`` plus either ``id`` and
    ``secret`` or ``developer_key``. The client id/secret pair wins when both
    credential forms are supplied.
    """
    if isinstance(raw, StrategySettings):
        return raw

    missing = [key for key in ("application_name", "redirect_url") if not _present(raw, key)]
    if missing:
        raise ConfigurationError(
            f"Missing required settings: {', '.join(missing)}",
            error="configuration_error",
            details={"missing": missing},
        )

    credential: ClientCredential | DeveloperKey
    if _present(raw, "id") and _present(raw, "secret"):
        credential = ClientCredential(id=str(raw["id"]), secret=str(raw["secret"]))
    elif _present(raw, "developer_key"):
        credential = DeveloperKey(key=str(raw["developer_key"]))
    else:
        raise ConfigurationError(
            "Settings require either id and secret or developer_key",
            error="configuration_error",
        )

    try:
        return StrategySettings(
            application_name=raw["application_name"],
            redirect_url=raw["redirect_url"],
            credential=credential,
            state=raw.get("state") or None,
        )
    except ValidationError as exc:
        raise ConfigurationError("Invalid strategy settings", error="configuration_error", description=str(exc)) from exc
