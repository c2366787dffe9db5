from __future__ import annotations

import os
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, SecretStr, field_validator

from .errors import MissingSecretError

SECRET_ENV_VAR = "EVENTPASS_SECRET"
CONFIG_ENV_VAR = "EVENTPASS_CONFIG"


class CredentialConfig(BaseModel):
    """Signing settings for the credential service."""

    model_config = ConfigDict(frozen=True)

    secret: SecretStr

    @field_validator("secret")
    @classmethod
    def _secret_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("signing secret must not be empty")
        return value


class TransportConfig(BaseModel):
    """Where a presented credential is looked up on incoming requests."""

    model_config = ConfigDict(frozen=True)

    header: str = "X-Event-Credential"
    query_param: str = "token"
    accept_bearer: bool = True


class EventpassConfig(BaseModel):
    """Top-level configuration model."""

    model_config = ConfigDict(frozen=True)

    credential: CredentialConfig
    transport: TransportConfig = TransportConfig()


def load_config(path: Optional[str] = None) -> EventpassConfig:
    """Load configuration from YAML file and environment.

    Args:
        path: Optional path to config file. Falls back to EVENTPASS_CONFIG env
            variable or 'eventpass.yaml' in the current directory.

    The signing secret is only ever read from the EVENTPASS_SECRET env
    variable. A missing or blank secret raises :class:`MissingSecretError`.
    """

    config_path = path or os.getenv(CONFIG_ENV_VAR, "eventpass.yaml")
    data: dict = {}
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

    secret = os.getenv(SECRET_ENV_VAR, "")
    if not secret.strip():
        raise MissingSecretError(f"{SECRET_ENV_VAR} is required")

    return EventpassConfig(
        credential=CredentialConfig(secret=secret),
        transport=TransportConfig(**(data.get("transport") or {})),
    )
