"""Credential payload and verification result models."""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..constants import RESERVED_CLAIMS


class CredentialPayload(BaseModel):
    """Claims protected by a signed credential.

    The four recognized fields are optional. Any additional field is passed
    through as-is provided its value is a string, number or boolean; nested
    values are refused because they cannot be compared opaquely by the
    recipient. ``None`` on a recognized field means the claim is absent.

    Mappings are validated by wire name only, so a key such as
    ``participant_id`` stays an extra claim under its own name. Use
    :meth:`create` to build a payload from Python keyword arguments.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    participant_id: Optional[str] = Field(default=None, alias="participantId")
    email: Optional[str] = None
    event_id: Optional[str] = Field(default=None, alias="eventId")
    type: Optional[str] = Field(default=None, description="Credential purpose")

    @model_validator(mode="after")
    def _check_extra_claims(self) -> "CredentialPayload":
        for key, value in (self.model_extra or {}).items():
            if key in RESERVED_CLAIMS:
                raise ValueError(f"claim '{key}' is set by the issuer")
            if isinstance(value, (str, int)):
                continue
            if isinstance(value, float) and math.isfinite(value):
                continue
            raise ValueError(
                f"claim '{key}' must be a string, number or boolean, got {type(value).__name__}"
            )
        return self

    @classmethod
    def create(
        cls,
        *,
        participant_id: Optional[str] = None,
        email: Optional[str] = None,
        event_id: Optional[str] = None,
        type: Optional[str] = None,
        **extra: Any,
    ) -> "CredentialPayload":
        """Build a payload from snake_case keywords plus extra claims."""
        known = {
            "participantId": participant_id,
            "email": email,
            "eventId": event_id,
            "type": type,
        }
        return cls.model_validate(
            {**extra, **{name: value for name, value in known.items() if value is not None}}
        )

    def to_claims(self) -> Dict[str, Any]:
        """Return the wire form of the payload using camelCase field names."""
        return self.model_dump(by_alias=True, exclude_none=True)


class FailureReason(str, Enum):
    """Why a credential was rejected. Server-side diagnostics only."""

    MALFORMED = "malformed"
    INVALID_SIGNATURE = "invalid_signature"
    ALGORITHM_NOT_ALLOWED = "algorithm_not_allowed"
    EXPIRED = "expired"
    MISSING_CLAIM = "missing_claim"


class VerificationResult(BaseModel):
    """Outcome of validating a presented credential.

    ``payload`` is only populated for a valid credential; a rejected
    credential never exposes its claims.
    """

    model_config = ConfigDict(frozen=True)

    valid: bool
    reason: Optional[FailureReason] = None
    payload: Optional[Dict[str, Any]] = None

    @classmethod
    def success(cls, payload: Dict[str, Any]) -> "VerificationResult":
        return cls(valid=True, payload=payload)

    @classmethod
    def failure(cls, reason: FailureReason) -> "VerificationResult":
        return cls(valid=False, reason=reason)
