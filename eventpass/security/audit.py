"""Audit logging utilities for credential events."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)

REDACTED = "[REDACTED]"

SENSITIVE_FIELDS = frozenset(
    {
        "password",
        "token",
        "credential",
        "secret",
        "key",
        "hash",
        "email",
        "phone",
        "address",
        "qrCode",
        "shortCode",
    }
)


def redact(details: Optional[Mapping[str, Any]]) -> dict:
    """Return a copy of ``details`` with sensitive values masked."""
    if not details:
        return {}
    return {
        name: REDACTED if name in SENSITIVE_FIELDS and value else value
        for name, value in details.items()
    }


class AuditLog:
    """Records credential issuance and verification decisions."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self._log = log or logger

    def record(
        self, event: str, details: Optional[Mapping[str, Any]] = None, level: int = logging.INFO
    ) -> None:
        """Write an audit entry with sensitive fields removed."""
        self._log.log(level, f"{event} {redact(details)}")

    def issued(self, claims: Mapping[str, Any]) -> None:
        self.record("credential.issued", claims, level=logging.DEBUG)

    def rejected(self, reason: str, error: Optional[BaseException] = None) -> None:
        details = {"reason": reason}
        if error is not None:
            details["error"] = type(error).__name__
        self.record("credential.rejected", details, level=logging.WARNING)
