"""Credential signing, verification and related helpers."""

from __future__ import annotations

from typing import Optional

from ..config import EventpassConfig, load_config
from .audit import AuditLog
from .context import CredentialPayload, FailureReason, VerificationResult
from .tokens import CredentialService
from .transport import credential_link, extract_credential

_service_instance: CredentialService | None = None


def get_credential_service(config: Optional[EventpassConfig] = None) -> CredentialService:
    """Return the process-wide credential service.

    The service is built once from ``config`` or, when omitted, from
    :func:`~eventpass.config.load_config`. A missing signing secret raises
    :class:`~eventpass.errors.MissingSecretError` on that first call, which is
    meant to happen during application startup.

    Once built, the shared service is never replaced. Passing ``config`` after
    that returns a separate service for that config only.
    """

    global _service_instance
    if _service_instance is not None:
        if config is None:
            return _service_instance
        return CredentialService(config.credential)

    config = config or load_config()
    _service_instance = CredentialService(config.credential)
    return _service_instance


__all__ = [
    "AuditLog",
    "CredentialPayload",
    "CredentialService",
    "FailureReason",
    "VerificationResult",
    "credential_link",
    "extract_credential",
    "get_credential_service",
]
