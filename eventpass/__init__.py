"""eventpass: short-lived signed credentials for event participants."""

from .config import CredentialConfig, EventpassConfig, TransportConfig, load_config
from .errors import CredentialIssueError, EventpassError, MissingSecretError
from .security import (
    CredentialPayload,
    CredentialService,
    FailureReason,
    VerificationResult,
    credential_link,
    extract_credential,
    get_credential_service,
)

__version__ = "0.1.0"
__all__ = [
    "CredentialConfig",
    "CredentialIssueError",
    "CredentialPayload",
    "CredentialService",
    "EventpassConfig",
    "EventpassError",
    "FailureReason",
    "MissingSecretError",
    "TransportConfig",
    "VerificationResult",
    "credential_link",
    "extract_credential",
    "get_credential_service",
    "load_config",
]
