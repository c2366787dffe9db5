"""Issuance and verification of short-lived signed credentials."""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Mapping, Optional, Union

import jwt

from ..config import CredentialConfig
from ..constants import CREDENTIAL_ALGORITHM, CREDENTIAL_TTL_SECONDS
from ..errors import CredentialIssueError
from .audit import AuditLog
from .context import CredentialPayload, FailureReason, VerificationResult

PayloadLike = Union[CredentialPayload, Mapping[str, Any]]

# Only the signature and the presence of ``exp`` are checked by PyJWT. Expiry
# is evaluated against the service clock, every other claim is opaque.
_DECODE_OPTIONS = {
    "verify_signature": True,
    "verify_exp": False,
    "verify_nbf": False,
    "verify_iat": False,
    "verify_aud": False,
    "verify_iss": False,
    "verify_sub": False,
    "verify_jti": False,
    "require": ["exp"],
}


class CredentialService:
    """Signs and verifies time-boxed HS256 credentials.

    A credential authorizes one narrow follow-up action, for instance acting
    as a participant of an event for the next ten minutes. The service keeps
    no record of what it issued: a credential is valid purely because its
    signature matches the configured secret and its ``exp`` claim lies in the
    future.

    Both operations are pure functions of the secret, the clock and the input,
    so a single instance can be shared between threads.
    """

    def __init__(
        self,
        config: CredentialConfig,
        *,
        clock: Callable[[], float] = time.time,
        audit: Optional[AuditLog] = None,
    ) -> None:
        self._secret = config.secret.get_secret_value()
        self._clock = clock
        self._audit = audit or AuditLog()

    def issue(self, payload: PayloadLike) -> str:
        """Return a compact credential for ``payload`` expiring in ten minutes.

        Raises:
            CredentialIssueError: the payload has an unsupported shape, sets a
                reserved claim, or could not be signed.
        """

        claims = self._claims_for(payload)
        issued_at = int(self._clock())
        claims["iat"] = issued_at
        claims["exp"] = issued_at + CREDENTIAL_TTL_SECONDS

        try:
            token = jwt.encode(claims, self._secret, algorithm=CREDENTIAL_ALGORITHM)
        except (TypeError, ValueError, jwt.PyJWTError) as exc:
            raise CredentialIssueError(f"Unable to sign credential: {exc}") from exc

        self._audit.issued(claims)
        return token

    def validate(self, credential: str) -> VerificationResult:
        """Check ``credential`` and report why it was rejected, if it was.

        The reason is meant for server-side diagnostics; it must not be
        surfaced to whoever presented the credential.
        """

        try:
            claims = jwt.decode(
                credential,
                self._secret,
                algorithms=[CREDENTIAL_ALGORITHM],
                options=_DECODE_OPTIONS,
            )
        except jwt.InvalidAlgorithmError as exc:
            return self._reject(FailureReason.ALGORITHM_NOT_ALLOWED, exc)
        except jwt.InvalidSignatureError as exc:
            return self._reject(FailureReason.INVALID_SIGNATURE, exc)
        except jwt.MissingRequiredClaimError as exc:
            return self._reject(FailureReason.MISSING_CLAIM, exc)
        except jwt.PyJWTError as exc:
            return self._reject(FailureReason.MALFORMED, exc)

        expires_at = claims.get("exp")
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            return self._reject(FailureReason.MISSING_CLAIM)
        if self._clock() >= expires_at:
            return self._reject(FailureReason.EXPIRED)

        return VerificationResult.success(claims)

    def verify(self, credential: str) -> Optional[Dict[str, Any]]:
        """Return the claims of a valid credential, ``None`` otherwise.

        Every kind of failure yields the same ``None`` so callers treat an
        invalid credential exactly like a missing one.
        """

        return self.validate(credential).payload

    def _claims_for(self, payload: PayloadLike) -> Dict[str, Any]:
        if isinstance(payload, CredentialPayload):
            return payload.to_claims()
        if not isinstance(payload, Mapping):
            raise CredentialIssueError(
                f"Credential payload must be a mapping, got {type(payload).__name__}"
            )
        try:
            return CredentialPayload.model_validate(dict(payload)).to_claims()
        except ValueError as exc:
            raise CredentialIssueError(f"Invalid credential payload: {exc}") from exc

    def _reject(
        self, reason: FailureReason, error: Optional[BaseException] = None
    ) -> VerificationResult:
        self._audit.rejected(reason.value, error)
        return VerificationResult.failure(reason)
