"""Exceptions raised by eventpass."""

from __future__ import annotations


class EventpassError(Exception):
    """Base class for eventpass errors."""


class MissingSecretError(EventpassError, RuntimeError):
    """The signing secret is not configured; the process must not serve."""


class CredentialIssueError(EventpassError):
    """A credential could not be produced for the given payload."""
