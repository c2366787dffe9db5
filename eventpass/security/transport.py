"""Helpers for carrying credentials over HTTP headers and URLs."""

from __future__ import annotations

from typing import Mapping, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from ..config import TransportConfig

BEARER_PREFIX = "bearer "


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def extract_credential(
    headers: Optional[Mapping[str, str]] = None,
    query: Optional[Mapping[str, str]] = None,
    config: Optional[TransportConfig] = None,
) -> Optional[str]:
    """Find a presented credential on an incoming request.

    Lookup order is ``Authorization: Bearer``, the configured custom header,
    then the configured query parameter. Blank values count as absent. The
    credential is returned unverified.
    """

    config = config or TransportConfig()
    headers = headers or {}

    if config.accept_bearer:
        authorization = _header(headers, "Authorization") or ""
        if authorization[: len(BEARER_PREFIX)].lower() == BEARER_PREFIX:
            token = _clean(authorization[len(BEARER_PREFIX) :])
            if token:
                return token

    token = _clean(_header(headers, config.header))
    if token:
        return token

    if query:
        return _clean(query.get(config.query_param))
    return None


def credential_link(
    base_url: str, credential: str, config: Optional[TransportConfig] = None
) -> str:
    """Return ``base_url`` with ``credential`` attached as a query parameter.

    Existing query parameters are kept; a previous credential parameter is
    replaced.
    """

    config = config or TransportConfig()
    parts = urlsplit(base_url)
    params = [
        (name, value)
        for name, value in parse_qsl(parts.query, keep_blank_values=True)
        if name != config.query_param
    ]
    params.append((config.query_param, credential))
    return urlunsplit(parts._replace(query=urlencode(params)))
