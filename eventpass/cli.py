"""Command line interface for issuing and checking eventpass credentials."""

from __future__ import annotations

import json
import logging
from typing import List, Optional

import typer

from eventpass.config import EventpassConfig, load_config
from eventpass.errors import CredentialIssueError, MissingSecretError
from eventpass.security import CredentialService, credential_link

app = typer.Typer(help="CLI for eventpass credentials")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """eventpass CLI entry point."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


def _load() -> EventpassConfig:
    try:
        return load_config()
    except MissingSecretError as exc:
        typer.secho(f"Configuration error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _parse_claims(pairs: Optional[List[str]]) -> dict:
    claims = {}
    for pair in pairs or []:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"Expected key=value, got '{pair}'", param_hint="--claim")
        claims[name] = value
    return claims


@app.command("issue")
def issue(
    participant_id: Optional[str] = typer.Option(None, "--participant-id"),
    event_id: Optional[str] = typer.Option(None, "--event-id"),
    email: Optional[str] = typer.Option(None, "--email"),
    credential_type: Optional[str] = typer.Option(None, "--type", help="Credential purpose"),
    claim: Optional[List[str]] = typer.Option(
        None, "--claim", help="Additional claim as key=value, may be repeated"
    ),
    link: Optional[str] = typer.Option(
        None, "--link", help="Print this URL with the credential attached instead"
    ),
) -> None:
    """
    Issue a credential valid for ten minutes.

    Example:
        eventpass issue --participant-id p1 --event-id e1 --type checkin
        eventpass issue --participant-id p1 --link https://example.org/checkin
    """
    config = _load()
    payload = _parse_claims(claim)
    known = {
        "participantId": participant_id,
        "eventId": event_id,
        "email": email,
        "type": credential_type,
    }
    payload.update({name: value for name, value in known.items() if value is not None})
    service = CredentialService(config.credential)
    try:
        token = service.issue(payload)
    except CredentialIssueError as exc:
        typer.secho(str(exc), fg=typer.colors.RED)
        raise typer.Exit(code=1)

    if link:
        typer.echo(credential_link(link, token, config.transport))
    else:
        typer.echo(token)


@app.command("verify")
def verify(credential: str) -> None:
    """
    Verify a credential and print its claims as JSON.

    Exits with code 1 and prints "Invalid credential" for any rejected
    credential, whatever the cause.
    """
    service = CredentialService(_load().credential)
    claims = service.verify(credential)
    if claims is None:
        typer.secho("Invalid credential", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(claims, indent=2, sort_keys=True))


@app.command("check-config")
def check_config() -> None:
    """Check that the signing secret is configured."""
    config = _load()
    typer.echo("Signing secret configured")
    typer.echo(f"Credential header: {config.transport.header}")
    typer.echo(f"Credential query parameter: {config.transport.query_param}")
