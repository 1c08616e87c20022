"""Flask CLI commands for inspecting formatters and negotiation."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import AppGroup


def _kit():
    kit = current_app.extensions.get("responsekit")
    if kit is None:
        raise click.UsageError("ResponseKit is not initialized on this application.")
    return kit


@click.group("responses", cls=AppGroup)
@click.option("--verbose", is_flag=True, help="Log negotiation decisions at DEBUG level.")
def responses_cli(verbose: bool) -> None:
    """Inspect response formatters and content negotiation."""
    if verbose:
        logging.getLogger("responsekit").setLevel(logging.DEBUG)


@responses_cli.command("formats")
def formats_command() -> None:
    """List registered content types in negotiation order."""
    for content_type, formatter in _kit().registry:
        click.echo(f"{content_type}  {type(formatter).__name__}")


@responses_cli.command("negotiate")
@click.argument("accept")
def negotiate_command(accept: str) -> None:
    """Show the content type chosen for an ACCEPT header value."""
    kit = _kit()
    chosen = kit.negotiator.negotiate(accept, kit.registry)
    if chosen is None:
        click.echo("406 Not Acceptable")
        click.get_current_context().exit(1)
    click.echo(chosen)
