"""Command-line interface registration for the response toolkit."""

from __future__ import annotations

from flask import Flask

from .commands import responses_cli


def init_app(app: Flask) -> None:
    """Register the ``responses`` command group.

    Parameters
    ----------
    app:
        Flask application instance whose CLI registry will receive the
        inspection commands.
    """
    if responses_cli.name not in app.cli.commands:
        app.cli.add_command(responses_cli)
