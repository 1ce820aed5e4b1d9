"""Output utilities for CLI commands with clear intent."""

import click


def user_output(message: str = "", nl: bool = True) -> None:
    """Output informational messages for the user (progress, status, errors).

    Always routed to stderr so stdout stays free for anything scriptable.
    """
    click.echo(message, nl=nl, err=True)
