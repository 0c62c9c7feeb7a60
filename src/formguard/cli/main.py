"""formguard CLI entry point."""

import logging

import click

from formguard.registry import register_builtin_rules


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool):
    """formguard — form definition tooling."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    register_builtin_rules()


# Register subcommand groups
from formguard.cli.forms_cmd import forms  # noqa: E402

cli.add_command(forms)
