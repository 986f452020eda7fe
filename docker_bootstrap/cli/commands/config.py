"""Configuration commands for Docker Bootstrap."""

import json

import click

from ...services.exceptions import ServiceError
from ..helpers import fail, settings_from_context


@click.group()
def config():
    """Inspect bootstrap configuration"""
    pass


@config.command()
@click.pass_context
def show(ctx):
    """Display the effective settings (secrets masked)"""
    try:
        settings = settings_from_context(ctx)
    except ServiceError as e:
        fail(ctx, e)

    click.echo(json.dumps(settings.redacted(), indent=2))
