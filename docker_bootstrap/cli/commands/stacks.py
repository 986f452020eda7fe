"""Stacks command for Docker Bootstrap."""

from pathlib import Path

import click
from tabulate import tabulate

from ...core.stacks import discover_stacks
from ...services.exceptions import ServiceError
from ..helpers import fail, settings_from_context


@click.command()
@click.option('--clone-dir', type=click.Path(file_okay=False, path_type=Path),
              help='Stack repository checkout to inspect')
@click.pass_context
def stacks(ctx, clone_dir):
    """List the compose stacks that would be deployed"""
    try:
        settings = settings_from_context(ctx, compose_clone_dir=clone_dir)
        found = discover_stacks(settings.compose_clone_dir, settings.compose_subdir)
    except ServiceError as e:
        fail(ctx, e)

    if not found:
        click.echo(f"No compose stacks found in {settings.stacks_dir}")
        return

    rows = [
        [stack.name, stack.path.relative_to(settings.compose_clone_dir)]
        for stack in found
    ]
    click.echo(tabulate(rows, headers=["Stack", "Compose file"], tablefmt="simple"))
    click.echo(f"\n{len(found)} stack(s) in {settings.stacks_dir}")
