"""Main CLI entry point for Docker Bootstrap."""

from pathlib import Path

import click

from .commands.config import config
from .commands.deploy import deploy
from .commands.run import run
from .commands.stacks import stacks


@click.group()
@click.option('--env-file', type=click.Path(dir_okay=False, path_type=Path),
              help='Read settings from this dotenv file instead of ./.env')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Override LOG_LEVEL')
@click.version_option(package_name='docker-bootstrap')
@click.pass_context
def cli(ctx, env_file, log_level):
    """Docker Bootstrap - Provision Docker hosts and deploy compose stacks"""
    ctx.ensure_object(dict)
    ctx.obj['env_file'] = env_file
    ctx.obj['log_level'] = log_level


# Register commands
cli.add_command(run)
cli.add_command(deploy)
cli.add_command(stacks)
cli.add_command(config)


if __name__ == '__main__':
    cli()
