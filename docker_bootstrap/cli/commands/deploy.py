"""Deploy command for Docker Bootstrap."""

from pathlib import Path

import click

from ...core.bootstrapper import Bootstrapper
from ...core.constants import DEPLOY_MODES
from ...services.exceptions import ServiceError
from ..helpers import fail, render_report, settings_from_context


@click.command()
@click.option('--mode', type=click.Choice(DEPLOY_MODES), help='Deploy stacks with docker compose or through Portainer')
@click.option('--repo-url', help='Git repository holding the compose stacks')
@click.option('--clone-dir', type=click.Path(file_okay=False, path_type=Path), help='Where to check out the stack repository')
@click.option('--skip-root-check', is_flag=True, help='Do not require root privileges')
@click.pass_context
def deploy(ctx, mode, repo_url, clone_dir, skip_root_check):
    """Pull the stack repository and (re)deploy its stacks"""
    try:
        settings = settings_from_context(
            ctx,
            deploy_mode=mode,
            compose_repo_url=repo_url,
            compose_clone_dir=clone_dir,
            require_root=False if skip_root_check else None,
        )
        report = Bootstrapper(settings).deploy_only()
    except ServiceError as e:
        fail(ctx, e)

    render_report(report, title="Deployment summary")
