"""Allow running as ``python -m docker_bootstrap``."""

from .cli.main import cli

if __name__ == '__main__':
    cli()
