"""Package service for apt-based hosts."""

import logging
from typing import Optional, Sequence

from .command import CommandRunner
from .exceptions import CommandError, PackageServiceError

logger = logging.getLogger(__name__)

APT_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


class PackageService:
    """Installs packages with apt-get."""

    def __init__(self, runner: Optional[CommandRunner] = None):
        self.runner = runner or CommandRunner()

    def _run_apt(self, args: list[str]) -> None:
        try:
            self.runner.run(["apt-get"] + args, env=APT_ENV)
        except CommandError as e:
            raise PackageServiceError(f"apt-get {args[0]} failed: {e.stderr or e}") from e

    def update(self) -> None:
        """Refresh the package index.

        Raises:
            PackageServiceError: If the update fails
        """
        self._run_apt(["update", "-qq"])
        logger.debug("Package index updated")

    def install(self, packages: Sequence[str]) -> list[str]:
        """Install packages, already installed ones are left as they are.

        Args:
            packages: Package names

        Returns:
            The package names passed to apt-get (empty when nothing to do)

        Raises:
            PackageServiceError: If installation fails
        """
        names = [pkg for pkg in packages if pkg]
        if not names:
            return []
        self._run_apt(["install", "-y", "-qq"] + names)
        logger.debug(f"Installed/verified packages: {' '.join(names)}")
        return names
