"""Docker CLI service: binary detection, Compose plugin and smoke test."""

import logging
import re
import shlex
from typing import Optional

from ..core.constants import DOCKER_BINARY, SMOKE_TEST_SHELL
from ..models.stack import ComposeStack
from .command import CommandRunner
from .exceptions import (
    CommandError,
    ComposeServiceError,
    DockerNotFoundError,
    SmokeTestError,
)

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"version\s+v?([0-9][\w.+-]*?),?(?:\s|$)", re.IGNORECASE)


class ComposeService:
    """Operations that go through the docker CLI rather than the SDK."""

    def __init__(self, runner: Optional[CommandRunner] = None):
        self.runner = runner or CommandRunner()

    def docker_binary(self) -> str:
        """Locate the docker binary.

        Raises:
            DockerNotFoundError: If docker is not installed
        """
        path = self.runner.which(DOCKER_BINARY)
        if not path:
            raise DockerNotFoundError("Docker not found - aborting.")
        return path

    def cli_version(self) -> str:
        """Parse the client version from ``docker --version``."""
        try:
            result = self.runner.run([DOCKER_BINARY, "--version"])
        except CommandError as e:
            raise ComposeServiceError(f"Unable to run docker: {e}") from e
        return parse_version(result.stdout) or result.stdout.strip()

    def compose_version(self) -> Optional[str]:
        """Get the Compose plugin version.

        Returns:
            Version string, or None when the plugin is not installed
        """
        result = self.runner.run([DOCKER_BINARY, "compose", "version", "--short"], check=False)
        if result.returncode != 0:
            return None
        return result.stdout.strip().lstrip("v") or None

    def up(self, stack: ComposeStack) -> None:
        """Start a stack in the background, recreating changed services.

        Raises:
            ComposeServiceError: If docker compose fails
        """
        try:
            self.runner.run(
                [DOCKER_BINARY, "compose", "-f", str(stack.path), "-p", stack.name, "up", "-d"],
                cwd=stack.path.parent,
            )
        except CommandError as e:
            raise ComposeServiceError(f"Failed to deploy stack '{stack.name}': {e.stderr or e}") from e

    def smoke_test(self, user: str, image: str) -> None:
        """Run a throwaway container as ``user`` to prove Docker works for it.

        Raises:
            SmokeTestError: If the container does not run successfully
        """
        command = f"{DOCKER_BINARY} run --rm {shlex.quote(image)}"
        try:
            self.runner.run(["su", "-s", SMOKE_TEST_SHELL, "-c", command, user])
        except CommandError as e:
            raise SmokeTestError(
                "Docker test failed - investigate installation/network."
            ) from e


def parse_version(output: str) -> Optional[str]:
    """Extract the version from ``docker --version`` style output.

    >>> parse_version("Docker version 24.0.7, build afdd53b")
    '24.0.7'
    """
    match = _VERSION_RE.search(output or "")
    return match.group(1) if match else None
