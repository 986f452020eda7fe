"""Systemd service wrapper."""

import logging
from typing import Optional

from .command import CommandRunner
from .exceptions import CommandError, SystemdServiceError

logger = logging.getLogger(__name__)


class SystemdService:
    """Starts and enables systemd units."""

    def __init__(self, runner: Optional[CommandRunner] = None):
        self.runner = runner or CommandRunner()

    def _systemctl(self, action: str, unit: str) -> None:
        try:
            self.runner.run(["systemctl", action, unit])
        except CommandError as e:
            raise SystemdServiceError(f"Failed to {action} {unit}: {e.stderr or e}") from e

    def start(self, unit: str) -> None:
        """Start a unit (no-op if already running)."""
        self._systemctl("start", unit)

    def enable(self, unit: str) -> None:
        """Enable a unit at boot."""
        self._systemctl("enable", unit)

    def is_active(self, unit: str) -> bool:
        """Check whether a unit is running."""
        result = self.runner.run(["systemctl", "is-active", "--quiet", unit], check=False)
        return result.returncode == 0
