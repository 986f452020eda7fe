"""Command runner for external tools (apt-get, systemctl, docker, git...)."""

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from .exceptions import CommandError

logger = logging.getLogger(__name__)


class CommandRunner:
    """Runs external commands with consistent error handling."""

    def run(
        self,
        args: Sequence[str],
        check: bool = True,
        capture_output: bool = True,
        cwd: Optional[Path] = None,
        env: Optional[dict[str, str]] = None,
    ) -> subprocess.CompletedProcess:
        """Run a command and wait for it to finish.

        Args:
            args: Command and arguments
            check: Raise if the command exits non-zero
            capture_output: Capture stdout and stderr
            cwd: Working directory
            env: Extra environment variables, merged over the current environment

        Returns:
            Completed process result

        Raises:
            CommandError: If the command fails or cannot be started
        """
        cmd = list(args)
        run_env = None
        if env:
            run_env = os.environ.copy()
            run_env.update(env)

        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            return subprocess.run(
                cmd,
                cwd=cwd,
                env=run_env,
                check=check,
                capture_output=capture_output,
                text=True,
            )
        except subprocess.CalledProcessError as e:
            error_msg = (e.stderr or "").strip() or str(e)
            raise CommandError(
                f"Command '{' '.join(cmd)}' failed: {error_msg}",
                command=cmd,
                returncode=e.returncode,
                stderr=e.stderr,
            ) from e
        except OSError as e:
            raise CommandError(f"Unable to run '{cmd[0]}': {e}", command=cmd) from e

    def which(self, name: str) -> Optional[str]:
        """Resolve a binary on PATH."""
        return shutil.which(name)
