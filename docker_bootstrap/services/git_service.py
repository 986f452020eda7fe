"""Git service for keeping the stack repository in sync."""

import logging
import subprocess
from pathlib import Path
from typing import Optional

from .exceptions import GitServiceError

logger = logging.getLogger(__name__)


class GitService:
    """Service for Git operations on the stack checkout."""

    def __init__(self, repo_path: Path):
        """Initialize Git service.

        Args:
            repo_path: Directory the stack repository is (or will be) cloned into
        """
        self.repo_path = Path(repo_path)

    def _is_git_repo(self) -> bool:
        """Check if the repo path is a git work tree."""
        if not self.repo_path.is_dir():
            return False
        try:
            self._run_git_command(["rev-parse", "--git-dir"])
            return True
        except GitServiceError:
            return False

    def _run_git_command(
        self,
        args: list[str],
        check: bool = True,
        capture_output: bool = True,
        cwd: Optional[Path] = None,
    ) -> subprocess.CompletedProcess:
        """Run a git command with proper error handling.

        Args:
            args: Git command arguments
            check: Check return code
            capture_output: Capture stdout and stderr
            cwd: Working directory (defaults to the repo path)

        Returns:
            Completed process result

        Raises:
            GitServiceError: If command fails
        """
        cmd = ["git"] + args
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd or self.repo_path,
                check=check,
                capture_output=capture_output,
                text=True,
            )
            return result
        except subprocess.CalledProcessError as e:
            error_msg = e.stderr.strip() if e.stderr else str(e)
            raise GitServiceError(f"Git command failed: {error_msg}") from e
        except OSError as e:
            raise GitServiceError(f"Unexpected error running git command: {e}") from e

    def clone(self, url: str) -> None:
        """Clone a repository into the repo path.

        Args:
            url: Remote URL

        Raises:
            GitServiceError: If the clone fails
        """
        self.repo_path.parent.mkdir(parents=True, exist_ok=True)
        self._run_git_command(
            ["clone", url, str(self.repo_path)], cwd=self.repo_path.parent
        )
        logger.info(f"Cloned {url} into {self.repo_path}")

    def pull(self) -> None:
        """Pull the current branch from its upstream.

        Raises:
            GitServiceError: If the pull fails
        """
        self._run_git_command(["pull", "--ff-only"])
        logger.info(f"Pulled latest changes in {self.repo_path}")

    def sync(self, url: str) -> str:
        """Clone the repository if it is missing, pull it otherwise.

        Args:
            url: Remote URL used for the initial clone

        Returns:
            "cloned" or "pulled"

        Raises:
            GitServiceError: If the directory exists but is not a repository,
                or if git fails
        """
        if not self.repo_path.exists():
            self.clone(url)
            return "cloned"

        if not self._is_git_repo():
            raise GitServiceError(f"{self.repo_path} exists but is not a git repository")

        remote = self.get_remote_url()
        if remote and remote != url:
            logger.warning(f"{self.repo_path} tracks {remote}, not {url}; pulling anyway")
        self.pull()
        return "pulled"

    def get_remote_url(self, remote: str = "origin") -> Optional[str]:
        """Get the URL of a remote, or None if it is not configured."""
        result = self._run_git_command(["remote", "get-url", remote], check=False)
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def get_commit_hash(self, ref: str = "HEAD") -> str:
        """Get the commit hash of a reference.

        Args:
            ref: Git reference (default: HEAD)

        Returns:
            Commit hash

        Raises:
            GitServiceError: If unable to get hash
        """
        result = self._run_git_command(["rev-parse", ref])
        return result.stdout.strip()
