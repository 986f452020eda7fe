"""User and group provisioning service."""

import grp
import logging
import os
import pwd
from typing import Optional

from ..core.constants import NOLOGIN_SHELL
from .command import CommandRunner
from .exceptions import CommandError, UserServiceError

logger = logging.getLogger(__name__)


class UserService:
    """Service for local user and group management."""

    def __init__(self, runner: Optional[CommandRunner] = None):
        self.runner = runner or CommandRunner()

    def _run(self, args: list[str], action: str) -> None:
        try:
            self.runner.run(args)
        except CommandError as e:
            raise UserServiceError(f"Failed to {action}: {e.stderr or e}") from e

    def ensure_group(self, name: str) -> None:
        """Create a group unless it already exists."""
        # -f exits successfully when the group is already there
        self._run(["groupadd", "-f", name], f"create group '{name}'")

    def user_exists(self, name: str) -> bool:
        """Check if a local user exists."""
        try:
            pwd.getpwnam(name)
            return True
        except KeyError:
            return False

    def create_system_user(self, name: str, group: str, shell: str = NOLOGIN_SHELL) -> bool:
        """Create a system user without password or login shell.

        Args:
            name: User name
            group: Primary group
            shell: Login shell

        Returns:
            True if the user was created, False if it already existed

        Raises:
            UserServiceError: If useradd fails
        """
        if self.user_exists(name):
            return False
        self._run(
            ["useradd", "--system", "--gid", group, "--shell", shell, name],
            f"create user '{name}'",
        )
        logger.debug(f"Created system user {name}")
        return True

    def is_member(self, user: str, group: str) -> bool:
        """Check if a user belongs to a group, as primary or supplementary group."""
        try:
            group_entry = grp.getgrnam(group)
        except KeyError:
            return False
        if user in group_entry.gr_mem:
            return True
        try:
            return pwd.getpwnam(user).pw_gid == group_entry.gr_gid
        except KeyError:
            return False

    def add_to_group(self, user: str, group: str) -> bool:
        """Append a user to a supplementary group.

        Returns:
            True if the user was added, False if already a member
        """
        if self.is_member(user, group):
            return False
        self._run(["usermod", "-aG", group, user], f"add '{user}' to group '{group}'")
        return True

    def login_user(self) -> Optional[str]:
        """Return the real user behind this session, if it can be determined.

        Under sudo the invoking user is in SUDO_USER; otherwise fall back to
        the login name of the controlling terminal.
        """
        sudo_user = os.environ.get("SUDO_USER")
        if sudo_user:
            return sudo_user
        try:
            return os.getlogin()
        except OSError:
            return None
