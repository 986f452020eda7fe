"""Bootstrap result models."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class DeployedStack:
    """Outcome of deploying one compose stack."""

    name: str
    path: str
    action: str  # "up", "created" or "updated"


@dataclass
class BootstrapReport:
    """Summary of what a bootstrap run did."""

    packages: List[str] = field(default_factory=list)
    docker_version: Optional[str] = None
    compose_version: Optional[str] = None
    compose_plugin_installed: bool = False
    service_user: Optional[str] = None
    service_user_created: bool = False
    login_user: Optional[str] = None
    login_user_added: bool = False
    smoke_test_passed: bool = False
    repo_action: Optional[str] = None
    repo_commit: Optional[str] = None
    deploy_mode: Optional[str] = None
    portainer_url: Optional[str] = None
    stacks: List[DeployedStack] = field(default_factory=list)

    def rows(self) -> List[tuple]:
        """Summary rows for display."""
        rows = [
            ("Packages", ", ".join(self.packages) or "(none)"),
            ("Docker", self.docker_version or "unknown"),
            ("Compose plugin", self._compose_label()),
            ("Service user", self._user_label()),
        ]
        if self.login_user:
            state = "added to docker group (re-login required)" if self.login_user_added else "already in docker group"
            rows.append(("Login user", f"{self.login_user} - {state}"))
        rows.append(("Smoke test", "passed" if self.smoke_test_passed else "not run"))
        if self.repo_action:
            commit = f" @ {self.repo_commit[:12]}" if self.repo_commit else ""
            rows.append(("Stack repo", f"{self.repo_action}{commit}"))
        if self.portainer_url:
            rows.append(("Portainer", self.portainer_url))
        if self.deploy_mode:
            rows.append(("Stacks", f"{len(self.stacks)} deployed via {self.deploy_mode}"))
        return rows

    def _compose_label(self) -> str:
        if not self.compose_version:
            return "unknown"
        suffix = " (installed)" if self.compose_plugin_installed else ""
        return f"{self.compose_version}{suffix}"

    def _user_label(self) -> str:
        if not self.service_user:
            return "unknown"
        return f"{self.service_user} ({'created' if self.service_user_created else 'existing'})"
