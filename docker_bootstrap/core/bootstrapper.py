"""Host bootstrap procedure."""

import logging
import os
from typing import Callable, Optional

from ..models.config import BootstrapSettings
from ..models.report import BootstrapReport, DeployedStack
from ..models.stack import ComposeStack
from ..services.command import CommandRunner
from ..services.compose_service import ComposeService
from ..services.docker_service import DockerService
from ..services.exceptions import BootstrapError, DockerNotFoundError, SmokeTestError
from ..services.git_service import GitService
from ..services.package_service import PackageService
from ..services.portainer_service import PortainerService
from ..services.systemd_service import SystemdService
from ..services.user_service import UserService
from .constants import (
    COMPOSE_PLUGIN_PACKAGE,
    DEPLOY_MODE_PORTAINER,
    DOCKER_SERVICE_UNIT,
    DOCKER_SOCKET,
    PORTAINER_CONTAINER_NAME,
    PORTAINER_DATA_PATH,
    PORTAINER_INTERNAL_AGENT_PORT,
    PORTAINER_INTERNAL_UI_PORT,
    PORTAINER_VOLUME_NAME,
)
from .stacks import discover_stacks

logger = logging.getLogger(__name__)


class Bootstrapper:
    """Runs the bootstrap steps in order, stopping at the first failure.

    Every step is safe to repeat: packages already installed, an existing
    user or group membership, or an existing checkout are left alone, and
    deployed stacks are replaced rather than duplicated.
    """

    def __init__(
        self,
        settings: BootstrapSettings,
        runner: Optional[CommandRunner] = None,
        packages: Optional[PackageService] = None,
        systemd: Optional[SystemdService] = None,
        users: Optional[UserService] = None,
        compose: Optional[ComposeService] = None,
        git: Optional[GitService] = None,
        docker_factory: Callable[[], DockerService] = DockerService,
        portainer_factory: Callable[..., PortainerService] = PortainerService,
    ):
        self.settings = settings
        runner = runner or CommandRunner()
        self.packages = packages or PackageService(runner)
        self.systemd = systemd or SystemdService(runner)
        self.users = users or UserService(runner)
        self.compose = compose or ComposeService(runner)
        self.git = git or GitService(settings.compose_clone_dir)
        self._docker_factory = docker_factory
        self._portainer_factory = portainer_factory
        self._docker: Optional[DockerService] = None

    @property
    def docker(self) -> DockerService:
        """Docker SDK service, connected on first use."""
        if self._docker is None:
            self._docker = self._docker_factory()
        return self._docker

    def run(self) -> BootstrapReport:
        """Run the full bootstrap.

        Returns:
            Summary of what was done

        Raises:
            ServiceError: If any step fails
        """
        report = BootstrapReport(deploy_mode=self.settings.deploy_mode)
        self.check_root()
        self.install_packages(report)
        self.verify_docker(report)
        self.ensure_compose_plugin(report)
        self.provision_user(report)
        self.smoke_test(report)
        self.sync_repository(report)
        stacks = discover_stacks(self.settings.compose_clone_dir, self.settings.compose_subdir)
        if self.settings.deploy_mode == DEPLOY_MODE_PORTAINER:
            self.deploy_portainer(report)
        self.deploy_stacks(stacks, report)
        logger.info("Bootstrap complete!")
        return report

    def deploy_only(self) -> BootstrapReport:
        """Synchronize the stack repository and deploy its stacks."""
        report = BootstrapReport(deploy_mode=self.settings.deploy_mode)
        self.check_root()
        self.sync_repository(report)
        stacks = discover_stacks(self.settings.compose_clone_dir, self.settings.compose_subdir)
        if self.settings.deploy_mode == DEPLOY_MODE_PORTAINER:
            report.portainer_url = self.settings.resolved_portainer_url
        self.deploy_stacks(stacks, report)
        return report

    def check_root(self) -> None:
        """Refuse to run without root privileges when they are required."""
        if self.settings.require_root and os.geteuid() != 0:
            raise BootstrapError("This command must be run as root (try sudo).")

    def install_packages(self, report: BootstrapReport) -> None:
        """Refresh the apt index and install the baseline packages."""
        logger.info("Updating package index and installing baseline packages...")
        self.packages.update()
        installed = self.packages.install(self.settings.extra_packages)
        if installed:
            logger.info(f"Installed/verified packages: {' '.join(installed)}")
        report.packages = installed

    def verify_docker(self, report: BootstrapReport) -> None:
        """Make sure Docker is installed, running and enabled at boot."""
        try:
            self.compose.docker_binary()
        except DockerNotFoundError as e:
            raise BootstrapError(str(e)) from e

        report.docker_version = self.compose.cli_version()
        logger.info(f"Docker detected (version {report.docker_version})")

        self.systemd.start(DOCKER_SERVICE_UNIT)
        self.systemd.enable(DOCKER_SERVICE_UNIT)
        engine_version = self.docker.server_version()
        logger.debug(f"Docker engine answered (version {engine_version})")
        logger.info("Docker service is active and enabled")

    def ensure_compose_plugin(self, report: BootstrapReport) -> None:
        """Install the Compose v2 plugin when ``docker compose`` is missing."""
        version = self.compose.compose_version()
        if version:
            logger.info(f"Docker Compose plugin already installed ({version})")
        else:
            logger.info("Docker Compose plugin missing - installing...")
            self.packages.install([COMPOSE_PLUGIN_PACKAGE])
            version = self.compose.compose_version()
            if not version:
                raise BootstrapError(
                    f"'docker compose' still unavailable after installing {COMPOSE_PLUGIN_PACKAGE}"
                )
            report.compose_plugin_installed = True
            logger.info(f"Installed {COMPOSE_PLUGIN_PACKAGE} via apt ({version})")
        report.compose_version = version

    def provision_user(self, report: BootstrapReport) -> None:
        """Create the docker group and service user, and grant the login user access."""
        user = self.settings.service_user
        group = self.settings.service_group

        self.users.ensure_group(group)
        report.service_user = user
        report.service_user_created = self.users.create_system_user(user, group)
        if report.service_user_created:
            logger.info(f"Created system user '{user}' (no shell)")

        login_user = self.users.login_user()
        if login_user and login_user != "root":
            report.login_user = login_user
            report.login_user_added = self.users.add_to_group(login_user, group)
            if report.login_user_added:
                logger.info(f"Added '{login_user}' to {group} group (re-login required)")
            else:
                logger.info(f"User '{login_user}' already in {group} group")

    def smoke_test(self, report: BootstrapReport) -> None:
        """Run the hello-world container as the service user."""
        image = self.settings.smoke_test_image
        logger.info(f"Running Docker {image} test as '{self.settings.service_user}' user...")
        try:
            self.compose.smoke_test(self.settings.service_user, image)
        except SmokeTestError as e:
            raise BootstrapError(str(e)) from e
        report.smoke_test_passed = True
        logger.info(f"Docker {image} ran successfully")

    def sync_repository(self, report: BootstrapReport) -> None:
        """Clone the stack repository, or pull it when already checked out."""
        report.repo_action = self.git.sync(self.settings.compose_repo_url)
        report.repo_commit = self.git.get_commit_hash()

    def deploy_portainer(self, report: BootstrapReport) -> None:
        """(Re)deploy the Portainer CE container."""
        settings = self.settings
        self.docker.ensure_volume(PORTAINER_VOLUME_NAME)
        if self.docker.remove_container(PORTAINER_CONTAINER_NAME):
            logger.info("Removed existing Portainer container")

        logger.info(f"Deploying Portainer CE (web UI on https://<host>:{settings.portainer_ui_port})...")
        self.docker.run_container(
            settings.portainer_image,
            name=PORTAINER_CONTAINER_NAME,
            detach=True,
            restart_policy={"Name": "always"},
            ports={
                f"{PORTAINER_INTERNAL_AGENT_PORT}/tcp": settings.portainer_agent_port,
                f"{PORTAINER_INTERNAL_UI_PORT}/tcp": settings.portainer_ui_port,
            },
            volumes={
                DOCKER_SOCKET: {"bind": DOCKER_SOCKET, "mode": "rw"},
                PORTAINER_VOLUME_NAME: {"bind": PORTAINER_DATA_PATH, "mode": "rw"},
            },
        )
        report.portainer_url = settings.resolved_portainer_url

    def deploy_stacks(self, stacks: list[ComposeStack], report: BootstrapReport) -> None:
        """Deploy the discovered stacks with the configured mode.

        In portainer mode the admin account is initialized even when there
        are no stacks.
        """
        if not stacks:
            logger.warning(f"No compose stacks found in {self.settings.stacks_dir}")
        else:
            logger.info(f"Deploying docker compose stacks from {self.settings.compose_clone_dir}...")

        if self.settings.deploy_mode == DEPLOY_MODE_PORTAINER:
            self._deploy_with_portainer(stacks, report)
        else:
            for stack in stacks:
                self.compose.up(stack)
                report.stacks.append(DeployedStack(stack.name, str(stack.path), "up"))
                logger.info(f"Deployed: {stack.name} ({stack.path})")

    def _deploy_with_portainer(self, stacks: list[ComposeStack], report: BootstrapReport) -> None:
        settings = self.settings
        username = settings.portainer_admin_user
        password = settings.portainer_admin_password.get_secret_value()

        with self._portainer_factory(
            settings.resolved_portainer_url, verify=settings.portainer_verify_tls
        ) as portainer:
            portainer.wait_until_ready(settings.status_poll_interval, settings.status_timeout)
            if portainer.init_admin(username, password):
                logger.info(f"Initialized Portainer admin user '{username}'")
            portainer.authenticate(username, password)

            for stack in stacks:
                action = portainer.deploy_stack(stack, settings.portainer_endpoint_id)
                report.stacks.append(DeployedStack(stack.name, str(stack.path), action))
                logger.info(f"Deployed via Portainer: {stack.name} ({action})")
