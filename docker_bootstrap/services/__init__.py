"""Service layer for abstracting host, Docker, Git and Portainer operations."""

from .exceptions import (
    ServiceError,
    ConfigurationError,
    CommandError,
    PackageServiceError,
    SystemdServiceError,
    UserServiceError,
    DockerServiceError,
    DockerNotFoundError,
    ImageNotFoundError,
    ContainerNotFoundError,
    ComposeServiceError,
    SmokeTestError,
    GitServiceError,
    StackDiscoveryError,
    PortainerServiceError,
    PortainerAuthError,
    PortainerTimeoutError,
    BootstrapError,
)
from .command import CommandRunner
from .package_service import PackageService
from .systemd_service import SystemdService
from .user_service import UserService
from .docker_service import DockerService
from .compose_service import ComposeService
from .git_service import GitService
from .portainer_service import PortainerService

__all__ = [
    "CommandRunner",
    "PackageService",
    "SystemdService",
    "UserService",
    "DockerService",
    "ComposeService",
    "GitService",
    "PortainerService",
    "ServiceError",
    "ConfigurationError",
    "CommandError",
    "PackageServiceError",
    "SystemdServiceError",
    "UserServiceError",
    "DockerServiceError",
    "DockerNotFoundError",
    "ImageNotFoundError",
    "ContainerNotFoundError",
    "ComposeServiceError",
    "SmokeTestError",
    "GitServiceError",
    "StackDiscoveryError",
    "PortainerServiceError",
    "PortainerAuthError",
    "PortainerTimeoutError",
    "BootstrapError",
]
