"""Custom exceptions for service layer."""

from typing import Optional, Sequence


class ServiceError(Exception):
    """Base exception for all service-related errors."""

    pass


class ConfigurationError(ServiceError):
    """Exception raised for invalid or missing settings."""

    pass


class CommandError(ServiceError):
    """Exception raised when an external command fails."""

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        stderr: Optional[str] = None,
    ):
        super().__init__(message)
        self.command = list(command or [])
        self.returncode = returncode
        self.stderr = stderr


class PackageServiceError(ServiceError):
    """Exception raised for package manager operations."""

    pass


class SystemdServiceError(ServiceError):
    """Exception raised for service manager operations."""

    pass


class UserServiceError(ServiceError):
    """Exception raised for user and group provisioning."""

    pass


class DockerServiceError(ServiceError):
    """Exception raised for Docker service operations."""

    pass


class DockerNotFoundError(DockerServiceError):
    """Exception raised when the Docker binary is not installed."""

    pass


class ImageNotFoundError(DockerServiceError):
    """Exception raised when a Docker image is not found."""

    pass


class ContainerNotFoundError(DockerServiceError):
    """Exception raised when a Docker container is not found."""

    pass


class ComposeServiceError(DockerServiceError):
    """Exception raised for Docker Compose operations."""

    pass


class SmokeTestError(DockerServiceError):
    """Exception raised when the hello-world smoke test fails."""

    pass


class GitServiceError(ServiceError):
    """Exception raised for Git service operations."""

    pass


class StackDiscoveryError(ServiceError):
    """Exception raised when compose stacks cannot be discovered."""

    pass


class PortainerServiceError(ServiceError):
    """Exception raised for Portainer API operations."""

    pass


class PortainerAuthError(PortainerServiceError):
    """Exception raised when Portainer rejects the admin credentials."""

    pass


class PortainerTimeoutError(PortainerServiceError):
    """Exception raised when Portainer does not become ready in time."""

    pass


class BootstrapError(ServiceError):
    """Exception raised when a fatal bootstrap precondition fails."""

    pass
