"""Docker service for abstracting Docker engine operations."""

import logging
from typing import Any, Optional

import docker
import docker.errors
from docker.models.containers import Container
from docker.models.volumes import Volume

from .exceptions import (
    ContainerNotFoundError,
    DockerServiceError,
    ImageNotFoundError,
)

logger = logging.getLogger(__name__)


class DockerService:
    """Service for Docker engine operations through the Docker SDK."""

    def __init__(self):
        """Initialize Docker service and test connection."""
        try:
            self.client = docker.from_env()
            self.client.ping()
        except docker.errors.DockerException as e:
            if "connection refused" in str(e).lower() or "cannot connect" in str(e).lower():
                raise DockerServiceError(
                    "Docker daemon is not running. Start it with 'systemctl start docker'."
                ) from e
            else:
                raise DockerServiceError(f"Failed to connect to Docker: {e}") from e

    def server_version(self) -> str:
        """Get the Docker engine version.

        Returns:
            Engine version string, e.g. ``24.0.7``

        Raises:
            DockerServiceError: If the daemon cannot be queried
        """
        try:
            return self.client.version().get("Version", "unknown")
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to query Docker version: {e}") from e

    def ensure_volume(self, name: str) -> Volume:
        """Create a named volume, or return it when it already exists.

        Raises:
            DockerServiceError: If the volume cannot be created
        """
        try:
            return self.client.volumes.get(name)
        except docker.errors.NotFound:
            pass
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to inspect volume '{name}': {e}") from e

        try:
            volume = self.client.volumes.create(name=name)
            logger.debug(f"Created volume {name}")
            return volume
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to create volume '{name}': {e}") from e

    def get_container(self, container_id: str) -> Container:
        """Get a container by ID or name.

        Args:
            container_id: Container ID or name

        Returns:
            Container object

        Raises:
            ContainerNotFoundError: If container not found
            DockerServiceError: If retrieval fails
        """
        try:
            return self.client.containers.get(container_id)
        except docker.errors.NotFound as e:
            raise ContainerNotFoundError(
                f"Container '{container_id}' not found"
            ) from e
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to get container: {e}") from e

    def remove_container(self, container_id: str, force: bool = True) -> bool:
        """Remove a container by ID or name.

        Args:
            container_id: Container ID or name
            force: Force remove even if running

        Returns:
            True if a container was removed, False if none existed

        Raises:
            DockerServiceError: If removal fails
        """
        try:
            container = self.get_container(container_id)
        except ContainerNotFoundError:
            return False

        try:
            container.remove(force=force)
            logger.debug(f"Removed container {container_id}")
            return True
        except docker.errors.NotFound:
            return False
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to remove container: {e}") from e

    def run_container(
        self,
        image: str,
        command: Optional[str] = None,
        remove: bool = False,
        detach: bool = True,
        **kwargs,
    ) -> Any:
        """Run a container and return output or container object.

        Args:
            image: Image name (pulled when missing)
            command: Command to run
            remove: Remove container after run
            detach: Run in background
            **kwargs: Additional Docker run parameters

        Returns:
            Container output (if not detached) or Container object (if detached)

        Raises:
            ImageNotFoundError: If image not found
            DockerServiceError: If run fails
        """
        try:
            return self.client.containers.run(
                image=image,
                command=command,
                remove=remove,
                detach=detach,
                **kwargs,
            )
        except docker.errors.ImageNotFound as e:
            raise ImageNotFoundError(f"Image '{image}' not found") from e
        except docker.errors.ContainerError as e:
            raise DockerServiceError(f"Container exited with error: {e}") from e
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to run container: {e}") from e
