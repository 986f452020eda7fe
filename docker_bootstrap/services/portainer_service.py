"""Portainer REST API client."""

import logging
import time
from typing import Any, Callable, Optional

import httpx

from ..core.constants import HTTP_TIMEOUT, PORTAINER_STACK_TYPE_COMPOSE
from ..models.stack import ComposeStack, PortainerStack
from .exceptions import (
    PortainerAuthError,
    PortainerServiceError,
    PortainerTimeoutError,
)

logger = logging.getLogger(__name__)


class PortainerService:
    """Deploys compose stacks through the Portainer API.

    The client authenticates once with the admin credentials and sends the
    returned JWT as a bearer token on every later request.
    """

    def __init__(
        self,
        base_url: str,
        verify: bool = False,
        timeout: float = HTTP_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.base_url = base_url.rstrip("/")
        self.client = httpx.Client(
            base_url=self.base_url,
            verify=verify,
            timeout=timeout,
            transport=transport,
        )
        self._sleep = sleep
        self._clock = clock
        self.token: Optional[str] = None

    def __enter__(self) -> "PortainerService":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            return self.client.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            raise PortainerServiceError(f"{method} {path} failed: {e}") from e

    @staticmethod
    def _raise_for_status(response: httpx.Response, action: str) -> None:
        if response.is_success:
            return
        try:
            detail = response.json().get("message") or response.text
        except (ValueError, AttributeError):
            detail = response.text
        raise PortainerServiceError(
            f"Failed to {action}: HTTP {response.status_code} {detail}".strip()
        )

    @staticmethod
    def _decode(
        response: httpx.Response,
        action: str,
        model: Optional[type] = None,
        many: bool = False,
    ) -> Any:
        """Parse a successful JSON reply, optionally into one or many models."""
        try:
            data = response.json()
            if many:
                data = data or []
                if not isinstance(data, list):
                    raise ValueError("expected a list")
                return [model.model_validate(item) for item in data]
            return data if model is None else model.model_validate(data)
        except ValueError as e:
            raise PortainerServiceError(
                f"Unexpected reply to {action} (HTTP {response.status_code}): {e}"
            ) from e

    def is_ready(self) -> bool:
        """Probe ``/api/status`` once."""
        try:
            response = self.client.get("/api/status")
        except httpx.HTTPError as e:
            logger.debug(f"Portainer not reachable yet: {e}")
            return False
        return response.status_code == 200

    def wait_until_ready(self, interval: float, timeout: float) -> None:
        """Poll ``/api/status`` at a fixed interval until it answers 200.

        Args:
            interval: Seconds between probes
            timeout: Seconds to wait before giving up

        Raises:
            PortainerTimeoutError: If Portainer is not ready in time
        """
        deadline = self._clock() + timeout
        while not self.is_ready():
            if self._clock() >= deadline:
                raise PortainerTimeoutError(
                    f"Portainer at {self.base_url} did not become ready within {timeout:g}s"
                )
            logger.debug(f"Waiting for Portainer at {self.base_url}...")
            self._sleep(interval)
        logger.info("Portainer API is up")

    def init_admin(self, username: str, password: str) -> bool:
        """Create the initial admin account on a fresh instance.

        Returns:
            True if the admin was created, False if one already existed

        Raises:
            PortainerServiceError: If initialization fails
        """
        response = self._request(
            "POST",
            "/api/users/admin/init",
            json={"Username": username, "Password": password},
        )
        if response.status_code == 409:
            return False
        self._raise_for_status(response, "initialize admin user")
        return True

    def authenticate(self, username: str, password: str) -> str:
        """Log in and keep the JWT for later requests.

        Returns:
            The JWT

        Raises:
            PortainerAuthError: If the credentials are rejected
        """
        response = self._request(
            "POST",
            "/api/auth",
            json={"Username": username, "Password": password},
        )
        if response.status_code in (401, 403, 422):
            raise PortainerAuthError(f"Portainer rejected credentials for '{username}'")
        self._raise_for_status(response, "authenticate")

        data = self._decode(response, "authenticate")
        token = data.get("jwt") if isinstance(data, dict) else None
        if not token:
            raise PortainerAuthError("Portainer returned no token")
        self.token = token
        return token

    def list_stacks(self) -> list[PortainerStack]:
        """List the stacks Portainer knows about."""
        response = self._request("GET", "/api/stacks")
        self._raise_for_status(response, "list stacks")
        return self._decode(response, "list stacks", PortainerStack, many=True)

    def create_stack(self, stack: ComposeStack, endpoint_id: int) -> PortainerStack:
        """Create a standalone compose stack from the file content.

        Raises:
            PortainerServiceError: If creation fails
        """
        # Sent as multipart form fields without filenames
        form = {
            "Name": (None, stack.name),
            "StackFileContent": (None, stack.content()),
            "EndpointID": (None, str(endpoint_id)),
        }
        response = self._request(
            "POST",
            "/api/stacks",
            params={
                "type": PORTAINER_STACK_TYPE_COMPOSE,
                "method": "string",
                "endpointId": endpoint_id,
            },
            files=form,
        )
        self._raise_for_status(response, f"create stack '{stack.name}'")
        return self._decode(response, f"create stack '{stack.name}'", PortainerStack)

    def update_stack(self, stack_id: int, stack: ComposeStack, endpoint_id: int) -> PortainerStack:
        """Replace the compose file of an existing stack and redeploy it.

        Raises:
            PortainerServiceError: If the update fails
        """
        response = self._request(
            "PUT",
            f"/api/stacks/{stack_id}",
            params={"endpointId": endpoint_id},
            json={
                "StackFileContent": stack.content(),
                "Prune": False,
                "PullImage": True,
            },
        )
        self._raise_for_status(response, f"update stack '{stack.name}'")
        return self._decode(response, f"update stack '{stack.name}'", PortainerStack)

    def deploy_stack(self, stack: ComposeStack, endpoint_id: int) -> str:
        """Create the stack, or update it when one with the same name exists.

        Returns:
            "created" or "updated"
        """
        existing = {s.name: s for s in self.list_stacks()}
        current = existing.get(stack.name)
        if current is not None:
            self.update_stack(current.id, stack, endpoint_id)
            return "updated"
        self.create_stack(stack, endpoint_id)
        return "created"
