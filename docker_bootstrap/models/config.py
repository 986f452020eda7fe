"""Settings model for Docker Bootstrap."""

import re
from pathlib import Path
from typing import Annotated, Any, List, Literal, Optional

from pydantic import AliasChoices, Field, SecretStr, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from ..core.constants import (
    DEFAULT_COMPOSE_CLONE_DIR,
    DEFAULT_COMPOSE_REPO_URL,
    DEFAULT_COMPOSE_SUBDIR,
    DEFAULT_EXTRA_PACKAGES,
    DEFAULT_PORTAINER_ADMIN_USER,
    DEFAULT_PORTAINER_AGENT_PORT,
    DEFAULT_PORTAINER_ENDPOINT_ID,
    DEFAULT_PORTAINER_UI_PORT,
    DEFAULT_SERVICE_GROUP,
    DEFAULT_SERVICE_USER,
    DEFAULT_SMOKE_TEST_IMAGE,
    DEPLOY_MODE_COMPOSE,
    DEPLOY_MODE_PORTAINER,
    ENV_FILE_NAME,
    PORTAINER_IMAGE,
    STATUS_POLL_INTERVAL,
    STATUS_TIMEOUT,
)
from ..services.exceptions import ConfigurationError

# scheme://host/path, user@host:path, or an absolute local path
_REMOTE_URL_RE = re.compile(r"^([a-z][a-z0-9+.-]*://[^/\s]+/?\S*|[\w.-]+@[\w.-]+:\S+|/\S*)$", re.IGNORECASE)


class BootstrapSettings(BaseSettings):
    """Host bootstrap settings.

    Values come from the environment or a ``.env`` file, using the same
    variable names as the shell scripts this tool replaces
    (``EXTRA_PKGS``, ``COMPOSE_REPO_URL``, ``PORTAINER_UI_PORT``, ...).
    """

    model_config = SettingsConfigDict(
        env_file=ENV_FILE_NAME,
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Packages
    extra_packages: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_EXTRA_PACKAGES),
        validation_alias=AliasChoices("extra_pkgs", "extra_packages"),
    )

    # Stack source
    compose_repo_url: str = DEFAULT_COMPOSE_REPO_URL
    compose_clone_dir: Path = Path(DEFAULT_COMPOSE_CLONE_DIR)
    compose_subdir: str = DEFAULT_COMPOSE_SUBDIR
    deploy_mode: Literal["compose", "portainer"] = DEPLOY_MODE_COMPOSE

    # Service account
    service_user: str = DEFAULT_SERVICE_USER
    service_group: str = DEFAULT_SERVICE_GROUP
    smoke_test_image: str = DEFAULT_SMOKE_TEST_IMAGE

    # Portainer
    portainer_version: str = "latest"
    portainer_ui_port: int = Field(default=DEFAULT_PORTAINER_UI_PORT, ge=1, le=65535)
    portainer_agent_port: int = Field(default=DEFAULT_PORTAINER_AGENT_PORT, ge=1, le=65535)
    portainer_url: Optional[str] = None
    portainer_admin_user: str = DEFAULT_PORTAINER_ADMIN_USER
    portainer_admin_password: Optional[SecretStr] = None
    portainer_endpoint_id: int = DEFAULT_PORTAINER_ENDPOINT_ID
    portainer_verify_tls: bool = False
    status_poll_interval: float = Field(default=STATUS_POLL_INTERVAL, gt=0)
    status_timeout: float = Field(default=STATUS_TIMEOUT, gt=0)

    # Runtime
    require_root: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("extra_packages", mode="before")
    @classmethod
    def _split_packages(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            if value.startswith("("):
                # Bash array literal, e.g. "(vim git htop)"
                value = value.strip("()")
            return [pkg for pkg in re.split(r"[\s,]+", value) if pkg]
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("compose_repo_url")
    @classmethod
    def _check_repo_url(cls, value: str) -> str:
        value = value.strip()
        if not value or not _REMOTE_URL_RE.match(value):
            raise ValueError(f"'{value}' is not a valid git remote URL")
        return value

    @model_validator(mode="after")
    def _check_portainer_credentials(self) -> "BootstrapSettings":
        if self.deploy_mode == DEPLOY_MODE_PORTAINER:
            if self.portainer_admin_password is None or not self.portainer_admin_password.get_secret_value():
                raise ValueError("PORTAINER_ADMIN_PASSWORD is required when DEPLOY_MODE is 'portainer'")
        return self

    @property
    def portainer_image(self) -> str:
        """Portainer CE image reference for the configured version."""
        return f"{PORTAINER_IMAGE}:{self.portainer_version}"

    @property
    def resolved_portainer_url(self) -> str:
        """Base URL of the Portainer API."""
        if self.portainer_url:
            return self.portainer_url.rstrip("/")
        return f"https://localhost:{self.portainer_ui_port}"

    @property
    def stacks_dir(self) -> Path:
        """Directory holding the compose stack definitions."""
        return self.compose_clone_dir / self.compose_subdir

    def redacted(self) -> dict:
        """Settings as a JSON-friendly dict with secrets masked."""
        data = self.model_dump(mode="json")
        if self.portainer_admin_password is not None:
            data["portainer_admin_password"] = "********"
        data["portainer_url"] = self.resolved_portainer_url
        return data


def load_settings(env_file: Optional[Path] = None, **overrides: Any) -> BootstrapSettings:
    """Load settings from the environment, an optional ``.env`` file and overrides.

    Args:
        env_file: Path to a dotenv file (defaults to ``./.env``)
        **overrides: Explicit values that take precedence, ``None`` values are ignored

    Returns:
        Validated settings

    Raises:
        ConfigurationError: If the settings are invalid
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        if env_file is not None:
            return BootstrapSettings(_env_file=env_file, **values)
        return BootstrapSettings(**values)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'settings'}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from e
