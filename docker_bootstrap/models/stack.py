"""Compose stack models."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ComposeStack(BaseModel):
    """A compose file discovered in the stack repository."""
    name: str
    path: Path

    def content(self) -> str:
        """Read the compose file as text."""
        return self.path.read_text(encoding="utf-8")


class PortainerStack(BaseModel):
    """Stack record as returned by the Portainer API."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int = Field(alias="Id")
    name: str = Field(alias="Name")
    endpoint_id: Optional[int] = Field(default=None, alias="EndpointId")
    type: Optional[int] = Field(default=None, alias="Type")
