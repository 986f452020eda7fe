"""Models for Docker Bootstrap."""

from .config import BootstrapSettings, load_settings
from .report import BootstrapReport, DeployedStack
from .stack import ComposeStack, PortainerStack

__all__ = [
    'BootstrapSettings',
    'load_settings',
    'BootstrapReport',
    'DeployedStack',
    'ComposeStack',
    'PortainerStack',
]
