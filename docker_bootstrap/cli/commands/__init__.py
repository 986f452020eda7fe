"""CLI commands for Docker Bootstrap."""
