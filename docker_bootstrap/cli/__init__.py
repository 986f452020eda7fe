"""Command line interface for Docker Bootstrap."""
