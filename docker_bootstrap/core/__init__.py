"""Core functionality for Docker Bootstrap."""
