"""catalyst: scaffold modular Swift packages and keep workspaces in sync."""

__version__ = "0.4.0"
