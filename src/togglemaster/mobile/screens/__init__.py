"""Screen modules for ToggleMaster mobile UI."""

from .main_screen import MainScreen

__all__ = ["MainScreen"]
