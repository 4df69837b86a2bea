"""
ToggleMaster - Biometric-gated flashlight toggle

Single-screen Kivy app that switches the device torch from a tap or swipe,
keeps the state in encrypted storage and refreshes home-screen widgets.
"""

__version__ = "0.1.0"
__author__ = "ToggleMaster Team"

from .core.controller import ToggleController
from .core.state import BatteryLevel, ToggleState

__all__ = ["ToggleController", "ToggleState", "BatteryLevel", "__version__"]
