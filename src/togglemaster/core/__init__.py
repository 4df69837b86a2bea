"""Core components for ToggleMaster."""

from .auth import AuthGate, AuthResult, PromptInfo
from .config import Config
from .controller import ToggleController
from .errors import AuthenticationFailed, HardwareUnavailable, StorageCorrupted, ToggleMasterError
from .gesture import GestureInput, Swipe
from .state import BatteryLevel, ToggleState
from .store import StateStore
from .widgets import WidgetNotifier, WidgetUpdate

__all__ = [
    "AuthGate",
    "AuthResult",
    "PromptInfo",
    "Config",
    "ToggleController",
    "AuthenticationFailed",
    "HardwareUnavailable",
    "StorageCorrupted",
    "ToggleMasterError",
    "GestureInput",
    "Swipe",
    "BatteryLevel",
    "ToggleState",
    "StateStore",
    "WidgetNotifier",
    "WidgetUpdate",
]
