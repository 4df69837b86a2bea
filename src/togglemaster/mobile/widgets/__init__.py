"""Widget modules for ToggleMaster mobile UI."""

from .gesture_area import GestureArea
from .notice import NoticeLabel
from .toggle_switch import ToggleSwitch

__all__ = ["GestureArea", "NoticeLabel", "ToggleSwitch"]
