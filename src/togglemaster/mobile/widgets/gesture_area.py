"""
Gesture-sensitive region for ToggleMaster.

Forwards the horizontal start and end of each touch to a handler; swipe
classification lives in core.gesture.
"""

import logging
from typing import Callable

from kivy.graphics import Color, RoundedRectangle
from kivy.uix.label import Label

logger = logging.getLogger(__name__)


class GestureArea(Label):
    """Swipe pad with a hint label."""

    def __init__(self, on_swipe: Callable[[float, float], None] | None = None, **kwargs):
        """
        Args:
            on_swipe: Called with (start_x, end_x) when a touch that started
                inside the area is released.
        """
        kwargs.setdefault("text", "Swipe right for ON, left for OFF")
        kwargs.setdefault("font_size", "16sp")
        kwargs.setdefault("color", (0.8, 0.8, 0.8, 1))
        super().__init__(**kwargs)

        self._on_swipe = on_swipe

        with self.canvas.before:
            Color(1, 1, 1, 0.08)
            self._bg_rect = RoundedRectangle(pos=self.pos, size=self.size, radius=[16])
        self.bind(pos=self._update_background, size=self._update_background)

    def _update_background(self, *args):
        self._bg_rect.pos = self.pos
        self._bg_rect.size = self.size

    def on_touch_down(self, touch):
        if not self.collide_point(*touch.pos):
            return super().on_touch_down(touch)
        touch.grab(self)
        touch.ud["gesture_start_x"] = touch.x
        return True

    def on_touch_up(self, touch):
        if touch.grab_current is not self:
            return super().on_touch_up(touch)
        touch.ungrab(self)

        start_x = touch.ud.get("gesture_start_x", touch.ox)
        if self._on_swipe:
            self._on_swipe(start_x, touch.x)
        return True
