"""
Transient notice ("toast") for ToggleMaster.

Shows one message at a time near the bottom of the screen and hides it
after a short or long duration.
"""

import logging

from kivy.clock import Clock
from kivy.graphics import Color, RoundedRectangle
from kivy.uix.label import Label

logger = logging.getLogger(__name__)


class NoticeLabel(Label):
    """
    Auto-dismissing message label.

    A new message replaces the one on screen and restarts the timer.
    """

    def __init__(self, short_duration: float = 2.0, long_duration: float = 3.5, **kwargs):
        kwargs.setdefault("font_size", "15sp")
        kwargs.setdefault("size_hint", (0.9, None))
        kwargs.setdefault("height", 56)
        kwargs.setdefault("halign", "center")
        kwargs.setdefault("valign", "middle")
        super().__init__(**kwargs)

        self.short_duration = short_duration
        self.long_duration = long_duration
        self._dismiss_event = None

        self.opacity = 0
        self.bind(size=self.setter("text_size"))

        with self.canvas.before:
            self._bg_color = Color(0, 0, 0, 0)
            self._bg_rect = RoundedRectangle(pos=self.pos, size=self.size, radius=[12])
        self.bind(pos=self._update_background, size=self._update_background)

    def _update_background(self, *args):
        self._bg_rect.pos = self.pos
        self._bg_rect.size = self.size

    def show(self, message: str, long: bool = False) -> None:
        """Display ``message`` until the short or long timeout elapses."""
        logger.info(f"Notice: {message}")
        self.text = message
        self.opacity = 1
        self._bg_color.rgba = (0.1, 0.1, 0.1, 0.85)

        if self._dismiss_event is not None:
            self._dismiss_event.cancel()
        duration = self.long_duration if long else self.short_duration
        self._dismiss_event = Clock.schedule_once(self._dismiss, duration)

    def _dismiss(self, dt):
        self._dismiss_event = None
        self.opacity = 0
        self._bg_color.rgba = (0, 0, 0, 0)
        self.text = ""
