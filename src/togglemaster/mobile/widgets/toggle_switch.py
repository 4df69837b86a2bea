"""
Toggle switch widget for ToggleMaster.

Rounded track with a sliding knob: green with the knob right when ON, gray
with the knob left when OFF.
"""

import logging
from typing import Callable

from kivy.animation import Animation
from kivy.graphics import Color, Ellipse, RoundedRectangle
from kivy.properties import NumericProperty
from kivy.uix.button import Button

from ...core.state import ToggleState

logger = logging.getLogger(__name__)


class ToggleSwitch(Button):
    """
    Tappable on/off switch.

    Every press calls ``on_tap``; the switch itself only changes when
    ``set_state`` is called, so the controller stays the single owner of
    the state.
    """

    knob_offset = NumericProperty(0)

    def __init__(
        self,
        on_tap: Callable[[], None] | None = None,
        knob_travel: float = 60,
        animation_duration: float = 0.25,
        on_color: tuple = (0.18, 0.72, 0.29, 1.0),
        off_color: tuple = (0.45, 0.45, 0.45, 1.0),
        **kwargs,
    ):
        kwargs.setdefault("size_hint", (None, None))
        kwargs.setdefault("size", (140, 70))
        kwargs.setdefault("text", "")
        super().__init__(**kwargs)

        self._on_tap = on_tap
        self._state = ToggleState.OFF
        self._animation: Animation | None = None

        self.knob_travel = knob_travel
        self.animation_duration = animation_duration
        self._on_color = tuple(on_color)
        self._off_color = tuple(off_color)

        self.background_color = (0, 0, 0, 0)
        self.background_normal = ""
        self.background_down = ""

        self._draw_background()
        self.bind(pos=self._update_background, size=self._update_background)
        self.bind(knob_offset=self._update_background)
        self.bind(on_press=self._on_press)

    def _draw_background(self):
        """Draw track and knob."""
        self.canvas.before.clear()
        with self.canvas.before:
            Color(*(self._on_color if self._state.is_on else self._off_color))
            RoundedRectangle(pos=self.pos, size=self.size, radius=[self.height / 2])

            Color(1, 1, 1, 1)
            diameter = self.height - 10
            Ellipse(pos=(self.x + 5 + self.knob_offset, self.y + 5), size=(diameter, diameter))

    def _update_background(self, *args):
        self._draw_background()

    def _on_press(self, instance):
        if self._on_tap:
            self._on_tap()

    def set_state(self, state: ToggleState, animate: bool = True) -> None:
        """
        Show ``state``: slide the knob right for ON, left for OFF.

        The track color switches immediately; only the knob is animated.
        """
        self._state = state
        target = self.knob_travel if state.is_on else 0

        if self._animation:
            self._animation.cancel(self)
            self._animation = None

        if animate:
            self._animation = Animation(
                knob_offset=target, duration=self.animation_duration, t="out_quad"
            )
            self._animation.start(self)
        else:
            self.knob_offset = target

        self._draw_background()

    @property
    def state_shown(self) -> ToggleState:
        return self._state
