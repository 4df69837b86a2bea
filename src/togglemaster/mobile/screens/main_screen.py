"""
Main screen for ToggleMaster mobile app.

Only screen of the app: toggle switch, status label, swipe region and
transient notices.
"""

import logging
from typing import Callable

from kivy.uix.boxlayout import BoxLayout
from kivy.uix.floatlayout import FloatLayout
from kivy.uix.label import Label

from ...core.state import ToggleState
from ..widgets.gesture_area import GestureArea
from ..widgets.notice import NoticeLabel
from ..widgets.toggle_switch import ToggleSwitch

logger = logging.getLogger(__name__)

LOCKED_TEXT = "LOCKED"


class MainScreen(FloatLayout):
    """
    Toggle screen.

    Layout:
    ┌───────────────────────────┐
    │            ON             │
    │        ( ====● )          │
    │                           │
    │  ┌─────────────────────┐  │
    │  │   swipe region      │  │
    │  └─────────────────────┘  │
    │     [ transient notice ]  │
    └───────────────────────────┘

    Starts locked with the switch disabled; nothing about the saved state
    is shown until the first ``render``.
    """

    def __init__(
        self,
        on_tap: Callable[[], None],
        on_swipe: Callable[[float, float], None],
        ui_config: dict | None = None,
        **kwargs,
    ):
        """
        Initialize the main screen.

        Args:
            on_tap: Called when the toggle switch is pressed.
            on_swipe: Called with (start_x, end_x) for each gesture.
            ui_config: UI section of the app config.
        """
        super().__init__(**kwargs)

        self.ui_config = ui_config or {}
        self._on_tap = on_tap
        self._on_swipe = on_swipe

        self._create_ui()

    def _create_ui(self):
        """Create all UI components."""
        column = BoxLayout(
            orientation="vertical",
            size_hint=(0.9, 0.8),
            pos_hint={"center_x": 0.5, "center_y": 0.55},
            spacing=30,
        )

        self.status_label = Label(
            text=LOCKED_TEXT,
            font_size="48sp",
            bold=True,
            size_hint=(1, 0.3),
        )
        column.add_widget(self.status_label)

        switch_row = BoxLayout(size_hint=(1, 0.2))
        switch_row.add_widget(BoxLayout())
        notice_config = self.ui_config.get("notice", {})
        self.toggle_switch = ToggleSwitch(
            on_tap=self._on_tap,
            knob_travel=self.ui_config.get("knob_travel", 60),
            animation_duration=self.ui_config.get("animation_duration", 0.25),
            on_color=self.ui_config.get("on_color", (0.18, 0.72, 0.29, 1.0)),
            off_color=self.ui_config.get("off_color", (0.45, 0.45, 0.45, 1.0)),
        )
        self.toggle_switch.disabled = True
        switch_row.add_widget(self.toggle_switch)
        switch_row.add_widget(BoxLayout())
        column.add_widget(switch_row)

        self.gesture_area = GestureArea(on_swipe=self._on_swipe, size_hint=(1, 0.5))
        column.add_widget(self.gesture_area)

        self.add_widget(column)

        self.notice = NoticeLabel(
            short_duration=notice_config.get("short", 2.0),
            long_duration=notice_config.get("long", 3.5),
            pos_hint={"center_x": 0.5, "y": 0.04},
        )
        self.add_widget(self.notice)

    def render(self, state: ToggleState) -> None:
        """Show ``state`` on the switch and status label, unlocking the switch."""
        self.toggle_switch.disabled = False
        self.toggle_switch.set_state(state)
        self.status_label.text = state.label

    def show(self, message: str, long: bool = False) -> None:
        """Show a transient notice."""
        self.notice.show(message, long=long)
