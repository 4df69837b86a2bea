"""
Swipe classification for the gesture region.

Swipes only ever move the toggle toward their direction: right turns on,
left turns off. A swipe toward the current state is ignored.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING

from .state import ToggleState

if TYPE_CHECKING:
    from .controller import ToggleController

logger = logging.getLogger(__name__)

DEFAULT_SWIPE_THRESHOLD = 50


class Swipe(Enum):
    """Horizontal swipe classification."""

    NONE = "none"
    LEFT = "left"
    RIGHT = "right"


class GestureInput:
    """Translate horizontal pointer displacement into toggle intents."""

    def __init__(self, threshold: float = DEFAULT_SWIPE_THRESHOLD):
        self.threshold = threshold

    def classify(self, start_x: float, end_x: float) -> Swipe:
        """Classify a gesture from its start and end x coordinates."""
        if end_x - start_x > self.threshold:
            return Swipe.RIGHT
        if start_x - end_x > self.threshold:
            return Swipe.LEFT
        return Swipe.NONE

    def handle(self, start_x: float, end_x: float, controller: "ToggleController") -> Swipe:
        """
        Classify a gesture and apply it to the controller.

        Returns:
            The classified swipe, whether or not it changed the state.
        """
        swipe = self.classify(start_x, end_x)
        if swipe is Swipe.RIGHT:
            controller.set_state(ToggleState.ON)
        elif swipe is Swipe.LEFT:
            controller.set_state(ToggleState.OFF)
        logger.debug(f"Gesture {start_x:.0f}->{end_x:.0f} classified as {swipe.value}")
        return swipe
