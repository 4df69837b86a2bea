"""
Toggle state data structures.
"""

from dataclasses import dataclass
from enum import Enum


class ToggleState(Enum):
    """On/off state of the flashlight toggle."""

    OFF = "OFF"
    ON = "ON"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_bool(cls, on: bool) -> "ToggleState":
        """Map a stored boolean to a state."""
        return cls.ON if on else cls.OFF

    @property
    def is_on(self) -> bool:
        """Check if state is ON."""
        return self is ToggleState.ON

    @property
    def label(self) -> str:
        """Status label text shown on the main screen."""
        return self.value

    def flipped(self) -> "ToggleState":
        """Return the opposite state."""
        return ToggleState.OFF if self.is_on else ToggleState.ON


@dataclass(frozen=True)
class BatteryLevel:
    """
    Battery snapshot sampled at toggle time.

    Attributes:
        percent: Remaining charge from 0 to 100
    """

    percent: int

    def __post_init__(self):
        if not 0 <= self.percent <= 100:
            raise ValueError(f"Battery percent out of range: {self.percent}")

    def is_low(self, threshold: int) -> bool:
        """Check if level is strictly below threshold."""
        return self.percent < threshold
