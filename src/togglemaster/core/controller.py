"""
Toggle controller.

Owns the single on/off state and fans each transition out to the view,
the torch, the encrypted store, the battery check and the home-screen
widgets. Every side effect is best-effort: one failing never stops the
ones after it.
"""

import logging
from typing import Protocol, runtime_checkable

from .errors import HardwareUnavailable, StorageCorrupted
from .state import BatteryLevel, ToggleState
from .widgets import WidgetNotifier

logger = logging.getLogger(__name__)

DEFAULT_LOW_BATTERY_THRESHOLD = 20

LOW_BATTERY_MESSAGE = "Low battery! Consider turning off."
SAVE_FAILED_MESSAGE = "Could not save state"


@runtime_checkable
class ToggleView(Protocol):
    """Presentation of the toggle state."""

    def render(self, state: ToggleState) -> None:
        """Show ``state``, animating toward it where the view supports it."""
        ...


@runtime_checkable
class TorchActuator(Protocol):
    """Protocol for torch hardware."""

    def set_torch(self, on: bool) -> None:
        """Switch the torch. Raises HardwareUnavailable on failure."""
        ...


@runtime_checkable
class BatterySensor(Protocol):
    """Protocol for battery level readers."""

    def read(self) -> BatteryLevel | None:
        """Sample the battery, None if the level is unknown."""
        ...


@runtime_checkable
class NoticeSink(Protocol):
    """Transient user-facing messages."""

    def show(self, message: str, long: bool = False) -> None:
        ...


@runtime_checkable
class StateStorage(Protocol):
    def save(self, state: bool) -> None:
        ...

    def load(self) -> bool:
        ...


class ToggleController:
    """
    Single owner of the toggle state.

    States are OFF and ON; ``toggle`` flips unconditionally. The initial
    state comes from the store through ``load`` and is never written back
    at startup.
    """

    def __init__(
        self,
        store: StateStorage,
        actuator: TorchActuator,
        view: ToggleView,
        notices: NoticeSink,
        battery: BatterySensor,
        widget_notifier: WidgetNotifier,
        low_battery_threshold: int = DEFAULT_LOW_BATTERY_THRESHOLD,
    ):
        """
        Initialize the controller.

        Args:
            store: Encrypted state store.
            actuator: Torch hardware.
            view: Screen showing the switch and status label.
            notices: Sink for transient messages.
            battery: Battery sensor sampled on each toggle.
            widget_notifier: Refreshes home-screen widgets after each toggle.
            low_battery_threshold: Warn below this percent while ON.
        """
        self.store = store
        self.actuator = actuator
        self.view = view
        self.notices = notices
        self.battery = battery
        self.widget_notifier = widget_notifier
        self.low_battery_threshold = low_battery_threshold

        self._state: ToggleState | None = None

    @property
    def state(self) -> ToggleState:
        """Current state. Raises RuntimeError before ``load``."""
        if self._state is None:
            raise RuntimeError("Toggle state not loaded")
        return self._state

    @property
    def is_loaded(self) -> bool:
        return self._state is not None

    @property
    def is_on(self) -> bool:
        return self.state.is_on

    def load(self) -> ToggleState:
        """
        Load the saved state, render it and drive the torch to match.

        Raises:
            StorageCorrupted: The store exists but can not be read.
        """
        self._state = ToggleState.from_bool(self.store.load())
        logger.info(f"Loaded toggle state: {self._state}")

        self._render()
        self._actuate()
        return self._state

    def toggle(self) -> ToggleState:
        """Flip the state and apply every side effect in order."""
        self._state = self.state.flipped()
        logger.info(f"Toggled to {self._state}")

        self._render()
        self._actuate()
        self._persist()
        self._check_battery()
        self._notify_widgets()
        return self._state

    def set_state(self, target: ToggleState) -> bool:
        """
        Toggle only if the current state differs from ``target``.

        Returns:
            True if a toggle happened.
        """
        if self.state is target:
            return False
        self.toggle()
        return True

    def _render(self) -> None:
        self.view.render(self.state)

    def _actuate(self) -> None:
        try:
            self.actuator.set_torch(self.state.is_on)
        except HardwareUnavailable as e:
            logger.warning(f"Flashlight error: {e}")
            self.notices.show(f"Flashlight error: {e}")
        except Exception as e:
            logger.exception(f"Unexpected torch failure: {e}")
            self.notices.show(f"Flashlight error: {e}")

    def _persist(self) -> None:
        try:
            self.store.save(self.state.is_on)
        except (StorageCorrupted, OSError) as e:
            logger.error(f"Failed to save toggle state: {e}")
            self.notices.show(SAVE_FAILED_MESSAGE)

    def _check_battery(self) -> None:
        try:
            level = self.battery.read()
        except Exception as e:
            logger.warning(f"Battery level unavailable: {e}")
            return

        if level is None:
            return
        if self.state.is_on and level.is_low(self.low_battery_threshold):
            logger.info(f"Low battery warning at {level.percent}%")
            self.notices.show(LOW_BATTERY_MESSAGE, long=True)

    def _notify_widgets(self) -> None:
        try:
            self.widget_notifier.notify()
        except Exception as e:
            logger.warning(f"Widget refresh failed: {e}")
