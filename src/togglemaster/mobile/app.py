"""
ToggleMaster Kivy Application - Biometric-gated flashlight toggle.

Main entry point for the Kivy-based mobile/desktop application.
"""

import logging
import os
import platform as sys_platform

# Prevent Kivy from consuming command-line arguments
os.environ["KIVY_NO_ARGS"] = "1"

from kivy.app import App
from kivy.clock import Clock
from kivy.logger import Logger

from ..core.auth import AuthGate, PromptInfo
from ..core.config import Config
from ..core.controller import DEFAULT_LOW_BATTERY_THRESHOLD, ToggleController
from ..core.errors import AuthenticationFailed, StorageCorrupted
from ..core.gesture import DEFAULT_SWIPE_THRESHOLD, GestureInput
from ..core.store import StateStore, default_data_dir
from ..core.widgets import WidgetNotifier
from .battery import get_battery
from .biometric import get_authenticator
from .screens.main_screen import MainScreen
from .torch import get_torch
from .widget_host import get_widget_host

logger = logging.getLogger(__name__)

STORAGE_CORRUPTED_MESSAGE = "Stored state is unreadable"


def detect_platform() -> str:
    """Detect current platform type."""
    if sys_platform.system() == "Linux":
        # python-for-android ships the `android` module
        try:
            import android  # noqa: F401
            return "android"
        except ImportError:
            return "desktop"
    return "desktop"


class ToggleMasterApp(App):
    """
    Main ToggleMaster Kivy application.

    Coordinates:
    - Biometric gate (via AuthGate)
    - Toggle state and side effects (via ToggleController)
    - Swipe handling (via GestureInput)
    - UI updates (via MainScreen)
    """

    def __init__(self, app_config: Config | None = None, **kwargs):
        """
        Initialize the ToggleMaster app.

        Args:
            app_config: Optional Config object. If not provided, loads from default location.
        """
        super().__init__(**kwargs)

        # Use app_config to avoid conflict with Kivy's config
        if app_config is None:
            app_config = Config()
        self.app_config = app_config

        self.platform_type = detect_platform()

        # Components (initialized in build())
        self.main_screen = None
        self.controller = None
        self.gesture_input = None
        self.auth_gate = None

        Logger.info(f"ToggleMaster: Initialized on {sys_platform.system()} ({self.platform_type})")

    def build(self):
        """Build the application UI and wire components."""
        if self.platform_type == "desktop":
            from kivy.core.window import Window

            Window.size = (480, 800)
        self.title = self.app_config.get("app.name", "ToggleMaster")

        self.main_screen = MainScreen(
            on_tap=self._on_tap,
            on_swipe=self._on_swipe,
            ui_config=self.app_config["ui"],
        )

        data_dir = self.user_data_dir if self.platform_type == "android" else default_data_dir()
        store = StateStore.from_config(self.app_config["storage"], data_dir)
        Logger.info(f"ToggleMaster: Encrypted store at {store.path}")

        self.controller = ToggleController(
            store=store,
            actuator=get_torch(self.platform_type),
            view=self.main_screen,
            notices=self.main_screen,
            battery=get_battery(self.platform_type),
            widget_notifier=WidgetNotifier(
                get_widget_host(self.app_config["widget"], self.platform_type)
            ),
            low_battery_threshold=self.app_config.get(
                "battery.threshold", DEFAULT_LOW_BATTERY_THRESHOLD
            ),
        )
        self.gesture_input = GestureInput(
            self.app_config.get("gesture.swipe_threshold", DEFAULT_SWIPE_THRESHOLD)
        )

        auth_config = self.app_config["auth"]
        self.auth_gate = AuthGate(
            authenticator=get_authenticator(auth_config, self.platform_type),
            prompt=PromptInfo.from_config(auth_config),
            notices=self.main_screen,
            on_success=self._on_authenticated,
            on_failure=self._on_auth_failed,
        )

        return self.main_screen

    def on_start(self):
        """Called when the application starts."""
        Logger.info("ToggleMaster: Application starting")
        self.auth_gate.start()

    def on_pause(self):
        # Keep the torch and session alive while backgrounded
        return True

    def on_stop(self):
        Logger.info("ToggleMaster: Application stopped")

    def _on_authenticated(self):
        """Load saved state once the user is verified."""
        try:
            self.controller.load()
        except StorageCorrupted as e:
            Logger.error(f"ToggleMaster: {e}")
            self.main_screen.show(STORAGE_CORRUPTED_MESSAGE, long=True)
            self._end_session()

    def _on_auth_failed(self, error: AuthenticationFailed):
        Logger.warning(f"ToggleMaster: {error}")
        self._end_session()

    def _end_session(self):
        """Lock input and close once the last notice has been shown."""
        self.main_screen.toggle_switch.disabled = True
        delay = self.main_screen.notice.long_duration
        Logger.info(f"ToggleMaster: Closing in {delay}s")
        Clock.schedule_once(lambda dt: self.stop(), delay)

    def _on_tap(self):
        if self.controller.is_loaded:
            self.controller.toggle()

    def _on_swipe(self, start_x: float, end_x: float):
        if self.controller.is_loaded:
            self.gesture_input.handle(start_x, end_x, self.controller)


def run_mobile_app(config: Config | None = None):
    """
    Run the ToggleMaster mobile/desktop Kivy application.

    Args:
        config: Optional Config object.
    """
    app = ToggleMasterApp(app_config=config)
    app.run()
