"""
Pytest fixtures for ToggleMaster tests.

Provides common test fixtures including:
- Test configuration
- An in-memory keyring backend
- Recording fakes for the view, torch, notices, battery and widget host
- A controller wired to a real encrypted store
"""

import keyring
import pytest
from keyring.backend import KeyringBackend
from keyring.errors import PasswordDeleteError

from togglemaster.core.controller import ToggleController
from togglemaster.core.errors import HardwareUnavailable
from togglemaster.core.state import BatteryLevel
from togglemaster.core.store import StateStore
from togglemaster.core.widgets import WidgetNotifier


class MemoryKeyring(KeyringBackend):
    """Keyring backend that keeps secrets in a dict."""

    priority = 1

    def __init__(self):
        super().__init__()
        self.passwords = {}

    def get_password(self, service, username):
        return self.passwords.get((service, username))

    def set_password(self, service, username, password):
        self.passwords[(service, username)] = password

    def delete_password(self, service, username):
        try:
            del self.passwords[(service, username)]
        except KeyError:
            raise PasswordDeleteError("Password not found")


class FakeView:
    def __init__(self):
        self.renders = []

    def render(self, state):
        self.renders.append(state)

    @property
    def label(self):
        return self.renders[-1].label if self.renders else None


class FakeTorch:
    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []

    def set_torch(self, on):
        self.calls.append(on)
        if self.fail:
            raise HardwareUnavailable("Torch busy")


class FakeNotices:
    def __init__(self):
        self.messages = []

    def show(self, message, long=False):
        self.messages.append((message, long))

    @property
    def texts(self):
        return [message for message, _ in self.messages]


class FakeBattery:
    def __init__(self, percent=80):
        self.percent = percent
        self.reads = 0

    def read(self):
        self.reads += 1
        if isinstance(self.percent, Exception):
            raise self.percent
        return None if self.percent is None else BatteryLevel(self.percent)


class FakeWidgetHost:
    def __init__(self, ids=(7, 9)):
        self.ids = list(ids)
        self.sent = []

    def active_widget_ids(self):
        return self.ids

    def broadcast(self, update):
        self.sent.append(update)


@pytest.fixture
def test_config():
    """Test configuration dictionary."""
    return {
        "auth": {
            "enabled": True,
            "title": "ToggleMaster Security",
            "subtitle": "Authenticate to access",
            "negative_button": "Cancel",
        },
        "storage": {
            "directory": "",
            "filename": "TogglePrefs.json",
            "keyring_service": "togglemaster-test",
            "key_alias": "test-keyset",
        },
        "battery": {"threshold": 20},
        "gesture": {"swipe_threshold": 50},
        "widget": {"provider_class": "com.example.togglemaster.ToggleWidgetProvider"},
    }


@pytest.fixture
def memory_keyring():
    """Install an in-memory keyring for the duration of a test."""
    previous = keyring.get_keyring()
    backend = MemoryKeyring()
    keyring.set_keyring(backend)
    yield backend
    keyring.set_keyring(previous)


@pytest.fixture
def store(test_config, tmp_path, memory_keyring):
    """Encrypted store in a temporary directory."""
    return StateStore.from_config(test_config["storage"], tmp_path)


@pytest.fixture
def view():
    return FakeView()


@pytest.fixture
def torch():
    return FakeTorch()


@pytest.fixture
def notices():
    return FakeNotices()


@pytest.fixture
def battery():
    return FakeBattery()


@pytest.fixture
def widget_host():
    return FakeWidgetHost()


@pytest.fixture
def controller(store, torch, view, notices, battery, widget_host):
    """Controller wired to a real encrypted store and recording fakes."""
    return ToggleController(
        store=store,
        actuator=torch,
        view=view,
        notices=notices,
        battery=battery,
        widget_notifier=WidgetNotifier(widget_host),
        low_battery_threshold=20,
    )
