"""
Unit tests for ToggleController.
"""

import pytest

from togglemaster.core.controller import LOW_BATTERY_MESSAGE, SAVE_FAILED_MESSAGE
from togglemaster.core.errors import StorageCorrupted
from togglemaster.core.state import ToggleState
from togglemaster.core.store import StateStore


class TestLoad:
    """Tests for startup state loading."""

    def test_load_defaults_to_off(self, controller, view, torch):
        assert controller.load() is ToggleState.OFF
        assert view.label == "OFF"
        assert torch.calls == [False]

    def test_load_restores_saved_state(self, controller, store, view, torch):
        store.save(True)

        assert controller.load() is ToggleState.ON
        assert view.label == "ON"
        assert torch.calls == [True]

    def test_load_has_no_write_battery_or_widget_effects(
        self, controller, store, battery, widget_host
    ):
        controller.load()

        assert not store.path.exists()
        assert battery.reads == 0
        assert widget_host.sent == []

    def test_load_reapplies_torch_even_when_unchanged(self, controller, torch):
        controller.load()
        controller.load()

        assert torch.calls == [False, False]

    def test_load_propagates_storage_corruption(self, controller, store, view):
        store.path.write_text("not json", encoding="utf-8")

        with pytest.raises(StorageCorrupted):
            controller.load()
        assert view.renders == []
        assert not controller.is_loaded

    def test_toggle_before_load_raises(self, controller):
        with pytest.raises(RuntimeError):
            controller.toggle()


class TestToggle:
    """Tests for toggle transitions and side effects."""

    def test_label_tracks_state_over_sequence(self, controller, view):
        controller.load()
        for _ in range(7):
            state = controller.toggle()
            assert view.label == ("ON" if state.is_on else "OFF")
        assert controller.state is ToggleState.ON

    def test_toggle_drives_torch_and_persists(self, controller, store, torch):
        controller.load()
        controller.toggle()

        assert torch.calls == [False, True]
        assert store.load() is True

    def test_hardware_failure_still_persists(self, controller, store, torch, notices, widget_host):
        controller.load()
        torch.fail = True

        assert controller.toggle() is ToggleState.ON
        assert store.load() is True
        assert "Flashlight error: Torch busy" in notices.texts
        assert len(widget_host.sent) == 1

    def test_unexpected_torch_error_still_persists(
        self, controller, store, torch, notices, widget_host
    ):
        controller.load()

        def broken(on):
            raise AttributeError("'NoneType' object has no attribute 'getSystemService'")

        torch.set_torch = broken

        assert controller.toggle() is ToggleState.ON
        assert store.load() is True
        assert any(text.startswith("Flashlight error:") for text in notices.texts)
        assert len(widget_host.sent) == 1

    def test_save_failure_shows_notice_and_continues(self, controller, store, notices, widget_host):
        controller.load()
        # Data file whose keyset is gone
        store.path.write_text('{"version": 1, "entries": {}}', encoding="utf-8")

        controller.toggle()

        assert SAVE_FAILED_MESSAGE in notices.texts
        assert len(widget_host.sent) == 1
        assert controller.is_on

    def test_widgets_notified_on_every_toggle(self, controller, widget_host):
        controller.load()
        controller.toggle()
        controller.toggle()

        assert [update.widget_ids for update in widget_host.sent] == [(7, 9), (7, 9)]

    def test_widget_failure_is_swallowed(self, controller, widget_host):
        def broken(update):
            raise RuntimeError("service gone")

        widget_host.broadcast = broken
        controller.load()

        assert controller.toggle() is ToggleState.ON

    def test_fresh_store_instance_sees_toggle(self, controller, test_config, tmp_path):
        controller.load()
        controller.toggle()

        reopened = StateStore.from_config(test_config["storage"], tmp_path)
        assert reopened.load() is True


class TestBatteryWarning:
    """Low battery warning fires only below threshold while ON."""

    @pytest.mark.parametrize(
        "percent,expected",
        [(5, True), (19, True), (20, False), (80, False)],
    )
    def test_warning_when_turning_on(self, controller, battery, notices, percent, expected):
        battery.percent = percent
        controller.load()
        controller.toggle()

        assert ((LOW_BATTERY_MESSAGE, True) in notices.messages) is expected

    def test_no_warning_when_turning_off(self, controller, store, battery, notices):
        store.save(True)
        battery.percent = 3
        controller.load()

        assert controller.toggle() is ToggleState.OFF
        assert LOW_BATTERY_MESSAGE not in notices.texts

    def test_unknown_level_never_warns(self, controller, battery, notices):
        battery.percent = None
        controller.load()
        controller.toggle()

        assert LOW_BATTERY_MESSAGE not in notices.texts

    def test_battery_error_does_not_block_widgets(self, controller, battery, widget_host):
        battery.percent = OSError("no sensor")
        controller.load()
        controller.toggle()

        assert len(widget_host.sent) == 1


class TestSetState:
    def test_set_state_toggles_only_on_change(self, controller, torch):
        controller.load()

        assert controller.set_state(ToggleState.OFF) is False
        assert controller.set_state(ToggleState.ON) is True
        assert controller.set_state(ToggleState.ON) is False
        assert torch.calls == [False, True]
