"""
Unit tests for the authenticators and the biometric callback mapping.
"""

import keyring
import pytest
from keyring.backends import fail

from togglemaster.core.auth import AuthResult, PromptInfo
from togglemaster.mobile import biometric
from togglemaster.mobile.biometric import (
    AndroidBiometricAuthenticator,
    BypassAuthenticator,
    KeyringAuthenticator,
    PromptOutcome,
    get_authenticator,
)


class ImmediateClock:
    """Runs scheduled callbacks straight away."""

    def schedule_once(self, callback, timeout=0):
        callback(0)


@pytest.fixture(autouse=True)
def immediate_clock(monkeypatch):
    monkeypatch.setattr(biometric, "Clock", ImmediateClock())


def collect(authenticator):
    results = []
    authenticator.authenticate(PromptInfo(), results.append)
    return results


class TestKeyringAuthenticator:
    def test_succeeds_with_usable_keyring(self, memory_keyring):
        assert collect(KeyringAuthenticator()) == [AuthResult.success()]

    def test_fails_without_keyring(self):
        previous = keyring.get_keyring()
        keyring.set_keyring(fail.Keyring())
        try:
            results = collect(KeyringAuthenticator())
        finally:
            keyring.set_keyring(previous)

        assert len(results) == 1
        assert not results[0].succeeded


class TestPromptOutcome:
    """Java listener events map to a single AuthResult."""

    def test_succeeded(self):
        results = []
        PromptOutcome(results.append).succeeded()

        assert results == [AuthResult.success()]

    def test_negative_button(self):
        results = []
        PromptOutcome(results.append).error(biometric.ERROR_NEGATIVE_BUTTON, "Cancelled")

        assert results == [AuthResult.failure("cancelled")]

    def test_hardware_error_keeps_message(self):
        results = []
        PromptOutcome(results.append).error(1, "Hardware unavailable")

        assert results == [AuthResult.failure("Hardware unavailable")]

    def test_unrecognized_biometric(self):
        results = []
        PromptOutcome(results.append).failed()

        assert len(results) == 1
        assert not results[0].succeeded


class TestFactory:
    def test_desktop(self, test_config):
        assert isinstance(get_authenticator(test_config["auth"], "desktop"), KeyringAuthenticator)

    def test_android(self, test_config):
        assert isinstance(
            get_authenticator(test_config["auth"], "android"), AndroidBiometricAuthenticator
        )

    def test_disabled_gate_bypasses(self):
        authenticator = get_authenticator({"enabled": False}, "android")

        assert isinstance(authenticator, BypassAuthenticator)
        assert collect(authenticator) == [AuthResult.success()]


@pytest.mark.parametrize(
    "code,expected",
    [
        (biometric.ERROR_USER_CANCELED, "cancelled"),
        (biometric.ERROR_NEGATIVE_BUTTON, "cancelled"),
        (biometric.ERROR_LOCKOUT, "too many attempts"),
        (biometric.ERROR_NO_BIOMETRICS, "no biometrics enrolled"),
        (1, "Hardware unavailable"),
    ],
)
def test_error_descriptions(code, expected):
    assert biometric._describe_error(code, "Hardware unavailable") == expected
