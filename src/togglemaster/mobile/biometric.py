"""
Platform authenticators for the biometric gate.

- Android: framework BiometricPrompt (API 28+) via pyjnius and the
  org.togglemaster.BiometricCallback Java class in android/src
- Desktop: OS keyring presence (the same store that holds the encryption keyset)

Results are always delivered on the Kivy main thread.
"""

import logging
from typing import Callable

import keyring
from keyring.backends import fail
from kivy.clock import Clock

from ..core.auth import Authenticator, AuthResult, PromptInfo

logger = logging.getLogger(__name__)

# BiometricPrompt error codes
ERROR_LOCKOUT = 7
ERROR_USER_CANCELED = 10
ERROR_NO_BIOMETRICS = 11
ERROR_NEGATIVE_BUTTON = 13


def _deliver(callback: Callable[[AuthResult], None], result: AuthResult) -> None:
    """Hand a result to the main thread."""
    Clock.schedule_once(lambda dt: callback(result), 0)


def _describe_error(error_code: int, message: str) -> str:
    if error_code in (ERROR_USER_CANCELED, ERROR_NEGATIVE_BUTTON):
        return "cancelled"
    if error_code == ERROR_LOCKOUT:
        return "too many attempts"
    if error_code == ERROR_NO_BIOMETRICS:
        return "no biometrics enrolled"
    return message or f"error {error_code}"


class PromptOutcome:
    """Turns BiometricPrompt callbacks into an AuthResult on the main thread."""

    def __init__(self, callback: Callable[[AuthResult], None]):
        self.callback = callback

    def succeeded(self) -> None:
        _deliver(self.callback, AuthResult.success())

    def error(self, error_code: int, message: str) -> None:
        _deliver(self.callback, AuthResult.failure(_describe_error(error_code, message)))

    def failed(self) -> None:
        _deliver(self.callback, AuthResult.failure("biometric not recognized"))


class AndroidBiometricAuthenticator:
    """
    BiometricPrompt challenge.

    BiometricPrompt.AuthenticationCallback is an abstract class, so the
    prompt talks to the BiometricCallback Java class, which forwards to a
    Listener interface implemented here. Any failed match ends the
    challenge; the gate treats failure as terminal.
    """

    def __init__(self):
        # Java holds only weak references to Python callback objects
        self._listener = None
        self._java_callback = None
        self._cancel_signal = None

    def authenticate(self, prompt: PromptInfo, callback: Callable[[AuthResult], None]) -> None:
        from android.runnable import run_on_ui_thread
        from jnius import PythonJavaClass, autoclass, java_method

        PythonActivity = autoclass("org.kivy.android.PythonActivity")
        PromptBuilder = autoclass("android.hardware.biometrics.BiometricPrompt$Builder")
        CancellationSignal = autoclass("android.os.CancellationSignal")
        BiometricCallback = autoclass("org.togglemaster.BiometricCallback")

        outcome = PromptOutcome(callback)

        class Listener(PythonJavaClass):
            __javainterfaces__ = ["org/togglemaster/BiometricCallback$Listener"]
            __javacontext__ = "app"

            @java_method("()V")
            def onSucceeded(self):
                outcome.succeeded()

            @java_method("(ILjava/lang/String;)V")
            def onError(self, error_code, message):
                outcome.error(error_code, message or "")

            @java_method("()V")
            def onFailed(self):
                outcome.failed()

        self._listener = Listener()
        self._java_callback = BiometricCallback(self._listener)

        @run_on_ui_thread
        def show():
            activity = PythonActivity.mActivity
            executor = activity.getMainExecutor()
            biometric_prompt = (
                PromptBuilder(activity)
                .setTitle(prompt.title)
                .setSubtitle(prompt.subtitle)
                .setNegativeButton(prompt.negative_button, executor, self._java_callback)
                .build()
            )
            self._cancel_signal = CancellationSignal()
            biometric_prompt.authenticate(self._cancel_signal, executor, self._java_callback)

        show()


class KeyringAuthenticator:
    """
    Desktop fallback without a biometric prompt.

    Succeeds when a usable OS keyring backend is present; unlocking that
    keyring is the desktop's own user verification.
    """

    def authenticate(self, prompt: PromptInfo, callback: Callable[[AuthResult], None]) -> None:
        backend = keyring.get_keyring()
        if isinstance(backend, fail.Keyring):
            logger.warning("No usable keyring backend")
            _deliver(callback, AuthResult.failure("no secure keyring available"))
            return

        logger.info(f"Keyring-only authentication via {type(backend).__name__}")
        _deliver(callback, AuthResult.success())


class BypassAuthenticator:
    """Always succeeds. Development builds only."""

    def authenticate(self, prompt: PromptInfo, callback: Callable[[AuthResult], None]) -> None:
        logger.warning("Biometric gate disabled by configuration")
        _deliver(callback, AuthResult.success())


def get_authenticator(auth_config: dict, platform_type: str = "desktop") -> Authenticator:
    """
    Factory function to get the authenticator for the current platform.

    Args:
        auth_config: Auth section of the app config.
        platform_type: Platform type ("desktop", "android").
    """
    if not auth_config.get("enabled", True):
        return BypassAuthenticator()
    if platform_type == "android":
        return AndroidBiometricAuthenticator()
    return KeyringAuthenticator()
