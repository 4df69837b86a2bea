"""
Biometric gate in front of the toggle screen.

The challenge runs once per session. Success unblocks loading the toggle
state; failure or cancellation ends the session, with no retry offered.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol, runtime_checkable

from .controller import NoticeSink
from .errors import AuthenticationFailed

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Authentication succeeded!"
FAILURE_MESSAGE = "Authentication failed"


@dataclass(frozen=True)
class PromptInfo:
    """Text shown on the biometric prompt."""

    title: str = "ToggleMaster Security"
    subtitle: str = "Authenticate to access"
    negative_button: str = "Cancel"

    @classmethod
    def from_config(cls, auth_config: dict) -> "PromptInfo":
        return cls(
            title=auth_config.get("title", cls.title),
            subtitle=auth_config.get("subtitle", cls.subtitle),
            negative_button=auth_config.get("negative_button", cls.negative_button),
        )


@dataclass(frozen=True)
class AuthResult:
    """Outcome reported by an authenticator."""

    succeeded: bool
    reason: str = ""

    @classmethod
    def success(cls) -> "AuthResult":
        return cls(succeeded=True)

    @classmethod
    def failure(cls, reason: str) -> "AuthResult":
        return cls(succeeded=False, reason=reason)


@runtime_checkable
class Authenticator(Protocol):
    """Protocol for platform biometric challenges."""

    def authenticate(self, prompt: PromptInfo, callback: Callable[[AuthResult], None]) -> None:
        """
        Present the challenge and report exactly one result via ``callback``.

        The callback must be invoked on the UI thread.
        """
        ...


class AuthStatus(Enum):
    """Authentication session states."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class AuthSession:
    """One biometric challenge. Resolves at most once."""

    def __init__(self):
        self.status = AuthStatus.PENDING
        self.reason = ""

    @property
    def is_resolved(self) -> bool:
        return self.status is not AuthStatus.PENDING

    def resolve(self, result: AuthResult) -> bool:
        """
        Record the outcome.

        Returns:
            False if the session was already resolved.
        """
        if self.is_resolved:
            return False
        self.status = AuthStatus.SUCCEEDED if result.succeeded else AuthStatus.FAILED
        self.reason = result.reason
        return True


class AuthGate:
    """
    Runs the biometric challenge before the toggle state is touched.

    ``on_success`` is called only after a successful challenge; on failure
    ``on_failure`` receives an AuthenticationFailed and the caller is
    expected to end the session.
    """

    def __init__(
        self,
        authenticator: Authenticator,
        prompt: PromptInfo,
        notices: NoticeSink,
        on_success: Callable[[], None],
        on_failure: Callable[[AuthenticationFailed], None],
    ):
        self.authenticator = authenticator
        self.prompt = prompt
        self.notices = notices
        self.on_success = on_success
        self.on_failure = on_failure
        self.session: AuthSession | None = None

    def start(self) -> AuthSession:
        """Present the challenge. Allowed once per gate."""
        if self.session is not None:
            raise RuntimeError("Authentication already started for this session")

        self.session = AuthSession()
        logger.info(f"Requesting authentication via {type(self.authenticator).__name__}")
        self.authenticator.authenticate(self.prompt, self._on_result)
        return self.session

    def _on_result(self, result: AuthResult) -> None:
        session = self.session
        if session is None or not session.resolve(result):
            logger.warning(f"Ignoring late authentication result: {result}")
            return

        if result.succeeded:
            logger.info("Authentication succeeded")
            self.on_success()
            self.notices.show(SUCCESS_MESSAGE)
        else:
            logger.warning(f"Authentication failed: {result.reason or 'no reason given'}")
            self.notices.show(FAILURE_MESSAGE)
            self.on_failure(AuthenticationFailed(result.reason))
