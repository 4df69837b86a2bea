"""
Error taxonomy for ToggleMaster.

Only AuthenticationFailed ends a session. HardwareUnavailable is recovered
where it happens and shown as a transient notice. StorageCorrupted is kept
distinct from "no saved state" so unreadable storage never reads as OFF.
"""


class ToggleMasterError(Exception):
    """Base class for ToggleMaster errors."""


class AuthenticationFailed(ToggleMasterError):
    """Biometric challenge failed or was cancelled. Terminal for the session."""

    def __init__(self, reason: str = ""):
        self.reason = reason
        super().__init__(f"Authentication failed: {reason}" if reason else "Authentication failed")


class HardwareUnavailable(ToggleMasterError):
    """Torch could not be driven (no camera, torch busy, permission denied)."""


class StorageCorrupted(ToggleMasterError):
    """Encrypted store exists but can not be read back faithfully."""
