"""
Cross-platform torch abstraction.

- Android: Camera2 CameraManager.setTorchMode via pyjnius
- Desktop: no torch; every call reports HardwareUnavailable
"""

import logging

from ..core.controller import TorchActuator
from ..core.errors import HardwareUnavailable

logger = logging.getLogger(__name__)


class AndroidTorch:
    """
    Torch of the first camera unit, driven through the Camera2 API.

    The CameraManager is resolved lazily so constructing the actuator never
    touches the JVM.
    """

    def __init__(self):
        self._camera_manager = None

    def _get_camera_manager(self):
        if self._camera_manager is None:
            from jnius import autoclass, cast

            PythonActivity = autoclass("org.kivy.android.PythonActivity")
            Context = autoclass("android.content.Context")
            activity = PythonActivity.mActivity
            self._camera_manager = cast(
                "android.hardware.camera2.CameraManager",
                activity.getSystemService(Context.CAMERA_SERVICE),
            )
        return self._camera_manager

    def set_torch(self, on: bool) -> None:
        """Switch the torch on the first listed camera."""
        try:
            manager = self._get_camera_manager()
            camera_ids = manager.getCameraIdList()
            if not camera_ids:
                raise HardwareUnavailable("No camera available")
            manager.setTorchMode(camera_ids[0], on)
        except HardwareUnavailable:
            raise
        except Exception as e:
            # JavaException, or a bridge failure such as a missing activity
            raise HardwareUnavailable(str(e)) from e

        logger.debug(f"Torch {'on' if on else 'off'} (camera {camera_ids[0]})")


class UnavailableTorch:
    """Torch for devices without a camera flash."""

    def set_torch(self, on: bool) -> None:
        raise HardwareUnavailable("No camera torch on this device")


def get_torch(platform_type: str = "desktop") -> TorchActuator:
    """
    Factory function to get the torch actuator for the current platform.

    Args:
        platform_type: Platform type ("desktop", "android").

    Returns:
        TorchActuator instance appropriate for the platform.
    """
    if platform_type == "android":
        logger.info("Using AndroidTorch")
        return AndroidTorch()

    logger.info("Using UnavailableTorch")
    return UnavailableTorch()
