"""
Battery level sampling.

- Android: BatteryManager.BATTERY_PROPERTY_CAPACITY via pyjnius
- Desktop: psutil.sensors_battery(), None on machines without a battery
"""

import logging

import psutil

from ..core.controller import BatterySensor
from ..core.state import BatteryLevel

logger = logging.getLogger(__name__)


class AndroidBattery:
    """Battery capacity from the Android BatteryManager service."""

    def read(self) -> BatteryLevel | None:
        from jnius import autoclass, cast

        PythonActivity = autoclass("org.kivy.android.PythonActivity")
        Context = autoclass("android.content.Context")
        BatteryManager = autoclass("android.os.BatteryManager")

        manager = cast(
            "android.os.BatteryManager",
            PythonActivity.mActivity.getSystemService(Context.BATTERY_SERVICE),
        )
        capacity = manager.getIntProperty(BatteryManager.BATTERY_PROPERTY_CAPACITY)
        # Integer.MIN_VALUE when the property is unsupported
        if not 0 <= capacity <= 100:
            return None
        return BatteryLevel(capacity)


class DesktopBattery:
    """Battery level through psutil."""

    def read(self) -> BatteryLevel | None:
        battery = psutil.sensors_battery()
        if battery is None:
            return None
        return BatteryLevel(max(0, min(100, round(battery.percent))))


def get_battery(platform_type: str = "desktop") -> BatterySensor:
    """Factory function for the platform battery sensor."""
    if platform_type == "android":
        return AndroidBattery()
    return DesktopBattery()
