"""
Android AppWidgetManager host for widget refresh broadcasts.
"""

import logging

from ..core.widgets import NullWidgetHost, WidgetHost, WidgetUpdate

logger = logging.getLogger(__name__)


class AndroidWidgetHost:
    """
    Looks up placed instances of the app's widget provider and broadcasts
    APPWIDGET_UPDATE to them.
    """

    def __init__(self, provider_class: str):
        """
        Args:
            provider_class: Fully qualified AppWidgetProvider class name.
        """
        self.provider_class = provider_class

    def _component(self):
        from jnius import autoclass

        PythonActivity = autoclass("org.kivy.android.PythonActivity")
        ComponentName = autoclass("android.content.ComponentName")
        activity = PythonActivity.mActivity
        return activity, ComponentName(activity.getPackageName(), self.provider_class)

    def active_widget_ids(self) -> list[int]:
        from jnius import autoclass

        AppWidgetManager = autoclass("android.appwidget.AppWidgetManager")
        activity, component = self._component()
        manager = AppWidgetManager.getInstance(activity.getApplication())
        return list(manager.getAppWidgetIds(component))

    def broadcast(self, update: WidgetUpdate) -> None:
        from jnius import autoclass

        AppWidgetManager = autoclass("android.appwidget.AppWidgetManager")
        Intent = autoclass("android.content.Intent")

        activity, component = self._component()
        intent = Intent(update.action)
        intent.setComponent(component)
        intent.putExtra(AppWidgetManager.EXTRA_APPWIDGET_IDS, list(update.widget_ids))
        activity.sendBroadcast(intent)
        logger.debug(f"Broadcast {update.action} to {self.provider_class}")


def get_widget_host(widget_config: dict, platform_type: str = "desktop") -> WidgetHost:
    """Factory function for the platform widget host."""
    if platform_type == "android":
        return AndroidWidgetHost(
            widget_config.get("provider_class", "com.example.togglemaster.ToggleWidgetProvider")
        )
    return NullWidgetHost()
