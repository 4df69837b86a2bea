"""
Home-screen widget refresh.

The notifier asks a platform host for the active widget instances and sends
them a single update broadcast. No acknowledgement is awaited.
"""

import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

ACTION_APPWIDGET_UPDATE = "android.appwidget.action.APPWIDGET_UPDATE"


@dataclass(frozen=True)
class WidgetUpdate:
    """Refresh broadcast addressed to a set of widget instances."""

    widget_ids: tuple[int, ...]
    action: str = ACTION_APPWIDGET_UPDATE


@runtime_checkable
class WidgetHost(Protocol):
    """Protocol for platform widget managers."""

    def active_widget_ids(self) -> list[int]:
        """Return identifiers of widget instances currently placed."""
        ...

    def broadcast(self, update: WidgetUpdate) -> None:
        """Send the update without waiting for delivery."""
        ...


class NullWidgetHost:
    """Widget host for platforms without home-screen widgets."""

    def active_widget_ids(self) -> list[int]:
        return []

    def broadcast(self, update: WidgetUpdate) -> None:
        logger.debug(f"No widget host, dropping {update.action}")


class WidgetNotifier:
    """Fire-and-forget refresh of every active widget instance."""

    def __init__(self, host: WidgetHost):
        self.host = host

    def notify(self) -> WidgetUpdate | None:
        """
        Broadcast a refresh to active widgets.

        Returns:
            The update that was sent, or None when no widget is placed.
        """
        ids = tuple(self.host.active_widget_ids())
        if not ids:
            logger.debug("No active widgets to refresh")
            return None

        update = WidgetUpdate(widget_ids=ids)
        self.host.broadcast(update)
        logger.debug(f"Widget refresh sent to {len(ids)} instance(s)")
        return update
