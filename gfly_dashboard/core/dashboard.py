"""
Dashboard module for GFly Dashboard.
Coordinates the device client, the poller and page navigation, and provides
a unified API for the UI layer.
"""

import logging
from typing import Optional, Dict, Any, Union

from ..io.device import DeviceClient, DeviceCommand, create_device_client
from ..config.settings import settings
from ..utils.events import EventType, publish_event
from .navigation import PageNavigator, ViewSelection
from .poller import TelemetryPoller, PollerState, create_poller
from .view import DerivedResult, derive

# Configure logger
logger = logging.getLogger("gfly_dashboard.core.dashboard")


class Dashboard:
    """
    High-level orchestrator that coordinates all components.
    Provides a unified API for the UI layer.
    """

    def __init__(self,
                 device: Optional[DeviceClient] = None,
                 poller: Optional[TelemetryPoller] = None,
                 navigator: Optional[PageNavigator] = None,
                 interval_ms: Optional[int] = None):
        """
        Initialize the dashboard.

        Args:
            device: Device client (creates one from settings if None)
            poller: Poller (creates one fetching from the device if None)
            navigator: Page navigator (starts on the configured default page if None)
            interval_ms: Poll interval for a created poller (default: from settings)
        """
        self.device = device or create_device_client()
        self.poller = poller or create_poller(self.device.fetch_status, interval_ms)
        self.navigator = navigator or PageNavigator(settings.get('default_page'))
        self.running = False

        logger.info(f"Dashboard initialized for {self.device.base_url}")

    @property
    def state(self) -> PollerState:
        return self.poller.state

    @property
    def page(self) -> ViewSelection:
        return self.navigator.page

    async def start(self) -> bool:
        """
        Start polling the device.

        Returns:
            bool: True if started successfully, False otherwise
        """
        if self.running:
            logger.warning("Dashboard already running")
            return False

        if not await self.poller.start():
            return False

        self.running = True
        logger.info("Dashboard started")
        return True

    async def stop(self) -> bool:
        """
        Stop polling and release the HTTP session.

        Returns:
            bool: True if stopped, False if it was not running
        """
        if not self.running:
            logger.warning("Dashboard not running")
            return False

        self.running = False
        await self.poller.stop()
        await self.device.close()
        logger.info("Dashboard stopped")
        return True

    def current_view(self) -> DerivedResult:
        """Derive the selected page from the latest snapshot"""
        return derive(self.state.latest_snapshot, self.navigator.page)

    async def select_page(self, page: Union[ViewSelection, str]) -> ViewSelection:
        """Select a page by value or name"""
        return await self._page_changed(self.navigator.select(page))

    async def next_page(self) -> ViewSelection:
        return await self._page_changed(self.navigator.next())

    async def previous_page(self) -> ViewSelection:
        return await self._page_changed(self.navigator.previous())

    async def _page_changed(self, page: ViewSelection) -> ViewSelection:
        await publish_event(EventType.PAGE_CHANGED, {'page': page.value}, 'Dashboard')
        return page

    async def send_command(self, command: DeviceCommand) -> bool:
        """
        Send a control command and wait for the device to answer.
        The resulting device state shows up with a later poll.
        """
        return await self.device.send_command(command)

    def fire_command(self, command: DeviceCommand) -> None:
        """Send a control command without waiting"""
        self.device.fire_command(command)

    def get_status(self) -> Dict[str, Any]:
        """
        Get the overall status of the dashboard.

        Returns:
            Dict[str, Any]: Dictionary with status information
        """
        state = self.state
        snapshot = state.latest_snapshot
        return {
            'running': self.running,
            'base_url': self.device.base_url,
            'interval_ms': self.poller.interval_ms,
            'page': self.navigator.page.value,
            'has_snapshot': snapshot is not None,
            'is_fetching': state.is_fetching,
            'seconds_since_update': state.seconds_since_update(),
            'fetch_count': state.fetch_count,
            'failure_count': state.failure_count,
            'consecutive_failures': state.consecutive_failures,
            'gps_has_fix': snapshot.has_fix if snapshot else False,
            'is_track_running': bool(snapshot and snapshot.is_track_running),
            'vario_audio_on': bool(snapshot and snapshot.vario_audio_on),
        }


# Factory function to create a dashboard instance
def create_dashboard() -> Dashboard:
    """
    Create a new dashboard instance configured from settings.

    Returns:
        Dashboard: A new dashboard instance
    """
    return Dashboard()
