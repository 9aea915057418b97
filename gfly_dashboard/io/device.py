"""
HTTP client for the GFly device.
Reads the status document and sends fire-and-forget control commands.
"""

import asyncio
import logging
from enum import Enum
from typing import Optional

import aiohttp

from ..data.models import TelemetrySnapshot
from ..data.parser import StatusParser, MalformedStatusError, parser as default_parser
from ..config.constants import (
    STATUS_ENDPOINT, TOGGLE_TRACK_ENDPOINT, TOGGLE_AUDIO_ENDPOINT,
    RESET_STATS_ENDPOINT, RESET_ORIGIN_ENDPOINT, REBOOT_ENDPOINT,
    POWERDOWN_ENDPOINT, DEFAULT_ENCODING
)
from ..config.settings import settings
from ..utils.events import EventType, publish_event

# Configure logger
logger = logging.getLogger("gfly_dashboard.io.device")


class FetchFailure(Exception):
    """Network error, timeout, non-2xx response or malformed status body."""


class DeviceCommand(Enum):
    """Control commands understood by the device, mapped to their endpoints"""
    TOGGLE_TRACK = TOGGLE_TRACK_ENDPOINT
    TOGGLE_AUDIO = TOGGLE_AUDIO_ENDPOINT
    RESET_STATS = RESET_STATS_ENDPOINT
    RESET_ORIGIN = RESET_ORIGIN_ENDPOINT
    REBOOT = REBOOT_ENDPOINT
    POWERDOWN = POWERDOWN_ENDPOINT

    @property
    def path(self) -> str:
        return self.value


def _client_timeout(seconds: Optional[float]) -> aiohttp.ClientTimeout:
    # total=None disables aiohttp's default 5 minute limit
    return aiohttp.ClientTimeout(total=seconds)


class DeviceClient:
    """
    Talks to the device over HTTP.

    One aiohttp session is created lazily and reused for every request
    until close() is called.
    """

    def __init__(self,
                 base_url: Optional[str] = None,
                 fetch_timeout: Optional[float] = None,
                 command_timeout: Optional[float] = None,
                 parser: Optional[StatusParser] = None):
        """
        Initialize the device client.

        Args:
            base_url: Device origin, e.g. http://192.168.4.1:8080 (default: from settings)
            fetch_timeout: Seconds to wait for /status, None for no timeout (default: from settings)
            command_timeout: Seconds to wait for a command, None for no timeout (default: from settings)
            parser: Status parser (uses default if None)
        """
        self.base_url = (base_url or settings.get('base_url')).rstrip('/')
        self.fetch_timeout = fetch_timeout if fetch_timeout is not None else settings.get('fetch_timeout')
        self.command_timeout = command_timeout if command_timeout is not None else settings.get('command_timeout')
        self.parser = parser or default_parser

        self._session: Optional[aiohttp.ClientSession] = None
        self._command_tasks = set()

        logger.info(f"Device client initialized for {self.base_url}")

    def url_for(self, path: str) -> str:
        """Build an absolute URL for a device endpoint"""
        return f"{self.base_url}{path}"

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self) -> None:
        """Close the HTTP session once fired commands have been sent"""
        if self._command_tasks:
            logger.debug(f"Waiting for {len(self._command_tasks)} command(s) before closing")
            await asyncio.wait(set(self._command_tasks), timeout=self.command_timeout)
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def fetch_status(self) -> TelemetrySnapshot:
        """
        Fetch one telemetry snapshot from GET /status.

        Returns:
            TelemetrySnapshot: The freshly parsed snapshot

        Raises:
            FetchFailure: On any network, HTTP or decoding problem
        """
        url = self.url_for(STATUS_ENDPOINT)
        session = await self._get_session()

        try:
            async with session.get(url, timeout=_client_timeout(self.fetch_timeout)) as response:
                if not 200 <= response.status < 300:
                    raise FetchFailure(f"HTTP {response.status} from {url}")
                body = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchFailure(f"Error fetching {url}: {e!r}") from e

        try:
            return self.parser.parse_text(body.decode(DEFAULT_ENCODING, errors='replace'))
        except MalformedStatusError as e:
            raise FetchFailure(f"Malformed status from {url}: {e}") from e

    async def send_command(self, command: DeviceCommand) -> bool:
        """
        Send a control command. The response body is not consumed.

        Args:
            command: The command to send

        Returns:
            bool: True if the device answered with a 2xx status, False otherwise
        """
        url = self.url_for(command.path)

        try:
            session = await self._get_session()
            async with session.get(url, timeout=_client_timeout(self.command_timeout)) as response:
                ok = 200 <= response.status < 300
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Command {command.name} failed: {e!r}")
            await publish_event(
                EventType.COMMAND_FAILED,
                {'command': command.name, 'message': str(e)},
                'DeviceClient'
            )
            return False

        if not ok:
            logger.warning(f"Command {command.name} rejected with HTTP {status}")
            await publish_event(
                EventType.COMMAND_FAILED,
                {'command': command.name, 'message': f"HTTP {status}"},
                'DeviceClient'
            )
            return False

        logger.info(f"Command {command.name} sent")
        await publish_event(
            EventType.COMMAND_SENT,
            {'command': command.name},
            'DeviceClient'
        )
        return True

    def fire_command(self, command: DeviceCommand) -> asyncio.Task:
        """
        Schedule a command without waiting for the device to answer.

        Args:
            command: The command to send

        Returns:
            asyncio.Task: The background task sending the command
        """
        task = asyncio.create_task(self.send_command(command))
        # Keep a reference until done so the task isn't garbage collected
        self._command_tasks.add(task)
        task.add_done_callback(self._command_tasks.discard)
        return task


# Factory function to create a device client
def create_device_client() -> DeviceClient:
    """
    Create a new device client configured from settings.

    Returns:
        DeviceClient: A new device client
    """
    return DeviceClient()
