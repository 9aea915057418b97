"""
Command-line interface for GFly Dashboard.
Provides a text-based display and menu for the device.
"""

import logging
import asyncio
import signal
import sys
from typing import Optional

from ..core.dashboard import Dashboard, create_dashboard
from ..core.navigation import ViewSelection
from ..io.device import DeviceCommand
from ..utils.events import EventType, Event, event_bus, publish_event
from ..config.constants import APP_NAME, APP_VERSION, CLI_PROMPT
from ..config.settings import settings
from .render import render_view, render_status_line

# Configure logger
logger = logging.getLogger("gfly_dashboard.ui.cli")

_COMMANDS = {
    'track': DeviceCommand.TOGGLE_TRACK,
    'audio': DeviceCommand.TOGGLE_AUDIO,
    'resetstats': DeviceCommand.RESET_STATS,
    'resetorigin': DeviceCommand.RESET_ORIGIN,
    'reboot': DeviceCommand.REBOOT,
    'powerdown': DeviceCommand.POWERDOWN,
}

_CONFIRM = (DeviceCommand.REBOOT, DeviceCommand.POWERDOWN)


class CLI:
    """
    Command-line interface for GFly Dashboard.
    Shows the selected page and forwards menu commands to the device.
    """

    def __init__(self, dashboard: Optional[Dashboard] = None, color: Optional[bool] = None):
        """
        Initialize the CLI.

        Args:
            dashboard: Dashboard to drive (creates one from settings if None)
            color: Use ANSI colors (default: when stdout is a terminal)
        """
        self.dashboard = dashboard or create_dashboard()
        self.color = sys.stdout.isatty() if color is None else color
        self.running = False
        self.live = False
        self.last_fetch_error: Optional[str] = None

        self._setup_signal_handlers()

        logger.info("CLI initialized")

    def _setup_signal_handlers(self) -> None:
        """Set up signal handlers for graceful shutdown."""
        for sig in [signal.SIGINT, signal.SIGTERM]:
            try:
                signal.signal(sig, self._signal_handler)
            except (ValueError, RuntimeError):
                # Signal handler can't be set in this context (e.g., in a thread)
                pass

    def _signal_handler(self, signum, frame) -> None:
        """Handle signals for graceful shutdown."""
        print("\nShutdown requested, cleaning up...")
        asyncio.create_task(publish_event(
            EventType.SHUTDOWN_REQUESTED,
            {'signal': signum},
            'CLI'
        ))

    async def run(self) -> None:
        """
        Run the CLI interface.
        This is the main entry point for the CLI.
        """
        print(f"\n===== {APP_NAME} v{APP_VERSION} =====\n")
        print(f"Polling {self.dashboard.device.base_url} ...")

        if not await self.dashboard.start():
            print("Failed to start the dashboard. Exiting.")
            return

        self.running = True
        event_bus.subscribe(EventType.SNAPSHOT_UPDATED, self._handle_snapshot)
        event_bus.subscribe(EventType.FETCH_FAILED, self._handle_fetch_failed)
        event_bus.subscribe(EventType.COMMAND_FAILED, self._handle_command_failed)
        event_bus.subscribe(EventType.SHUTDOWN_REQUESTED, self._handle_shutdown)

        self._print_help()

        try:
            while self.running:
                print(f"\n{CLI_PROMPT}", end="", flush=True)
                line = await asyncio.get_running_loop().run_in_executor(None, sys.stdin.readline)
                if not line:
                    # EOF
                    break
                if not await self.handle_command(line):
                    print("Exiting...")
                    break

        except asyncio.CancelledError:
            print("CLI cancelled.")
        finally:
            await self._cleanup()
            print("CLI exited.")

    async def handle_command(self, line: str) -> bool:
        """
        Process one command line.

        Args:
            line: The raw input line

        Returns:
            bool: False if the CLI should exit, True otherwise
        """
        parts = line.strip().lower().split()
        if not parts:
            self.show()
            return True
        command, args = parts[0], parts[1:]

        if command in ("help", "?"):
            self._print_help()
        elif command in ("show", "s"):
            self.show()
        elif command in ("next", "n"):
            await self.dashboard.next_page()
            self.show()
        elif command in ("prev", "p"):
            await self.dashboard.previous_page()
            self.show()
        elif command == "page":
            await self._select_page(args)
        elif command == "live":
            self.live = not self.live
            print(f"Live display {'on' if self.live else 'off'}")
        elif command == "status":
            self._print_status()
        elif command in _COMMANDS:
            await self._send_command(_COMMANDS[command])
        elif command in ("exit", "quit", "q"):
            return False
        else:
            print(f"Unknown command: {command}")
            print("Type 'help' for available commands.")
        return True

    def show(self) -> None:
        """Print the selected page."""
        view = self.dashboard.current_view()
        print()
        for line in render_view(view, self.dashboard.page, self.color):
            print(line)

    async def _select_page(self, args) -> None:
        if not args:
            print("Pages: " + ", ".join(page.value for page in ViewSelection))
            return
        try:
            await self.dashboard.select_page(args[0])
        except ValueError as e:
            print(str(e))
            return
        self.show()

    async def _send_command(self, command: DeviceCommand) -> None:
        if command in _CONFIRM and settings.get('confirm_power_commands', True):
            answer = await asyncio.get_running_loop().run_in_executor(
                None, lambda: input(f"Really {command.name.lower()} the device? (y/n): ")
            )
            if not answer.strip().lower().startswith('y'):
                print("Cancelled.")
                return

        # Fire and forget; the device state shows up with the next poll
        self.dashboard.fire_command(command)
        print(f"Sent {command.name.lower()}.")

    def _print_help(self) -> None:
        """Print help information."""
        print("\nAvailable commands:")
        print("  show, s        - Show the selected page (or just press Enter)")
        print("  next, n        - Next page")
        print("  prev, p        - Previous page")
        print("  page <name>    - Select a page (current, maxmin, track, info)")
        print("  live           - Toggle redrawing the page on every update")
        print("  status         - Show polling status")
        print("  track          - Start/stop the track log")
        print("  audio          - Turn vario audio on/off")
        print("  resetstats     - Reset max/min statistics")
        print("  resetorigin    - Reset the track origin")
        print("  reboot         - Reboot the device")
        print("  powerdown      - Power the device down")
        print("  exit, quit     - Exit the program")

    def _print_status(self) -> None:
        """Print the polling status."""
        status = self.dashboard.get_status()
        print("\n----- Polling Status -----")
        print(f"Device: {status['base_url']} every {status['interval_ms']} ms")
        print(render_status_line(status['seconds_since_update'], status['is_fetching']))
        print(f"Fetches: {status['fetch_count']}, failures: {status['failure_count']} "
              f"({status['consecutive_failures']} in a row)")
        if self.last_fetch_error:
            print(f"Last error: {self.last_fetch_error}")
        print(f"GPS fix: {'YES' if status['gps_has_fix'] else 'NO'}")
        print(f"Tracking: {'YES' if status['is_track_running'] else 'NO'}")
        print(f"Vario audio: {'ON' if status['vario_audio_on'] else 'OFF'}")

    async def _cleanup(self) -> None:
        """Clean up resources before exiting."""
        self.running = False
        event_bus.unsubscribe(EventType.SNAPSHOT_UPDATED, self._handle_snapshot)
        event_bus.unsubscribe(EventType.FETCH_FAILED, self._handle_fetch_failed)
        event_bus.unsubscribe(EventType.COMMAND_FAILED, self._handle_command_failed)
        event_bus.unsubscribe(EventType.SHUTDOWN_REQUESTED, self._handle_shutdown)

        if self.dashboard.running:
            await self.dashboard.stop()

        logger.info("CLI cleanup completed")

    def _handle_snapshot(self, event: Event) -> None:
        """Redraw on every update while live display is on."""
        if not self.live:
            return
        self.show()
        print(CLI_PROMPT, end="", flush=True)

    def _handle_fetch_failed(self, event: Event) -> None:
        self.last_fetch_error = event.data.get('message')

    def _handle_command_failed(self, event: Event) -> None:
        command = event.data.get('command', 'command')
        print(f"\n{command.lower()} failed: {event.data.get('message', 'unknown error')}")
        print(CLI_PROMPT, end="", flush=True)

    async def _handle_shutdown(self, event: Event) -> None:
        """Handle shutdown request events."""
        print("\nShutdown requested, exiting...")
        self.running = False


# Factory function to create a CLI instance
def create_cli(dashboard: Optional[Dashboard] = None) -> CLI:
    """
    Create a new CLI instance.

    Returns:
        CLI: A new CLI instance
    """
    return CLI(dashboard)
