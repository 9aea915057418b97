"""
Event system for GFly Dashboard.
Implements a Observer pattern to allow communication between components.
"""

from enum import Enum, auto
from typing import Dict, List, Any, Callable, Optional
from dataclasses import dataclass
import logging
import asyncio
import inspect
import time
import uuid

# Configure logger
logger = logging.getLogger("gfly_dashboard.events")


class EventType(Enum):
    """Enum defining the different types of events in the application"""
    # Poller events
    POLLER_STARTED = auto()
    POLLER_STOPPED = auto()
    SNAPSHOT_UPDATED = auto()
    FETCH_FAILED = auto()

    # Navigation events
    PAGE_CHANGED = auto()

    # Device command events
    COMMAND_SENT = auto()
    COMMAND_FAILED = auto()

    # System events
    SHUTDOWN_REQUESTED = auto()


@dataclass
class Event:
    """Represents an event in the application"""
    type: EventType
    data: Optional[Dict[str, Any]] = None
    source: Optional[str] = None
    timestamp: float = 0.0
    id: str = ""

    def __post_init__(self):
        """Initialize event with timestamp and ID if not provided"""
        if not self.timestamp:
            self.timestamp = time.time()
        if not self.id:
            self.id = str(uuid.uuid4())
        if not self.data:
            self.data = {}


class EventBus:
    """
    Centralized event bus that allows components to subscribe to and publish events.
    Implements the Singleton pattern to ensure only one instance exists.

    Events are notifications only; subscribers never feed back into the
    poller's state or cadence.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(EventBus, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        # Dictionary of event subscribers: {EventType: [callbacks]}
        self._subscribers: Dict[EventType, List[Callable[[Event], None]]] = {}

        self._initialized = True
        logger.debug("EventBus initialized")

    def subscribe(self, event_type: EventType, callback: Callable[[Event], None]) -> None:
        """
        Subscribe to an event type with a callback function.

        Args:
            event_type: The type of event to subscribe to
            callback: Function (or coroutine function) to call when event occurs
        """
        callbacks = self._subscribers.setdefault(event_type, [])
        if callback not in callbacks:
            callbacks.append(callback)
            logger.debug(f"Subscribed to {event_type.name}")

    def unsubscribe(self, event_type: EventType, callback: Callable[[Event], None]) -> bool:
        """
        Unsubscribe from an event type.

        Args:
            event_type: The type of event to unsubscribe from
            callback: The callback function to remove

        Returns:
            bool: True if successfully unsubscribed, False otherwise
        """
        callbacks = self._subscribers.get(event_type, [])
        if callback in callbacks:
            callbacks.remove(callback)
            logger.debug(f"Unsubscribed from {event_type.name}")
            return True
        return False

    async def publish(self, event: Event) -> None:
        """
        Publish an event to all subscribers.

        Args:
            event: The event to publish
        """
        subscribers = list(self._subscribers.get(event.type, []))
        if not subscribers:
            return

        logger.debug(f"Publishing event {event.type.name} to {len(subscribers)} subscribers")
        for callback in subscribers:
            try:
                if inspect.iscoroutinefunction(callback):
                    # Schedule async callbacks without awaiting them
                    asyncio.create_task(callback(event))
                else:
                    callback(event)
            except Exception as e:
                logger.error(f"Error in event subscriber: {e}")


# Create global event bus instance
event_bus = EventBus()


async def publish_event(
    event_type: EventType,
    data: Optional[Dict[str, Any]] = None,
    source: Optional[str] = None
) -> Event:
    """
    Helper function to create and publish an event.

    Args:
        event_type: The type of event to publish
        data: Optional data to include with the event
        source: Optional source identifier

    Returns:
        Event: The published event
    """
    event = Event(type=event_type, data=data, source=source)
    await event_bus.publish(event)
    return event
