"""
Utilities package for GFly Dashboard.
Contains common utilities and helpers used across the application.
"""

from .events import EventBus, Event, EventType, publish_event, event_bus

__all__ = [
    'EventBus',
    'Event',
    'EventType',
    'publish_event',
    'event_bus'
]
