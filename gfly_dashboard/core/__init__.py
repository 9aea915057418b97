"""
Core package for GFly Dashboard.
Contains the polling loop, view derivation and navigation logic.
"""

from .heading import classify
from .navigation import ViewSelection, PageNavigator
from .poller import PollerState, TelemetryPoller, create_poller, start_poller, stop_poller
from .view import DerivedField, DerivedView, Emphasis, Loading, LOADING, derive
from .dashboard import Dashboard, create_dashboard

__all__ = [
    'classify',
    'ViewSelection',
    'PageNavigator',
    'PollerState',
    'TelemetryPoller',
    'create_poller',
    'start_poller',
    'stop_poller',
    'DerivedField',
    'DerivedView',
    'Emphasis',
    'Loading',
    'LOADING',
    'derive',
    'Dashboard',
    'create_dashboard'
]
