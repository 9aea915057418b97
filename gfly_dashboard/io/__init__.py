"""
I/O package for GFly Dashboard.
Contains the HTTP client for the device's status and control endpoints.
"""

from .device import DeviceClient, DeviceCommand, FetchFailure, create_device_client

__all__ = [
    'DeviceClient',
    'DeviceCommand',
    'FetchFailure',
    'create_device_client'
]
