"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture(scope="session")
def project_root_dir():
    """Provide the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def status_payload():
    """Provide a full status document as served by the device with a GPS fix."""
    return {
        "gpsHasFix": True,
        "varioAudioOn": True,
        "isTrackRunning": True,
        "initialSystemTime": 1700000000000,
        "currentSystemTime": 1700003723000,
        "trackStartTime": 1700000060000,
        "trackStopTime": 0,
        "initialDate": "2024-05-01",
        "initialTime": "10.00.00",
        "initialAltitude": 95.0,
        "initialLatitude": 51.1234,
        "initialLongitude": -1.5678,
        "distance": 1523.46,
        "date": "2024-05-01",
        "time": "11.02.03",
        "altitude": 512.34,
        "latitude": 51.123456,
        "longitude": -1.567891,
        "heading": 92.4,
        "speed": 32.18,
        "pressure": 960.51,
        "pressureAltitude": 498.76,
        "verticalSpeed": 1.456,
        "temperature": 18.25,
        "maxSpeed": 45.6,
        "maxAltitude": 812.0,
        "minAltitude": 95.0,
        "maxPressureAltitude": 800.5,
        "minPressureAltitude": 90.25,
        "maxClimb": 3.214,
        "maxSink": -2.5,
        "maxDistance": 2100.0,
        "distanceTravelled": 5230.0,
    }


@pytest.fixture
def no_fix_payload():
    """Provide a status document sent before the GPS has a fix."""
    return {
        "gpsHasFix": False,
        "varioAudioOn": False,
        "isTrackRunning": False,
        "altitude": 120.4,
        "pressureAltitude": 101.2,
        "verticalSpeed": -0.5,
        "temperature": 17.0,
    }
