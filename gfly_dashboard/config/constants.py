"""
Constants for GFly Dashboard.
These are fixed values that don't change during application execution.
"""

# Network constants
DEFAULT_BASE_URL = "http://192.168.4.1:8080"  # Device access point
DEFAULT_POLL_INTERVAL_MS = 1000
DEFAULT_COMMAND_TIMEOUT = 5.0  # seconds
DEFAULT_ENCODING = 'utf-8'

# Device endpoints
STATUS_ENDPOINT = '/status'
TOGGLE_TRACK_ENDPOINT = '/toggletrack'
TOGGLE_AUDIO_ENDPOINT = '/toggleaudio'
RESET_STATS_ENDPOINT = '/resetstats'
RESET_ORIGIN_ENDPOINT = '/resetorigin'
REBOOT_ENDPOINT = '/reboot'
POWERDOWN_ENDPOINT = '/powerdown'

# Display placeholders
PLACEHOLDER = '-'
UNKNOWN_HEADING = '-'

# 16-point compass. Bucket k (k = 1..15) covers
# [11.25 + (k - 1) * 22.5, 11.25 + k * 22.5); everything else is "N".
COMPASS_LABELS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)
COMPASS_FIRST_BOUNDARY = 11.25
COMPASS_BUCKET_WIDTH = 22.5

# Decimal places per quantity
ALTITUDE_DECIMALS = 1
DISTANCE_DECIMALS = 1
RATE_DECIMALS = 2
COORDINATE_DECIMALS = 4
SPEED_DECIMALS = 1
TEMPERATURE_DECIMALS = 1
PRESSURE_DECIMALS = 1

# Unit suffixes (as reported by the device)
ALTITUDE_UNIT = 'm'
DISTANCE_UNIT = 'm'
RATE_UNIT = 'm/s'
SPEED_UNIT = 'km/h'
TEMPERATURE_UNIT = '°C'
PRESSURE_UNIT = 'hPa'

# Application information
APP_NAME = "GFly Dashboard"
APP_VERSION = "0.1.0"
APP_AUTHOR = "GFly Contributors"
APP_LICENSE = "MIT License"
APP_DESCRIPTION = "Cockpit instrument dashboard for the GFly flight computer"

# CLI constants
CLI_PROMPT = "> "
