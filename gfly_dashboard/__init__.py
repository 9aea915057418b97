"""
GFly Dashboard
Cockpit instrument dashboard for the GFly paraglider flight computer.

Features:
- Polling live telemetry from the device's status endpoint
- Fix-aware formatting of altitude, speed, heading and vario data
- Current, Max/Min, Track and Info pages
- Device control commands (tracking, vario audio, statistics, power)
"""

import logging
import sys

# Configure package logger before the subpackages start logging
root_logger = logging.getLogger("gfly_dashboard")
root_logger.setLevel(logging.INFO)

if not root_logger.handlers:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    )
    root_logger.addHandler(console_handler)

from .config.constants import APP_NAME, APP_VERSION, APP_AUTHOR, APP_LICENSE

__version__ = APP_VERSION
__author__ = APP_AUTHOR
__license__ = APP_LICENSE

root_logger.debug(f"Initializing {APP_NAME} v{APP_VERSION}")
