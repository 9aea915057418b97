"""
Data package for GFly Dashboard.
Contains the telemetry model and the status document parser.
"""

from .models import TelemetrySnapshot
from .parser import StatusParser, MalformedStatusError, parser

__all__ = [
    'TelemetrySnapshot',
    'StatusParser',
    'MalformedStatusError',
    'parser'
]
