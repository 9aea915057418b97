"""
Data models for GFly Dashboard.
Contains the telemetry snapshot reported by the device's status endpoint.
"""

from dataclasses import dataclass, fields
from typing import Optional, Dict, Any, Tuple


def _camel(name: str) -> str:
    """Convert a snake_case attribute name to the device's camelCase key"""
    head, *rest = name.split('_')
    return head + ''.join(part.capitalize() for part in rest)


@dataclass(frozen=True)
class TelemetrySnapshot:
    """
    One telemetry reading as reported by the device.

    Every field is optional: None means the device did not report it (the
    device omits position fields until the GPS has a fix). Snapshots are
    immutable and replaced, never updated, by the next successful fetch.

    Units: metres, km/h, m/s, degrees, °C, hPa, epoch milliseconds.
    """
    # Live values
    altitude: Optional[float] = None
    pressure_altitude: Optional[float] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    speed: Optional[float] = None
    vertical_speed: Optional[float] = None
    heading: Optional[float] = None
    temperature: Optional[float] = None
    pressure: Optional[float] = None
    distance: Optional[float] = None
    date: Optional[str] = None
    time: Optional[str] = None

    # Device flags
    gps_has_fix: Optional[bool] = None
    is_track_running: Optional[bool] = None
    vario_audio_on: Optional[bool] = None

    # Session aggregates
    max_altitude: Optional[float] = None
    min_altitude: Optional[float] = None
    max_pressure_altitude: Optional[float] = None
    min_pressure_altitude: Optional[float] = None
    max_climb: Optional[float] = None
    max_sink: Optional[float] = None
    max_distance: Optional[float] = None
    max_speed: Optional[float] = None
    distance_travelled: Optional[float] = None

    # Track origin
    initial_altitude: Optional[float] = None
    initial_latitude: Optional[float] = None
    initial_longitude: Optional[float] = None
    initial_date: Optional[str] = None
    initial_time: Optional[str] = None

    # Device clock (epoch milliseconds)
    track_start_time: Optional[float] = None
    track_stop_time: Optional[float] = None
    current_system_time: Optional[float] = None
    initial_system_time: Optional[float] = None

    def __post_init__(self):
        """Validate field types after initialization"""
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name in BOOLEAN_FIELDS:
                if not isinstance(value, bool):
                    raise TypeError(f"{f.name} must be a boolean")
            elif f.name in TEXT_FIELDS:
                if not isinstance(value, str):
                    raise TypeError(f"{f.name} must be a string")
            elif isinstance(value, bool) or not isinstance(value, (int, float)):
                raise TypeError(f"{f.name} must be a number")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TelemetrySnapshot':
        """
        Build a snapshot from the device's camelCase status document.
        Unknown keys are ignored and JSON null counts as absent.
        """
        values = {
            name: data[key]
            for key, name in JSON_KEYS.items()
            if data.get(key) is not None
        }
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the snapshot back to a camelCase document, omitting absent fields"""
        return {
            _camel(f.name): getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @property
    def has_fix(self) -> bool:
        """GPS lock, with an absent flag read as no lock"""
        return bool(self.gps_has_fix)


BOOLEAN_FIELDS: Tuple[str, ...] = ('gps_has_fix', 'is_track_running', 'vario_audio_on')
TEXT_FIELDS: Tuple[str, ...] = ('date', 'time', 'initial_date', 'initial_time')

# camelCase status key -> snapshot attribute
JSON_KEYS: Dict[str, str] = {_camel(f.name): f.name for f in fields(TelemetrySnapshot)}
