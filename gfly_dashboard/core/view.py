"""
View-state derivation for GFly Dashboard.
Turns the latest telemetry snapshot and the selected page into the exact
formatted fields the display shows.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Tuple, Union

from ..data.models import TelemetrySnapshot
from ..config.constants import (
    PLACEHOLDER,
    ALTITUDE_DECIMALS, DISTANCE_DECIMALS, RATE_DECIMALS, COORDINATE_DECIMALS,
    SPEED_DECIMALS, TEMPERATURE_DECIMALS, PRESSURE_DECIMALS,
    ALTITUDE_UNIT, DISTANCE_UNIT, RATE_UNIT, SPEED_UNIT, TEMPERATURE_UNIT, PRESSURE_UNIT
)
from .heading import classify
from .navigation import ViewSelection


class Emphasis(Enum):
    """Display hint for a field"""
    NORMAL = "normal"
    POSITIVE = "positive"
    NEGATIVE = "negative"
    MUTED = "muted"


@dataclass(frozen=True)
class DerivedField:
    """One displayable datum"""
    key: str
    label: str
    primary_value: str
    secondary_value: Optional[str] = None
    emphasis: Emphasis = Emphasis.NORMAL


@dataclass(frozen=True)
class DerivedView:
    """Everything the display needs for one page"""
    page: ViewSelection
    fields: Tuple[DerivedField, ...]
    no_fix_warning: bool

    def get(self, key: str) -> Optional[DerivedField]:
        """Find a field by its telemetry key"""
        for field in self.fields:
            if field.key == key:
                return field
        return None

    def keys(self) -> List[str]:
        return [field.key for field in self.fields]

    def __iter__(self) -> Iterator[DerivedField]:
        return iter(self.fields)


class Loading:
    """Returned while no snapshot has ever been received"""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Loading, cls).__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "LOADING"


LOADING = Loading()

DerivedResult = Union[DerivedView, Loading]


# --- formatting -------------------------------------------------------------

def value_or_zero(value: Optional[float]) -> float:
    """Default-application step: absent numeric telemetry reads as zero"""
    return 0.0 if value is None else value


def format_number(value: float, decimals: int, unit: Optional[str] = None) -> str:
    """Format a number with a fixed number of decimals and an optional unit"""
    text = f"{value:.{decimals}f}"
    if float(text) == 0:
        text = f"{0.0:.{decimals}f}"  # no "-0.00"
    return f"{text} {unit}" if unit else text


def format_duration(milliseconds: float) -> str:
    """Format a duration in milliseconds as H:MM:SS"""
    total = max(0, int(milliseconds // 1000))
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours}:{minutes:02d}:{seconds:02d}"


def _altitude(value: Optional[float]) -> str:
    return format_number(value_or_zero(value), ALTITUDE_DECIMALS, ALTITUDE_UNIT)


def _distance(value: Optional[float]) -> str:
    return format_number(value_or_zero(value), DISTANCE_DECIMALS, DISTANCE_UNIT)


def _rate(value: Optional[float]) -> str:
    return format_number(value_or_zero(value), RATE_DECIMALS, RATE_UNIT)


def _speed(value: Optional[float]) -> str:
    return format_number(value_or_zero(value), SPEED_DECIMALS, SPEED_UNIT)


def _coordinate(value: Optional[float]) -> str:
    return format_number(value_or_zero(value), COORDINATE_DECIMALS)


def _placeholder(key: str, label: str) -> DerivedField:
    return DerivedField(key, label, PLACEHOLDER, emphasis=Emphasis.MUTED)


def _fix_gated(key: str, label: str, text: str, has_fix: bool,
               secondary: Optional[str] = None) -> DerivedField:
    """Real value with a GPS lock, muted placeholder without one"""
    if not has_fix:
        return _placeholder(key, label)
    return DerivedField(key, label, text, secondary)


def _climb_sink(key: str, label: str, value: Optional[float]) -> DerivedField:
    """Vertical speed: sink (below zero) is Negative, anything else Positive"""
    rate = value_or_zero(value)
    # Emphasis follows the displayed value, so "0.00" is never shown as sink
    emphasis = Emphasis.NEGATIVE if round(rate, RATE_DECIMALS) < 0 else Emphasis.POSITIVE
    return DerivedField(key, label, _rate(rate), emphasis=emphasis)


# --- pages ------------------------------------------------------------------

def _current_fields(snapshot: TelemetrySnapshot) -> List[DerivedField]:
    has_fix = snapshot.has_fix
    heading_secondary = None
    if snapshot.heading is not None:
        degrees = f"{snapshot.heading:.0f}"
        if degrees == "360":
            degrees = "0"
        heading_secondary = f"{degrees}°"

    return [
        _fix_gated('altitude', "Altitude", _altitude(snapshot.altitude), has_fix),
        DerivedField('pressureAltitude', "Pressure altitude",
                     _altitude(snapshot.pressure_altitude)),
        _fix_gated('speed', "Speed", _speed(snapshot.speed), has_fix),
        _climb_sink('verticalSpeed', "Vertical speed", snapshot.vertical_speed),
        _fix_gated('heading', "Heading", classify(snapshot.heading), has_fix,
                   heading_secondary),
        _fix_gated('distance', "Distance", _distance(snapshot.distance), has_fix),
        _fix_gated('latitude', "Latitude", _coordinate(snapshot.latitude), has_fix),
        _fix_gated('longitude', "Longitude", _coordinate(snapshot.longitude), has_fix),
        DerivedField('temperature', "Temperature",
                     format_number(value_or_zero(snapshot.temperature),
                                   TEMPERATURE_DECIMALS, TEMPERATURE_UNIT)),
    ]


def _maxmin_fields(snapshot: TelemetrySnapshot) -> List[DerivedField]:
    return [
        DerivedField('maxAltitude', "Max altitude", _altitude(snapshot.max_altitude)),
        DerivedField('minAltitude', "Min altitude", _altitude(snapshot.min_altitude)),
        DerivedField('maxPressureAltitude', "Max pressure altitude",
                     _altitude(snapshot.max_pressure_altitude)),
        DerivedField('minPressureAltitude', "Min pressure altitude",
                     _altitude(snapshot.min_pressure_altitude)),
        DerivedField('maxClimb', "Max climb", _rate(snapshot.max_climb),
                     emphasis=Emphasis.POSITIVE),
        DerivedField('maxSink', "Max sink", _rate(snapshot.max_sink),
                     emphasis=Emphasis.NEGATIVE),
        DerivedField('maxSpeed', "Max speed", _speed(snapshot.max_speed)),
        DerivedField('maxDistance', "Max distance", _distance(snapshot.max_distance)),
        DerivedField('distanceTravelled', "Distance travelled",
                     _distance(snapshot.distance_travelled)),
    ]


def _track_duration(snapshot: TelemetrySnapshot) -> Optional[float]:
    """Milliseconds since the track started, or None if it never did"""
    start = value_or_zero(snapshot.track_start_time)
    if start <= 0:
        return None
    stop = value_or_zero(snapshot.track_stop_time)
    if not snapshot.is_track_running and stop >= start:
        return stop - start
    now = value_or_zero(snapshot.current_system_time)
    if now < start:
        return None
    return now - start


def _track_fields(snapshot: TelemetrySnapshot) -> List[DerivedField]:
    if snapshot.is_track_running:
        state = DerivedField('isTrackRunning', "Tracking", "Recording",
                             emphasis=Emphasis.POSITIVE)
    else:
        state = DerivedField('isTrackRunning', "Tracking", "Stopped",
                             emphasis=Emphasis.MUTED)

    duration = _track_duration(snapshot)
    if duration is None:
        duration_field = _placeholder('trackDuration', "Duration")
    else:
        duration_field = DerivedField('trackDuration', "Duration", format_duration(duration))

    origin_lat = value_or_zero(snapshot.initial_latitude)
    origin_lon = value_or_zero(snapshot.initial_longitude)
    origin_set = not (origin_lat == 0 and origin_lon == 0)
    if origin_set:
        origin = [
            DerivedField('initialLatitude', "Origin latitude", _coordinate(origin_lat)),
            DerivedField('initialLongitude', "Origin longitude", _coordinate(origin_lon)),
        ]
    else:
        origin = [
            _placeholder('initialLatitude', "Origin latitude"),
            _placeholder('initialLongitude', "Origin longitude"),
        ]

    return [
        state,
        duration_field,
        _fix_gated('distance', "Distance from origin", _distance(snapshot.distance),
                   snapshot.has_fix),
        DerivedField('distanceTravelled', "Distance travelled",
                     _distance(snapshot.distance_travelled)),
        *origin,
    ]


def _info_fields(snapshot: TelemetrySnapshot) -> List[DerivedField]:
    if snapshot.has_fix:
        fix = DerivedField('gpsHasFix', "GPS", "Locked", emphasis=Emphasis.POSITIVE)
    else:
        fix = DerivedField('gpsHasFix', "GPS", "No fix", emphasis=Emphasis.NEGATIVE)

    if snapshot.vario_audio_on:
        audio = DerivedField('varioAudioOn', "Vario audio", "On")
    else:
        audio = DerivedField('varioAudioOn', "Vario audio", "Off", emphasis=Emphasis.MUTED)

    clock = " ".join(part for part in (snapshot.date, snapshot.time) if part)
    clock_field = (DerivedField('gpsTime', "GPS time (UTC)", clock)
                   if clock else _placeholder('gpsTime', "GPS time (UTC)"))

    booted = value_or_zero(snapshot.initial_system_time)
    now = value_or_zero(snapshot.current_system_time)
    if booted > 0 and now >= booted:
        uptime = DerivedField('uptime', "Uptime", format_duration(now - booted))
    else:
        uptime = _placeholder('uptime', "Uptime")

    return [
        fix,
        audio,
        clock_field,
        uptime,
        DerivedField('pressure', "Pressure",
                     format_number(value_or_zero(snapshot.pressure),
                                   PRESSURE_DECIMALS, PRESSURE_UNIT)),
    ]


_PAGES: Dict[ViewSelection, Callable[[TelemetrySnapshot], List[DerivedField]]] = {
    ViewSelection.CURRENT: _current_fields,
    ViewSelection.MAXMIN: _maxmin_fields,
    ViewSelection.TRACK: _track_fields,
    ViewSelection.INFO: _info_fields,
}


def derive(snapshot: Optional[TelemetrySnapshot], page: ViewSelection) -> DerivedResult:
    """
    Derive the display fields for a page.

    Pure: reads the snapshot, never touches poller state.

    Args:
        snapshot: Latest snapshot, or None if none has been received yet
        page: Selected page

    Returns:
        Union[DerivedView, Loading]: The page's fields plus the no-fix banner
        flag, or LOADING before the first snapshot
    """
    if snapshot is None:
        return LOADING

    return DerivedView(
        page=page,
        fields=tuple(_PAGES[page](snapshot)),
        no_fix_warning=not snapshot.has_fix,
    )
