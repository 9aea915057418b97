"""
Tests for view-state derivation.
"""

import pytest
from gfly_dashboard.core.navigation import ViewSelection
from gfly_dashboard.core.poller import PollerState
from gfly_dashboard.core.view import (
    derive, LOADING, Loading, DerivedView, Emphasis, format_number, format_duration
)
from gfly_dashboard.data.models import TelemetrySnapshot


@pytest.fixture
def fixed(status_payload):
    """Snapshot with a GPS fix."""
    return TelemetrySnapshot.from_dict(status_payload)


@pytest.fixture
def unfixed(no_fix_payload):
    """Snapshot without a GPS fix."""
    return TelemetrySnapshot.from_dict(no_fix_payload)


class TestLoading:
    """Test cases for the loading state."""

    @pytest.mark.parametrize("page", list(ViewSelection))
    def test_no_snapshot_is_loading(self, page):
        """Test that every page is loading before the first snapshot."""
        assert derive(None, page) is LOADING

    def test_loading_is_singleton(self):
        """Test that Loading has a single instance."""
        assert Loading() is LOADING


class TestCurrentPage:
    """Test cases for the Current page."""

    def test_field_order(self, fixed):
        """Test the fields shown and their order."""
        view = derive(fixed, ViewSelection.CURRENT)
        assert isinstance(view, DerivedView)
        assert view.keys() == [
            'altitude', 'pressureAltitude', 'speed', 'verticalSpeed', 'heading',
            'distance', 'latitude', 'longitude', 'temperature',
        ]

    def test_formatting_with_fix(self, fixed):
        """Test the precision of every value with a fix."""
        view = derive(fixed, ViewSelection.CURRENT)

        assert view.get('altitude').primary_value == "512.3 m"
        assert view.get('pressureAltitude').primary_value == "498.8 m"
        assert view.get('speed').primary_value == "32.2 km/h"
        assert view.get('verticalSpeed').primary_value == "1.46 m/s"
        assert view.get('distance').primary_value == "1523.5 m"
        assert view.get('latitude').primary_value == "51.1235"
        assert view.get('longitude').primary_value == "-1.5679"
        assert view.get('temperature').primary_value == "18.2 °C"
        assert view.no_fix_warning is False

    def test_heading_label(self, fixed):
        """Test the heading is shown as a compass label with degrees."""
        heading = derive(fixed, ViewSelection.CURRENT).get('heading')
        assert heading.primary_value == "E"
        assert heading.secondary_value == "92°"
        assert heading.emphasis == Emphasis.NORMAL

    def test_no_fix_gates_position_fields(self):
        """Test that fix-dependent values are replaced with a placeholder."""
        snapshot = TelemetrySnapshot(gps_has_fix=False, altitude=120.4)
        altitude = derive(snapshot, ViewSelection.CURRENT).get('altitude')

        assert altitude.primary_value == "-"
        assert altitude.primary_value != "120.4 m"
        assert altitude.emphasis == Emphasis.MUTED

    def test_no_fix_all_gated_fields(self, unfixed):
        """Test every gated field without a fix and the ungated ones alongside."""
        view = derive(unfixed, ViewSelection.CURRENT)

        for key in ('altitude', 'speed', 'distance', 'latitude', 'longitude', 'heading'):
            field = view.get(key)
            assert field.primary_value == "-", key
            assert field.emphasis == Emphasis.MUTED, key
            assert field.secondary_value is None, key

        assert view.get('pressureAltitude').primary_value == "101.2 m"
        assert view.get('temperature').primary_value == "17.0 °C"
        assert view.get('verticalSpeed').primary_value == "-0.50 m/s"
        assert view.no_fix_warning is True

    def test_sink_is_negative(self):
        """Test vertical speed below zero is highlighted as sink."""
        snapshot = TelemetrySnapshot(gps_has_fix=True, vertical_speed=-1.23)
        field = derive(snapshot, ViewSelection.CURRENT).get('verticalSpeed')

        assert field.emphasis == Emphasis.NEGATIVE
        assert field.primary_value == "-1.23 m/s"

    def test_zero_climb_is_positive(self):
        """Test that zero vertical speed counts as climb."""
        field = derive(TelemetrySnapshot(vertical_speed=0.0), ViewSelection.CURRENT).get('verticalSpeed')
        assert field.emphasis == Emphasis.POSITIVE
        assert field.primary_value == "0.00 m/s"

    def test_tiny_sink_reads_as_zero(self):
        """Test that sink rounding to zero shows as 0.00 and not as sink."""
        field = derive(TelemetrySnapshot(vertical_speed=-0.001), ViewSelection.CURRENT).get('verticalSpeed')
        assert field.primary_value == "0.00 m/s"
        assert field.emphasis == Emphasis.POSITIVE

    def test_heading_degrees_wrap_at_north(self):
        """Test that a heading just below 360 shows 0 degrees next to N."""
        snapshot = TelemetrySnapshot(gps_has_fix=True, heading=359.6)
        heading = derive(snapshot, ViewSelection.CURRENT).get('heading')
        assert heading.primary_value == "N"
        assert heading.secondary_value == "0°"

    def test_absent_values_default_to_zero(self):
        """Test that missing numbers render as zero when they are shown."""
        view = derive(TelemetrySnapshot(gps_has_fix=True), ViewSelection.CURRENT)

        assert view.get('altitude').primary_value == "0.0 m"
        assert view.get('latitude').primary_value == "0.0000"
        assert view.get('verticalSpeed').primary_value == "0.00 m/s"

    def test_absent_heading_with_fix(self):
        """Test that a missing heading shows the unknown label."""
        heading = derive(TelemetrySnapshot(gps_has_fix=True), ViewSelection.CURRENT).get('heading')
        assert heading.primary_value == "-"
        assert heading.secondary_value is None

    def test_absent_fix_flag_means_no_fix(self):
        """Test that a snapshot without gpsHasFix is treated as unfixed."""
        view = derive(TelemetrySnapshot(altitude=100.0), ViewSelection.CURRENT)
        assert view.no_fix_warning is True
        assert view.get('altitude').primary_value == "-"


class TestMaxMinPage:
    """Test cases for the Max/Min page."""

    def test_fields_and_emphasis(self, fixed):
        """Test aggregate formatting and climb/sink emphasis."""
        view = derive(fixed, ViewSelection.MAXMIN)

        assert view.get('maxAltitude').primary_value == "812.0 m"
        assert view.get('minPressureAltitude').primary_value == "90.2 m"
        assert view.get('maxClimb').primary_value == "3.21 m/s"
        assert view.get('maxClimb').emphasis == Emphasis.POSITIVE
        assert view.get('maxSink').primary_value == "-2.50 m/s"
        assert view.get('maxSink').emphasis == Emphasis.NEGATIVE
        assert view.get('maxDistance').primary_value == "2100.0 m"
        assert view.get('distanceTravelled').primary_value == "5230.0 m"

    def test_not_gated_by_fix(self, unfixed):
        """Test that aggregates are shown even without a fix."""
        view = derive(unfixed, ViewSelection.MAXMIN)

        assert view.no_fix_warning is True
        assert all(field.primary_value != "-" for field in view)
        assert view.get('maxClimb').emphasis == Emphasis.POSITIVE
        assert view.get('maxSink').emphasis == Emphasis.NEGATIVE

    def test_emphasis_is_unconditional(self):
        """Test climb/sink emphasis does not depend on the sign."""
        snapshot = TelemetrySnapshot(max_climb=-0.1, max_sink=0.4)
        view = derive(snapshot, ViewSelection.MAXMIN)
        assert view.get('maxClimb').emphasis == Emphasis.POSITIVE
        assert view.get('maxSink').emphasis == Emphasis.NEGATIVE


class TestTrackPage:
    """Test cases for the Track page."""

    def test_running_track(self, fixed):
        """Test a running track with a known origin."""
        view = derive(fixed, ViewSelection.TRACK)

        state = view.get('isTrackRunning')
        assert state.primary_value == "Recording"
        assert state.emphasis == Emphasis.POSITIVE
        # 1700003723000 - 1700000060000 ms
        assert view.get('trackDuration').primary_value == "1:01:03"
        assert view.get('distance').primary_value == "1523.5 m"
        assert view.get('initialLatitude').primary_value == "51.1234"
        assert view.get('initialLongitude').primary_value == "-1.5678"

    def test_stopped_track_uses_stop_time(self):
        """Test the duration of a finished track."""
        snapshot = TelemetrySnapshot(
            is_track_running=False,
            track_start_time=1000.0,
            track_stop_time=91000.0,
            current_system_time=500000.0,
        )
        view = derive(snapshot, ViewSelection.TRACK)
        assert view.get('isTrackRunning').primary_value == "Stopped"
        assert view.get('isTrackRunning').emphasis == Emphasis.MUTED
        assert view.get('trackDuration').primary_value == "0:01:30"

    def test_never_started(self, unfixed):
        """Test placeholders before any track or origin exists."""
        view = derive(unfixed, ViewSelection.TRACK)

        assert view.get('trackDuration').primary_value == "-"
        assert view.get('distance').primary_value == "-"
        assert view.get('initialLatitude').emphasis == Emphasis.MUTED
        assert view.get('initialLongitude').primary_value == "-"


class TestInfoPage:
    """Test cases for the Info page."""

    def test_info_with_fix(self, fixed):
        """Test device information with a fix."""
        view = derive(fixed, ViewSelection.INFO)

        assert view.get('gpsHasFix').primary_value == "Locked"
        assert view.get('gpsHasFix').emphasis == Emphasis.POSITIVE
        assert view.get('varioAudioOn').primary_value == "On"
        assert view.get('gpsTime').primary_value == "2024-05-01 11.02.03"
        assert view.get('uptime').primary_value == "1:02:03"
        assert view.get('pressure').primary_value == "960.5 hPa"

    def test_info_without_fix(self, unfixed):
        """Test device information before the GPS has a fix."""
        view = derive(unfixed, ViewSelection.INFO)

        assert view.get('gpsHasFix').primary_value == "No fix"
        assert view.get('gpsHasFix').emphasis == Emphasis.NEGATIVE
        assert view.get('varioAudioOn').primary_value == "Off"
        assert view.get('varioAudioOn').emphasis == Emphasis.MUTED
        assert view.get('gpsTime').primary_value == "-"
        assert view.get('uptime').primary_value == "-"


class TestPageSwitching:
    """Test cases for switching pages over a fixed snapshot."""

    def test_switching_changes_fields_not_state(self, fixed):
        """Test that derivation reads the state without touching it."""
        state = PollerState()
        state._apply_success(fixed)
        before = (state.latest_snapshot, state.is_fetching, state.last_update_time,
                  state.fetch_count, state.failure_count)

        current = derive(state.latest_snapshot, ViewSelection.CURRENT)
        maxmin = derive(state.latest_snapshot, ViewSelection.MAXMIN)

        assert current.keys() != maxmin.keys()
        assert current.page == ViewSelection.CURRENT
        assert maxmin.page == ViewSelection.MAXMIN
        after = (state.latest_snapshot, state.is_fetching, state.last_update_time,
                 state.fetch_count, state.failure_count)
        assert after == before
        assert state.latest_snapshot is fixed

    def test_derive_is_repeatable(self, fixed):
        """Test that deriving twice gives equal results."""
        assert derive(fixed, ViewSelection.TRACK) == derive(fixed, ViewSelection.TRACK)


class TestFormatting:
    """Test cases for the formatting helpers."""

    def test_format_number(self):
        assert format_number(120.44, 1, "m") == "120.4 m"
        assert format_number(-1.234, 2, "m/s") == "-1.23 m/s"
        assert format_number(51.123456, 4) == "51.1235"

    def test_negative_zero(self):
        """Test that negative zero prints without a sign."""
        assert format_number(-0.0, 2, "m/s") == "0.00 m/s"
        assert format_number(-0.004, 2, "m/s") == "0.00 m/s"
        assert format_number(-0.04, 1, "m") == "0.0 m"
        assert format_number(-0.006, 2, "m/s") == "-0.01 m/s"

    def test_format_duration(self):
        assert format_duration(0) == "0:00:00"
        assert format_duration(59999) == "0:00:59"
        assert format_duration(3723000) == "1:02:03"
        assert format_duration(-5000) == "0:00:00"
