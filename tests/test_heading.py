"""
Tests for compass heading classification.
"""

import math
import pytest
from gfly_dashboard.core.heading import classify
from gfly_dashboard.config.constants import COMPASS_LABELS


class TestClassify:
    """Test cases for classify."""

    def test_absent_heading(self):
        """Test that an unknown heading renders as a dash."""
        assert classify(None) == "-"

    def test_north_boundaries(self):
        """Test the sharp boundaries of the wraparound bucket."""
        assert classify(11.249) == "N"
        assert classify(11.25) == "NNE"
        assert classify(348.749) == "NNW"
        assert classify(348.75) == "N"

    def test_zero_and_just_below_360(self):
        """Test both ends of the valid range map to north."""
        assert classify(0.0) == "N"
        assert classify(359.999) == "N"

    @pytest.mark.parametrize("heading,label", [
        (22.5, "NNE"), (45.0, "NE"), (67.5, "ENE"), (90.0, "E"),
        (112.5, "ESE"), (135.0, "SE"), (157.5, "SSE"), (180.0, "S"),
        (202.5, "SSW"), (225.0, "SW"), (247.5, "WSW"), (270.0, "W"),
        (292.5, "WNW"), (315.0, "NW"), (337.5, "NNW"),
    ])
    def test_bucket_centres(self, heading, label):
        """Test the centre of every non-north bucket."""
        assert classify(heading) == label

    def test_lower_bounds_are_inclusive(self):
        """Test every bucket starts exactly on its boundary."""
        for k in range(1, 16):
            lower = 11.25 + (k - 1) * 22.5
            assert classify(lower) == COMPASS_LABELS[k]
            assert classify(lower - 0.001) == COMPASS_LABELS[k - 1]

    def test_every_heading_gets_one_label(self):
        """Test that a sweep over [0, 360) only yields the 16 labels."""
        seen = {classify(tenth / 10.0) for tenth in range(3600)}
        assert seen == set(COMPASS_LABELS)

    def test_out_of_range_not_normalized(self):
        """Test values outside [0, 360) fall through to north."""
        assert classify(-90.0) == "N"
        assert classify(360.0) == "N"
        assert classify(450.0) == "N"
        assert classify(math.nan) == "N"
