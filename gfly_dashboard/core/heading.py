"""
Compass heading classification for GFly Dashboard.
"""

from typing import List, Optional, Tuple

from ..config.constants import (
    COMPASS_LABELS, COMPASS_FIRST_BOUNDARY, COMPASS_BUCKET_WIDTH, UNKNOWN_HEADING
)

# (lower bound inclusive, upper bound exclusive, label) for NNE..NNW.
# Bounds are exact binary fractions, so comparisons are exact.
_BUCKETS: List[Tuple[float, float, str]] = [
    (COMPASS_FIRST_BOUNDARY + (k - 1) * COMPASS_BUCKET_WIDTH,
     COMPASS_FIRST_BOUNDARY + k * COMPASS_BUCKET_WIDTH,
     COMPASS_LABELS[k])
    for k in range(1, len(COMPASS_LABELS))
]


def classify(heading_degrees: Optional[float]) -> str:
    """
    Map a bearing in degrees to one of the 16 compass labels.

    Values below 11.25 and at or above 348.75 are "N". Values outside
    [0, 360) are not normalized, so they (and NaN) also land on "N".

    Args:
        heading_degrees: Bearing in degrees, or None when unknown

    Returns:
        str: Compass label, or "-" when the heading is unknown
    """
    if heading_degrees is None:
        return UNKNOWN_HEADING

    for lower, upper, label in _BUCKETS:
        if lower <= heading_degrees < upper:
            return label
    return COMPASS_LABELS[0]
