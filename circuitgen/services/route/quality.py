"""
Circuit quality scoring - loop closure, backtracking, angular coverage,
elevation profile and difficulty classification for routed polylines
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence

from circuitgen.services.route.geometry import Coordinate, haversine_km

# A route ending this far (km) or further from the start has no loop quality
LOOP_CLOSURE_LIMIT_KM = 0.5

# Grid cell size (degrees) used to discretize polylines for backtrack detection
BACKTRACK_GRID_SIZE = 0.0003
MIN_POINTS_FOR_BACKTRACK = 10

SECTOR_WIDTH_DEGREES = 30
MIN_POINTS_FOR_SPREAD = 5
# Points this close (degrees, on both axes) to the start carry no bearing
START_PROXIMITY_DEGREES = 0.0001

MAX_ELEVATION_SAMPLES = 50
# Sample pairs closer than this (meters) are ignored for gradients
MIN_GRADIENT_RUN_M = 5

HARD_ELEVATION_GAIN_M = 150
HARD_BACKTRACK_RATIO = 0.3
MODERATE_ELEVATION_GAIN_M = 75
MODERATE_BACKTRACK_RATIO = 0.2


@dataclass(frozen=True)
class ElevationProfile:
    """Elevation summary along a route"""

    gain: float = 0
    loss: float = 0
    max_gradient_percent: float = 0
    max_gradient_degrees: float = 0


def loop_quality_from_distance(closing_distance_km: float) -> float:
    return max(0.0, 1 - (closing_distance_km / LOOP_CLOSURE_LIMIT_KM))


def calculate_loop_quality(start: Coordinate, points: Sequence[Coordinate]) -> float:
    """How well the route closes: 1.0 ends exactly at start, 0 at 500m or more."""
    if len(points) < 2:
        return 0.0
    return loop_quality_from_distance(haversine_km(start, points[-1]))


def _grid_cell(point: Coordinate) -> tuple:
    return (
        round(point[0] / BACKTRACK_GRID_SIZE),
        round(point[1] / BACKTRACK_GRID_SIZE),
    )


def calculate_backtrack_ratio(points: Sequence[Coordinate]) -> float:
    """
    Fraction of directed grid segments that are also travelled in reverse.

    The polyline is snapped to a ~30m grid; consecutive points in different
    cells form a directed segment. A segment counts as backtracked when the
    opposite direction appears anywhere in the path ("there and back").
    """
    if len(points) < MIN_POINTS_FOR_BACKTRACK:
        return 0.0

    segments = []
    for current, following in zip(points, points[1:]):
        g1 = _grid_cell(current)
        g2 = _grid_cell(following)
        if g1 != g2:
            segments.append((g1, g2))

    if not segments:
        return 0.0

    segment_set = set(segments)
    backtrack_count = sum(1 for g1, g2 in segments if (g2, g1) in segment_set)

    return backtrack_count / len(segments)


def calculate_angular_spread(points: Sequence[Coordinate], start: Coordinate) -> float:
    """Degrees of 30° sectors around the start visited by the route."""
    if len(points) < MIN_POINTS_FOR_SPREAD:
        return 0.0

    start_lat, start_lng = start
    sectors = set()
    for lat, lng in points:
        d_lat = lat - start_lat
        d_lng = lng - start_lng
        if abs(d_lat) < START_PROXIMITY_DEGREES and abs(d_lng) < START_PROXIMITY_DEGREES:
            continue

        bearing = math.degrees(math.atan2(d_lng, d_lat)) % 360
        sectors.add(int(bearing // SECTOR_WIDTH_DEGREES))

    return float(len(sectors) * SECTOR_WIDTH_DEGREES)


def sample_elevation_points(
    points: Sequence[Coordinate], max_samples: int = MAX_ELEVATION_SAMPLES
) -> List[Coordinate]:
    """Evenly thin the polyline to at most max_samples points, keeping the first."""
    if not points:
        return []
    stride = max(1, math.ceil(len(points) / max_samples))
    return list(points[::stride])


def compute_elevation_profile(
    samples: Sequence[Coordinate], elevations: Sequence[float]
) -> ElevationProfile:
    """
    Accumulate gain/loss and the steepest gradient between consecutive samples.

    Args:
        samples: Sampled coordinates, in route order
        elevations: Elevation in meters for each sample

    Returns:
        ElevationProfile with gain/loss rounded to meters and gradients to 0.1
    """
    pairs = list(zip(samples, elevations))
    if len(pairs) < 2:
        return ElevationProfile()

    total_gain = 0.0
    total_loss = 0.0
    max_gradient_percent = 0.0

    for (prev_point, prev_elev), (point, elev) in zip(pairs, pairs[1:]):
        elev_diff = elev - prev_elev
        if elev_diff > 0:
            total_gain += elev_diff
        else:
            total_loss += abs(elev_diff)

        horizontal_m = haversine_km(prev_point, point) * 1000
        if horizontal_m > MIN_GRADIENT_RUN_M:
            gradient_percent = abs(elev_diff / horizontal_m) * 100
            max_gradient_percent = max(max_gradient_percent, gradient_percent)

    max_gradient_degrees = math.degrees(math.atan(max_gradient_percent / 100))

    return ElevationProfile(
        gain=round(total_gain),
        loss=round(total_loss),
        max_gradient_percent=round(max_gradient_percent, 1),
        max_gradient_degrees=round(max_gradient_degrees, 1),
    )


def determine_difficulty(elevation_gain: float, backtrack_ratio: float) -> str:
    if elevation_gain > HARD_ELEVATION_GAIN_M or backtrack_ratio > HARD_BACKTRACK_RATIO:
        return "hard"
    if (
        elevation_gain > MODERATE_ELEVATION_GAIN_M
        or backtrack_ratio > MODERATE_BACKTRACK_RATIO
    ):
        return "moderate"
    return "easy"
