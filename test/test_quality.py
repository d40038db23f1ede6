import math

import pytest

from circuitgen.services.route.geometry import project_point
from circuitgen.services.route.quality import (
    ElevationProfile,
    calculate_angular_spread,
    calculate_backtrack_ratio,
    calculate_loop_quality,
    compute_elevation_profile,
    determine_difficulty,
    loop_quality_from_distance,
    sample_elevation_points,
)
from stubs import LONDON, loop_points


def _spur(start, bearing, segments, spacing_km=0.1):
    """Out-and-back path from start: out along bearing, then the same points back."""
    out = [project_point(start, bearing, spacing_km * i) for i in range(1, segments + 1)]
    return out + list(reversed(out[:-1])) + [start]


def test_loop_quality_endpoints():
    assert loop_quality_from_distance(0) == 1.0
    assert loop_quality_from_distance(0.5) == 0.0
    assert loop_quality_from_distance(0.25) == pytest.approx(0.5)


@pytest.mark.parametrize("closing_km", [0.6, 1.0, 25.0])
def test_loop_quality_is_clamped_at_zero(closing_km):
    assert loop_quality_from_distance(closing_km) == 0.0


def test_loop_quality_decreases_with_closing_distance():
    values = [loop_quality_from_distance(d / 10) for d in range(0, 8)]
    assert values == sorted(values, reverse=True)


def test_calculate_loop_quality_closed_and_open_routes():
    points = loop_points()
    assert calculate_loop_quality(LONDON, points) == pytest.approx(1.0, abs=1e-6)

    open_route = points[: len(points) // 2]  # ends on the far side of the circle
    assert calculate_loop_quality(LONDON, open_route) == 0.0
    assert calculate_loop_quality(LONDON, [LONDON]) == 0.0


def test_backtrack_ratio_zero_for_clean_loop():
    assert calculate_backtrack_ratio(loop_points()) == 0.0


def test_backtrack_ratio_full_out_and_back():
    path = [LONDON] + _spur(LONDON, 180, 12)
    assert calculate_backtrack_ratio(path) == pytest.approx(1.0)


def test_backtrack_ratio_grows_with_out_and_back_segments():
    loop = loop_points()
    ratios = [calculate_backtrack_ratio(loop)]
    for segments in (2, 5, 10, 20):
        ratios.append(calculate_backtrack_ratio(loop + _spur(LONDON, 180, segments)))

    assert ratios[0] == 0.0
    assert all(a < b for a, b in zip(ratios, ratios[1:]))
    assert all(0 <= r <= 1 for r in ratios)


def test_backtrack_ratio_needs_ten_points():
    assert calculate_backtrack_ratio([LONDON] + _spur(LONDON, 90, 3)) == 0.0


def test_angular_spread_full_circle_around_start():
    ring = [project_point(LONDON, bearing, 1.0) for bearing in range(0, 360, 5)]
    assert calculate_angular_spread(ring, LONDON) == 360


def test_angular_spread_single_direction():
    line = [project_point(LONDON, 10, 0.2 * i) for i in range(1, 10)]
    assert calculate_angular_spread(line, LONDON) == 30


def test_angular_spread_ignores_points_at_start_and_short_routes():
    assert calculate_angular_spread([LONDON] * 10, LONDON) == 0
    assert calculate_angular_spread(loop_points()[:4], LONDON) == 0


def test_sample_elevation_points_caps_at_fifty():
    points = [project_point(LONDON, 0, 0.01 * i) for i in range(120)]
    samples = sample_elevation_points(points)
    assert len(samples) <= 50
    assert samples[0] == points[0]

    short = points[:10]
    assert sample_elevation_points(short) == short
    assert sample_elevation_points([]) == []


def test_compute_elevation_profile_gain_loss_and_gradient():
    samples = [project_point(LONDON, 0, 0.1 * i) for i in range(4)]
    profile = compute_elevation_profile(samples, [0, 10, 5, 15])

    assert profile.gain == 20
    assert profile.loss == 5
    assert profile.max_gradient_percent == pytest.approx(10.0)
    assert profile.max_gradient_degrees == pytest.approx(
        round(math.degrees(math.atan(0.1)), 1)
    )


def test_compute_elevation_profile_ignores_very_close_samples():
    samples = [LONDON, project_point(LONDON, 0, 0.002), project_point(LONDON, 0, 0.102)]
    profile = compute_elevation_profile(samples, [0, 3, 4])

    assert profile.gain == 4
    assert profile.max_gradient_percent == pytest.approx(1.0)


def test_compute_elevation_profile_needs_two_samples():
    assert compute_elevation_profile([LONDON], [12.0]) == ElevationProfile()
    assert compute_elevation_profile([], []) == ElevationProfile()


@pytest.mark.parametrize(
    "gain, backtrack, expected",
    [
        (200, 0.1, "hard"),
        (100, 0.1, "moderate"),
        (50, 0.1, "easy"),
        (0, 0.35, "hard"),
        (0, 0.25, "moderate"),
        (150, 0.0, "moderate"),
        (75, 0.2, "easy"),
    ],
)
def test_determine_difficulty(gain, backtrack, expected):
    assert determine_difficulty(gain, backtrack) == expected
