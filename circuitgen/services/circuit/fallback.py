"""Deterministic geometric circuits used when the AI designer is unavailable."""
from __future__ import annotations

import time
from typing import List

from circuitgen.services.route.geometry import project_point

from .candidate import CandidateRoute

# Conservative radius, as a share of target distance
FALLBACK_RADIUS_RATIO = 0.15

FALLBACK_PATTERNS = [
    {"name": "Square Loop", "angles": [0, 90, 180, 270], "type": "square"},
    {"name": "Pentagon Circuit", "angles": [0, 72, 144, 216, 288], "type": "pentagon"},
    {"name": "Hexagon Loop", "angles": [0, 60, 120, 180, 240, 300], "type": "hexagon"},
    {"name": "North-South Oval", "angles": [0, 45, 135, 180, 225, 315], "type": "oval"},
    {"name": "East-West Oval", "angles": [90, 135, 225, 270, 315, 45], "type": "oval"},
]


def generate_fallback_circuits(
    start_lat: float, start_lng: float, target_distance_km: float
) -> List[CandidateRoute]:
    """Project each pattern's bearings at a fixed radius around the start."""
    radius_km = target_distance_km * FALLBACK_RADIUS_RATIO
    timestamp = int(time.time() * 1000)

    return [
        CandidateRoute(
            id=f"fallback_{timestamp}_{idx}",
            name=pattern["name"],
            waypoints=[
                project_point((start_lat, start_lng), angle, radius_km)
                for angle in pattern["angles"]
            ],
            reasoning=f"Geometric {pattern['type']} pattern as fallback",
            estimated_distance=target_distance_km,
            circuit_type=pattern["type"],
        )
        for idx, pattern in enumerate(FALLBACK_PATTERNS)
    ]
