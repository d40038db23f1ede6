"""Prompt templates for the AI circuit designer."""
from __future__ import annotations

from textwrap import dedent
from typing import Dict, List

# Google street routing typically inflates straight-line spacing 2-3x
WAYPOINT_SPACING_RATIO = 0.18
CANDIDATE_COUNT = 10

SYSTEM_PROMPT = dedent(
    """
    You are an expert running route designer specializing in circular loop routes. You understand geography, street patterns, and how to create safe, interesting circuits that return to where they started.
    """
).strip()

CIRCUIT_DESIGN_PROMPT = dedent(
    """
    Design {count} DIVERSE circuit routes for {activity} that form TRUE LOOPS returning to the start point.

    LOCATION: {lat}, {lng}
    TARGET DISTANCE: {distance}km
    NEARBY FEATURES:
    {features}

    Follow these rules strictly:
    - Each route MUST be a loop: the last waypoint must be within 200m of the start.
    - Use 4-6 waypoints per route.
    - Space waypoints approximately {spacing}km apart; street routing adds 2-3x distance.
    - Spread waypoints out from the start and use the full search area; avoid small tight loops.
    - Vary direction, size and pattern across routes; prefer parks, trails and waterfront where available.

    Patterns to use, with varied sizes:
    - Clockwise and counter-clockwise loops: 4-5 routes with LARGE radius (waypoints 60-80% of search distance from start), 3-4 with MEDIUM radius (40-60%).
    - Figure-8 patterns made of two distinct loops.
    - Elongated ovals running north-south or east-west.
    - Square or pentagon patterns with corners in different compass directions.

    Respond with a JSON object of this shape and nothing else:
    {{
      "routes": [
        {{
          "name": "Descriptive route name",
          "waypoints": [{{"lat": number, "lng": number}}, ...],
          "reasoning": "Why this route forms a good circuit",
          "estimatedDistance": {distance},
          "circuitType": "clockwise-loop" | "counter-clockwise-loop" | "figure-8" | "oval" | "square" | "pentagon"
        }}
      ]
    }}
    Return exactly {count} routes. Waypoints must form actual loops, not straight lines.
    """
).strip()

NO_FEATURES_HINT = "No specific features found - design routes using street grid patterns"


def format_features(features: List[Dict]) -> str:
    if not features:
        return NO_FEATURES_HINT
    return "\n".join(
        f"- {f['name']} ({f.get('type', 'feature')}) at {f['location']['lat']},{f['location']['lng']}"
        for f in features
    )


def build_circuit_prompt(
    start_lat: float,
    start_lng: float,
    target_distance_km: float,
    features: List[Dict],
    activity_type: str = "run",
) -> str:
    activity = "walkers" if activity_type == "walk" else "runners"
    return CIRCUIT_DESIGN_PROMPT.format(
        count=CANDIDATE_COUNT,
        activity=activity,
        lat=start_lat,
        lng=start_lng,
        distance=target_distance_km,
        spacing=f"{target_distance_km * WAYPOINT_SPACING_RATIO:.2f}",
        features=format_features(features),
    )
