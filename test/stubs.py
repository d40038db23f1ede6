"""Hand-written collaborators shared by the pipeline tests."""
from typing import Dict, List, Optional, Tuple

import polyline

from circuitgen.services.map.map_service import DirectionsResult, MapService
from circuitgen.services.route.geometry import project_point

LONDON = (51.5074, -0.1278)


def loop_points(start=LONDON, radius_km: float = 0.8, step: int = 5):
    """Circle that starts and ends at `start`, lying north of it."""
    center = project_point(start, 0, radius_km)
    return [
        project_point(center, (180 + angle) % 360, radius_km)
        for angle in range(0, 361, step)
    ]


def loop_polyline(start=LONDON, radius_km: float = 0.8) -> str:
    return polyline.encode(loop_points(start, radius_km), 5)


def ok_directions(distance_km: float, encoded: Optional[str] = None) -> DirectionsResult:
    return DirectionsResult(
        success=True,
        distance_km=distance_km,
        duration_min=round(distance_km * 12),
        polyline=encoded or loop_polyline(),
        instructions=["Head north on Whitehall"],
        turn_instructions=[
            {"instruction": "Head north on Whitehall", "lat": LONDON[0], "lng": LONDON[1], "distance": 0}
        ],
    )


class StubMapService(MapService):
    def __init__(
        self,
        *,
        directions: Optional[List[DirectionsResult]] = None,
        gains: Optional[List[float]] = None,
        places: Optional[List[Dict]] = None,
        places_error: Optional[Exception] = None,
        directions_error: Optional[Exception] = None,
        elevation_error: Optional[Exception] = None,
    ):
        self.directions = list(directions or [])
        self.gains = list(gains or [])
        self.places = places or []
        self.places_error = places_error
        self.directions_error = directions_error
        self.elevation_error = elevation_error
        self.place_calls: List[Tuple] = []
        self.direction_calls: List[Tuple] = []
        self.elevation_calls: List[List] = []

    async def find_nearby_places(self, center, radius_km, categories):
        self.place_calls.append((center, radius_km, categories))
        if self.places_error:
            raise self.places_error
        return [dict(place, category=categories[0]) for place in self.places]

    async def get_directions(self, origin, waypoints=None):
        self.direction_calls.append((origin, waypoints))
        if self.directions_error:
            raise self.directions_error
        if self.directions:
            return self.directions.pop(0)
        return DirectionsResult.failed("ZERO_RESULTS")

    async def get_elevations(self, points):
        self.elevation_calls.append(points)
        if self.elevation_error:
            raise self.elevation_error
        gain = self.gains.pop(0) if self.gains else 0
        last = max(1, len(points) - 1)
        return [gain * i / last for i in range(len(points))]


class StubLLMClient:
    def __init__(self, payload=None, *, error: Optional[Exception] = None):
        self.payload = payload
        self.error = error
        self.prompts: List[str] = []

    def design(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.payload


def designed_routes(count: int = 10, start=LONDON) -> Dict:
    routes = []
    for idx in range(count):
        routes.append(
            {
                "name": f"Circuit {idx}",
                "waypoints": [
                    {"lat": lat, "lng": lng}
                    for lat, lng in (
                        project_point(start, bearing + idx * 7, 0.9)
                        for bearing in (0, 90, 180, 270)
                    )
                ],
                "reasoning": "Follows the river then loops back through the park",
                "estimatedDistance": 5,
                "circuitType": "clockwise-loop",
            }
        )
    return {"routes": routes}
