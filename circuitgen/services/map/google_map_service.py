import html
import logging
import re
from typing import Dict, List, Optional, Tuple

import httpx

from circuitgen.config import settings
from circuitgen.services.map.api_counter import APICounter, api_counter
from circuitgen.services.map.map_service import (
    DirectionsResult,
    MapService,
    MapServiceError,
)
from circuitgen.services.route.geometry import haversine_km

logger = logging.getLogger(__name__)

_HTML_TAG = re.compile(r"<[^>]*>")


class GoogleMapService(MapService):
    """Google Maps web services implementation (Places, Directions, Elevation)"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
        counter: Optional[APICounter] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.google_maps_api_key
        self.nearby_search_url = (
            "https://maps.googleapis.com/maps/api/place/nearbysearch/json"
        )
        self.directions_url = "https://maps.googleapis.com/maps/api/directions/json"
        self.elevation_url = "https://maps.googleapis.com/maps/api/elevation/json"
        self.timeout = timeout or settings.google_request_timeout_s
        self._client = client
        self._counter = counter or api_counter

    async def find_nearby_places(
        self, center: Tuple[float, float], radius_km: float, categories: List[str]
    ) -> List[Dict]:
        """Search nearby places with the Places Nearby Search web service, one type per request"""
        center_lat, center_lng = center
        radius_m = radius_km * 1000  # Convert to meters

        places: List[Dict] = []
        for category in categories:
            data = await self._get_json(
                self.nearby_search_url,
                {
                    "location": f"{center_lat},{center_lng}",
                    "radius": radius_m,
                    "type": category,
                },
                api_name="Places API",
            )

            status = data.get("status")
            if status == "ZERO_RESULTS":
                continue
            if status != "OK":
                raise MapServiceError(
                    f"Places API returned {status}{self._error_detail(data)}"
                )

            places.extend(
                self._convert_places_to_standard_format(
                    data.get("results", []), center, category
                )
            )

        return places

    async def get_directions(
        self,
        origin: Tuple[float, float],
        waypoints: List[Tuple[float, float]] = None,
    ) -> DirectionsResult:
        """Get a walking round trip from the Directions API - origin and destination are the same"""
        origin_str = f"{origin[0]},{origin[1]}"
        params = {
            "origin": origin_str,
            "destination": origin_str,
            "mode": "walking",
            "alternatives": "true",
        }
        if waypoints:
            params["waypoints"] = "|".join(f"{lat},{lng}" for lat, lng in waypoints)

        data = await self._get_json(self.directions_url, params, api_name="Directions API")

        status = data.get("status")
        if status != "OK" or not data.get("routes"):
            return DirectionsResult.failed(status or "NO_ROUTES")

        return self._convert_directions_response(data)

    async def get_elevations(self, points: List[Tuple[float, float]]) -> List[float]:
        """Look up elevation at the exact sampled locations"""
        if not points:
            return []

        data = await self._get_json(
            self.elevation_url,
            {"locations": "|".join(f"{lat},{lng}" for lat, lng in points)},
            api_name="Elevation API",
        )

        status = data.get("status")
        if status != "OK" or not data.get("results"):
            raise MapServiceError(
                f"Elevation API returned {status}{self._error_detail(data)}"
            )

        return [float(result["elevation"]) for result in data["results"]]

    async def _get_json(self, url: str, params: Dict, *, api_name: str) -> Dict:
        if not self.api_key:
            raise MapServiceError("Google Maps API key is not configured")

        # Check API call limit
        if not self._counter.can_make_call():
            raise MapServiceError(
                f"API call limit exceeded. Max calls per day: {self._counter.max_calls_per_day}"
            )

        query = dict(params, key=self.api_key)
        try:
            if self._client is not None:
                response = await self._client.get(url, params=query, timeout=self.timeout)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(url, params=query, timeout=self.timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            if status_code == 429:
                raise MapServiceError("API quota exceeded") from e
            if status_code == 403:
                raise MapServiceError(f"API key invalid or {api_name} not enabled") from e
            raise MapServiceError(f"{api_name} error: {status_code}") from e
        except httpx.HTTPError as e:
            raise MapServiceError(f"{api_name} request failed: {e}") from e

        # Record API call
        self._counter.record_call()

        try:
            return response.json()
        except ValueError as e:
            raise MapServiceError(f"{api_name} returned invalid JSON") from e

    @staticmethod
    def _error_detail(data: Dict) -> str:
        message = data.get("error_message")
        return f" - {message}" if message else ""

    def _convert_directions_response(self, data: Dict) -> DirectionsResult:
        """Sum legs and flatten step instructions of the first route"""
        route = data["routes"][0]

        total_distance_m = 0
        total_duration_s = 0
        instructions: List[str] = []
        turn_instructions: List[Dict] = []

        for leg in route.get("legs", []):
            # Steps of this leg start where the previous legs ended
            step_start_m = total_distance_m
            for step in leg.get("steps", []):
                text = self._strip_html(step.get("html_instructions", ""))
                start_location = step.get("start_location", {})
                instructions.append(text)
                turn_instructions.append(
                    {
                        "instruction": text,
                        "lat": start_location.get("lat", 0.0),
                        "lng": start_location.get("lng", 0.0),
                        "distance": step_start_m,
                    }
                )
                step_start_m += step.get("distance", {}).get("value", 0)

            total_distance_m += leg.get("distance", {}).get("value", 0)
            total_duration_s += leg.get("duration", {}).get("value", 0)

        return DirectionsResult(
            success=True,
            distance_km=total_distance_m / 1000,
            duration_min=round(total_duration_s / 60),
            polyline=route.get("overview_polyline", {}).get("points", ""),
            instructions=instructions,
            turn_instructions=turn_instructions,
        )

    @staticmethod
    def _strip_html(text: str) -> str:
        return html.unescape(_HTML_TAG.sub("", text)).strip()

    def _convert_places_to_standard_format(
        self, places: List[Dict], center: Tuple[float, float], category: str
    ) -> List[Dict]:
        """Convert Places Nearby Search results to standard format"""
        converted_places = []

        for place in places:
            name = place.get("name", "Unknown Place")
            location = place.get("geometry", {}).get("location", {})
            lat = location.get("lat", 0.0)
            lng = location.get("lng", 0.0)
            types = place.get("types") or [category]

            converted_places.append(
                {
                    "place_id": place.get("place_id", ""),
                    "name": name,
                    "location": {"lat": lat, "lng": lng},
                    "type": types[0],
                    "category": category,
                    "rating": place.get("rating"),
                    "distance_km": round(haversine_km(center, (lat, lng)), 2),
                }
            )

        return converted_places
