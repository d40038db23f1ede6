import logging
from typing import Dict, List, Optional, Tuple

from circuitgen.models.response import (
    CircuitQuality,
    EnhancedRoute,
    LatLng,
    TurnInstruction,
)
from circuitgen.services.circuit import CandidateRoute, CircuitDesignerService
from circuitgen.services.map.google_map_service import GoogleMapService
from circuitgen.services.map.map_service import MapService
from circuitgen.services.route.geometry import Coordinate, decode_polyline
from circuitgen.services.route.quality import (
    ElevationProfile,
    calculate_angular_spread,
    calculate_backtrack_ratio,
    calculate_loop_quality,
    compute_elevation_profile,
    determine_difficulty,
    sample_elevation_points,
)
from circuitgen.services.route.selection import distance_error, passes_quality_filter

logger = logging.getLogger(__name__)

FEATURE_CATEGORIES = ["park", "point_of_interest", "natural_feature"]
# Feature search radius, as a share of target distance
FEATURE_SEARCH_RADIUS_RATIO = 0.4
MAX_NEARBY_FEATURES = 20


class RouteGenerationService:
    """
    Route generation service - discovers nearby features, asks the designer for
    candidate circuits and turns each one into a scored, street-following route
    """

    def __init__(
        self,
        map_service: Optional[MapService] = None,
        designer: Optional[CircuitDesignerService] = None,
    ):
        if map_service:
            self.map_service = map_service
        else:
            self.map_service = GoogleMapService()
        self.designer = designer or CircuitDesignerService()

    async def discover_nearby_features(
        self, center: Tuple[float, float], target_distance_km: float
    ) -> List[Dict]:
        """
        Search parks, points of interest and natural features around the start.

        Failures are not fatal: a category that cannot be searched contributes
        nothing, so the designer may receive an empty list.
        """
        search_radius_km = target_distance_km * FEATURE_SEARCH_RADIUS_RATIO
        features: List[Dict] = []

        for category in FEATURE_CATEGORIES:
            try:
                places = await self.map_service.find_nearby_places(
                    center=center, radius_km=search_radius_km, categories=[category]
                )
                features.extend(places)
            except Exception as e:
                logger.warning("⚠️ Error searching %s: %s", category, e)
                continue

        logger.info("📍 Found %d nearby features for AI context", len(features))
        return features[:MAX_NEARBY_FEATURES]

    async def generate_candidate_routes(
        self,
        start_lat: float,
        start_lng: float,
        target_distance_km: float,
        activity_type: str = "run",
    ) -> List[EnhancedRoute]:
        """
        Build every candidate circuit that passes the quality filter.

        Steps:
        1. Discover nearby features for AI context
        2. Design candidate circuits (AI, or geometric fallback)
        3. Route each candidate with the directions provider
        4. Score loop shape, filter, then fetch elevation for survivors

        Returns:
            Unordered list of scored routes, possibly empty
        """
        start = (start_lat, start_lng)

        features = await self.discover_nearby_features(start, target_distance_km)
        candidates = await self.designer.design_circuits(
            start_lat, start_lng, target_distance_km, features, activity_type
        )
        logger.info("🎨 Designed %d circuit routes", len(candidates))

        routes: List[EnhancedRoute] = []
        for candidate in candidates:
            try:
                route = await self.execute_candidate(start, candidate, target_distance_km)
            except Exception as e:
                logger.error("❌ Error processing %s: %s", candidate.name, e)
                continue
            if route is not None:
                routes.append(route)

        logger.info("📊 Generated %d valid routes", len(routes))
        return routes

    async def execute_candidate(
        self, start: Coordinate, candidate: CandidateRoute, target_distance_km: float
    ) -> Optional[EnhancedRoute]:
        """Route one candidate and score it; None when it fails or is filtered out."""
        directions = await self.map_service.get_directions(
            origin=start, waypoints=candidate.waypoints
        )
        if not directions.success:
            logger.warning("⚠️ %s: directions failed (%s)", candidate.name, directions.error)
            return None

        points = decode_polyline(directions.polyline)
        loop_quality = calculate_loop_quality(start, points)
        backtrack_ratio = calculate_backtrack_ratio(points)
        error = distance_error(directions.distance_km, target_distance_km)

        if not passes_quality_filter(
            directions.distance_km, target_distance_km, backtrack_ratio, loop_quality
        ):
            logger.info(
                "❌ %s: Filtered (distance=%.2f, backtrack=%.2f, loop=%.2f)",
                candidate.name,
                error,
                backtrack_ratio,
                loop_quality,
            )
            return None

        elevation = await self.fetch_elevation(points)

        logger.info(
            "✅ %s: %.1fkm, loop=%.2f, backtrack=%.0f%%",
            candidate.name,
            directions.distance_km,
            loop_quality,
            backtrack_ratio * 100,
        )

        return EnhancedRoute(
            id=candidate.id,
            name=candidate.name,
            distance=round(directions.distance_km, 1),
            duration=directions.duration_min,
            polyline=directions.polyline,
            waypoints=[LatLng(lat=lat, lng=lng) for lat, lng in candidate.waypoints],
            difficulty=determine_difficulty(elevation.gain, backtrack_ratio),
            elevation_gain=elevation.gain,
            elevation_loss=elevation.loss,
            max_gradient_percent=elevation.max_gradient_percent,
            max_gradient_degrees=elevation.max_gradient_degrees,
            instructions=list(directions.instructions),
            turn_instructions=[
                TurnInstruction(**step) for step in directions.turn_instructions
            ],
            circuit_quality=CircuitQuality(
                backtrack_ratio=backtrack_ratio,
                angular_spread=calculate_angular_spread(points, start),
                loop_quality=loop_quality,
            ),
            ai_reasoning=candidate.reasoning,
            circuit_type=candidate.circuit_type,
        )

    async def fetch_elevation(self, points: List[Coordinate]) -> ElevationProfile:
        """Elevation summary for a decoded polyline; provider failures give zeros."""
        if len(points) < 2:
            return ElevationProfile()

        samples = sample_elevation_points(points)
        try:
            elevations = await self.map_service.get_elevations(samples)
        except Exception as e:
            logger.error("Elevation lookup failed: %s", e)
            return ElevationProfile()

        return compute_elevation_profile(samples, elevations)
