"""
Main circuit route service
Integrates feature discovery, AI design, execution/scoring, selection and response building
"""
import logging
from typing import List, Optional

from circuitgen.config import settings
from circuitgen.models.request import RouteGenerationRequest
from circuitgen.models.response import EnhancedRoute, RouteGenerationResponse
from circuitgen.services.route.generation_service import RouteGenerationService
from circuitgen.services.route.response_builder import ResponseBuilderService
from circuitgen.services.route.selection import select_top_routes_with_variety

logger = logging.getLogger(__name__)


class RouteService:
    """
    Main route generation service - single pass, stateless per request

    Architecture: Features → AI design (or fallback) → Directions + scoring → Selection → Response
    """

    def __init__(
        self,
        generation_service: Optional[RouteGenerationService] = None,
        response_builder: Optional[ResponseBuilderService] = None,
    ):
        self.generation_service = generation_service or RouteGenerationService()
        self.response_builder = response_builder or ResponseBuilderService()

    async def generate_ai_routes(
        self,
        start_lat: float,
        start_lng: float,
        target_distance_km: float,
        activity_type: str = "run",
    ) -> List[EnhancedRoute]:
        """Return 0-5 circuits ordered easy → moderate → hard, each by distance"""
        if target_distance_km <= 0:
            raise ValueError("Target distance must be positive")

        logger.info("🤖 Using OpenAI to design %skm circuits", target_distance_km)

        routes = await self.generation_service.generate_candidate_routes(
            start_lat, start_lng, target_distance_km, activity_type
        )
        selected = select_top_routes_with_variety(routes, limit=settings.max_routes)

        logger.info("🎉 Returning %d AI-designed circuits", len(selected))
        return selected

    async def generate_response(
        self, request: RouteGenerationRequest
    ) -> RouteGenerationResponse:
        routes = await self.generate_ai_routes(
            request.start_lat, request.start_lng, request.distance, request.activity_type
        )
        return self.response_builder.build_response(routes)


async def generate_ai_routes_with_google(
    start_lat: float,
    start_lng: float,
    target_distance_km: float,
    activity_type: str = "run",
) -> List[EnhancedRoute]:
    """Generate circuits with the default Google + OpenAI providers"""
    return await RouteService().generate_ai_routes(
        start_lat, start_lng, target_distance_km, activity_type
    )
