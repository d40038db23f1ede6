"""
Response builder service - converts generated circuits to the route preview API format
"""
from typing import List

from circuitgen.models.response import EnhancedRoute, RouteGenerationResponse, RouteOption


class ResponseBuilderService:
    """Response builder service - converts internal data to API response format"""

    def build_response(self, routes: List[EnhancedRoute]) -> RouteGenerationResponse:
        """
        Build API response from selected routes

        Args:
            routes: Final route set, already ordered by difficulty

        Returns:
            RouteGenerationResponse; success is False when nothing was generated
        """
        options = [self._build_option(route) for route in routes]

        if not options:
            return RouteGenerationResponse(
                success=False, message="No routes generated", routes=[], total_count=0
            )

        return RouteGenerationResponse(
            success=True,
            message=f"Successfully generated {len(options)} routes",
            routes=options,
            total_count=len(options),
        )

    @staticmethod
    def _build_option(route: EnhancedRoute) -> RouteOption:
        return RouteOption(
            id=route.id,
            name=route.name,
            distance=route.distance,
            estimated_time=route.duration,
            elevation_gain=route.elevation_gain,
            elevation_loss=route.elevation_loss,
            max_gradient_percent=route.max_gradient_percent,
            max_gradient_degrees=route.max_gradient_degrees,
            difficulty=route.difficulty,
            polyline=route.polyline,
            waypoints=route.waypoints,
            description=f"{route.name} - {route.distance:.1f}km AI-designed circuit",
            turn_by_turn=route.instructions,
            turn_instructions=route.turn_instructions,
            circuit_quality=route.circuit_quality,
            ai_reasoning=route.ai_reasoning,
        )
