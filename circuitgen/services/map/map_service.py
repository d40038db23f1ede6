from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


class MapServiceError(Exception):
    """Map provider request failed (transport, HTTP status, quota)."""


@dataclass(frozen=True)
class DirectionsResult:
    """Street-following route returned by the directions provider"""

    success: bool
    distance_km: float = 0.0  # Unrounded
    duration_min: int = 0
    polyline: str = ""
    instructions: List[str] = field(default_factory=list)
    turn_instructions: List[Dict] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def failed(cls, error: str) -> "DirectionsResult":
        return cls(success=False, error=error)


class MapService(ABC):
    """Map service abstract interface"""

    @abstractmethod
    async def find_nearby_places(
        self, center: Tuple[float, float], radius_km: float, categories: List[str]
    ) -> List[Dict]:
        """Search for nearby places of specified types"""
        pass

    @abstractmethod
    async def get_directions(
        self,
        origin: Tuple[float, float],
        waypoints: List[Tuple[float, float]] = None,
    ) -> DirectionsResult:
        """Get a walking round trip through waypoints

        Args:
            origin: Origin coordinates (lat, lng), destination is the same as origin
            waypoints: Ordered waypoint coordinates (lat, lng)
        """
        pass

    @abstractmethod
    async def get_elevations(self, points: List[Tuple[float, float]]) -> List[float]:
        """Elevation in meters for each of the given coordinates"""
        pass
