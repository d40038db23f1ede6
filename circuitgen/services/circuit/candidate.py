from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from circuitgen.services.route.geometry import Coordinate


@dataclass
class CandidateRoute:
    """Waypoint loop proposed by the designer, before street routing."""

    id: str
    name: str
    waypoints: List[Coordinate] = field(default_factory=list)
    reasoning: str = ""
    estimated_distance: float = 0.0
    circuit_type: str = "loop"
