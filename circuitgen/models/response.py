"""
Response models for circuit route generation
Includes route geometry, elevation and navigation information
"""
from typing import List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys for the mobile client"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LatLng(CamelModel):
    """Location point model"""
    lat: float
    lng: float


class TurnInstruction(CamelModel):
    """Single navigation step"""
    instruction: str
    lat: float
    lng: float
    distance: float  # Meters from start to the beginning of this step


class CircuitQuality(CamelModel):
    """Loop shape metrics computed from the routed polyline"""
    backtrack_ratio: float  # 0..1, share of reversed grid segments
    angular_spread: float  # Degrees covered around start, multiple of 30
    loop_quality: float  # 0..1, 1 = closes exactly at start


class EnhancedRoute(CamelModel):
    """Executed, scored and classified circuit route"""
    id: str
    name: str
    distance: float  # Distance in km
    duration: int  # Duration in minutes
    polyline: str
    waypoints: List[LatLng]
    difficulty: str
    elevation_gain: float
    elevation_loss: float
    max_gradient_percent: float
    max_gradient_degrees: float
    instructions: List[str] = []
    turn_instructions: List[TurnInstruction] = []
    circuit_quality: CircuitQuality
    ai_reasoning: str = ""
    circuit_type: str = "loop"


class RouteOption(CamelModel):
    """Route card shown on the route preview screen"""
    id: str
    name: str
    distance: float
    estimated_time: int
    elevation_gain: float
    elevation_loss: float
    max_gradient_percent: float
    max_gradient_degrees: float
    difficulty: str
    polyline: str
    waypoints: List[LatLng]
    description: str
    turn_by_turn: List[str] = []
    turn_instructions: List[TurnInstruction] = []
    circuit_quality: CircuitQuality
    ai_reasoning: str = ""


class RouteGenerationResponse(CamelModel):
    """Route response model"""
    success: bool = True
    message: str = "success"
    routes: List[RouteOption] = []
    total_count: int = 0
