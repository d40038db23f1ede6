"""Spherical geometry helpers shared by the circuit generation pipeline."""
from __future__ import annotations

import math
from typing import List, Tuple

import polyline

Coordinate = Tuple[float, float]  # (lat, lng) in degrees

EARTH_RADIUS_KM = 6371


def haversine_km(p1: Coordinate, p2: Coordinate) -> float:
    """Calculate distance between two points (Haversine formula)"""
    lat1, lng1 = p1
    lat2, lng2 = p2

    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lng = math.radians(lng2 - lng1)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def project_point(
    origin: Coordinate, bearing_degrees: float, distance_km: float
) -> Coordinate:
    """Destination point reached from origin along a great circle.

    Args:
        origin: Start coordinates (lat, lng)
        bearing_degrees: Initial bearing, clockwise from north
        distance_km: Distance travelled along the surface

    Returns:
        Projected coordinates (lat, lng)
    """
    lat1 = math.radians(origin[0])
    lng1 = math.radians(origin[1])
    bearing = math.radians(bearing_degrees)
    d = distance_km / EARTH_RADIUS_KM

    lat2 = math.asin(
        math.sin(lat1) * math.cos(d) + math.cos(lat1) * math.sin(d) * math.cos(bearing)
    )
    lng2 = lng1 + math.atan2(
        math.sin(bearing) * math.sin(d) * math.cos(lat1),
        math.cos(d) - math.sin(lat1) * math.sin(lat2),
    )

    return math.degrees(lat2), math.degrees(lng2)


def decode_polyline(encoded: str) -> List[Coordinate]:
    """Decode a Google encoded polyline; malformed input decodes to no points."""
    if not encoded:
        return []
    try:
        return [(lat, lng) for lat, lng in polyline.decode(encoded)]
    except (ValueError, IndexError, TypeError):
        return []


def is_valid_coordinate(lat: object, lng: object) -> bool:
    if isinstance(lat, bool) or isinstance(lng, bool):
        return False
    if not isinstance(lat, (int, float)) or not isinstance(lng, (int, float)):
        return False
    return -90 <= lat <= 90 and -180 <= lng <= 180
