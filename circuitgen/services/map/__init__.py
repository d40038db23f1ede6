from .map_service import DirectionsResult, MapService, MapServiceError
from .google_map_service import GoogleMapService

__all__ = ["DirectionsResult", "MapService", "MapServiceError", "GoogleMapService"]
