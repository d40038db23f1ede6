from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RouteGenerationRequest(BaseModel):
    """Body of the AI circuit generation endpoint (camelCase or snake_case)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    start_lat: float = Field(ge=-90, le=90)
    start_lng: float = Field(ge=-180, le=180)
    distance: float = Field(gt=0, le=100)  # Target distance in km
    activity_type: str = "run"
