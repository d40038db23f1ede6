import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from circuitgen.config import settings
from circuitgen.models.request import RouteGenerationRequest
from circuitgen.models.response import RouteGenerationResponse
from circuitgen.services.route_service import RouteService

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Circuit Route API",
    description="AI-assisted circuit route generation for runners",
    version=settings.api_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify exact origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache()
def get_route_service() -> RouteService:
    return RouteService()


@app.post(
    "/api/v1/routes/generate-ai",
    response_model=RouteGenerationResponse,
    response_model_by_alias=True,
)
async def generate_ai_routes(
    request: RouteGenerationRequest,
    route_service: RouteService = Depends(get_route_service),
):
    """Design up to 5 loop routes around the start point"""
    try:
        return await route_service.generate_response(request)
    except Exception as e:
        logger.exception("Generate AI routes error")
        raise HTTPException(
            status_code=500, detail=f"Route generation failed: {str(e)}"
        )


@app.get("/health")
async def health_check():
    """Health check"""
    return {"status": "healthy", "version": settings.api_version}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
