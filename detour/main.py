import logging

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from detour.config import settings
from detour.errors import BackendError, InvalidGeometryInput
from detour.services.directions_service import DirectionsService
from detour.services.routing import OSRMClient

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Detour Router",
    description="Directions proxy that adds synthesized alternative routes",
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

synthesis_config = settings.synthesis_config()
directions_service = DirectionsService(OSRMClient(synthesis_config), synthesis_config)


def get_directions_service() -> DirectionsService:
    return directions_service


# main api
@app.get("/directions/v5/mapbox/{profile}/{coordinates}")
async def get_directions(
    profile: str,
    coordinates: str,
    service: DirectionsService = Depends(get_directions_service),
):
    """Primary route from the routing backend plus synthesized alternatives"""
    path = f"/directions/v5/mapbox/{profile}/{coordinates}"
    try:
        return await service.get_directions(path)
    except InvalidGeometryInput as e:
        raise HTTPException(status_code=400, detail=f"Invalid coordinates: {str(e)}")
    except BackendError as e:
        logger.error("Primary route fetch failed for %s: %s", path, e)
        raise HTTPException(
            status_code=502, detail=f"Routing backend failed: {str(e)}"
        )


@app.get("/health")
async def health_check():
    """Health check"""
    return {"status": "healthy", "version": settings.api_version}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=3000)
