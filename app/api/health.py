from fastapi import APIRouter, Request

from app.models.response import HealthResponse

router = APIRouter()


@router.get("/")
async def root(request: Request):
    """Root endpoint"""
    config = request.app.state.config
    return {
        "status": "running",
        "service": config.api.title,
        "version": config.api.version,
    }


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Lightweight health check"""
    return HealthResponse(status="healthy")
