from fastapi import APIRouter

from app.api import search, videos

api_router = APIRouter()


@api_router.get("/health", tags=["health"])
def api_health_check():
    """Health check endpoint for monitoring and load balancers."""
    return {"status": "ok", "service": "api"}


api_router.include_router(search.router, prefix="/search", tags=["search"])
api_router.include_router(videos.router, prefix="/videos", tags=["videos"])
