"""
app/api/routers package marker.
"""

from app.api.routers.summoner import router as summoner_router

__all__ = ["summoner_router"]
