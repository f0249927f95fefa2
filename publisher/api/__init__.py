"""FastAPI routers for the build publisher service."""

from fastapi import APIRouter

from .builds import router as builds_router

api_router = APIRouter()
api_router.include_router(builds_router, prefix="/builds", tags=["builds"])
