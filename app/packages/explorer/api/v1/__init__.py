"""API v1 router: mounts every versioned sub-router."""

from fastapi import APIRouter

from app.packages.explorer.api.v1.endpoints import files, folders

api_router = APIRouter()
api_router.include_router(folders.router)
api_router.include_router(files.router)
