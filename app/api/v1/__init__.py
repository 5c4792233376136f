"""API routes, mounted under settings.API_PREFIX."""

from fastapi import APIRouter

from app.api.v1 import auth, fabrics, health, patterns, projects, upload

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(fabrics.router, prefix="/fabrics", tags=["fabrics"])
router.include_router(projects.router, prefix="/projects", tags=["projects"])
router.include_router(patterns.router, prefix="/patterns", tags=["patterns"])
router.include_router(upload.router, prefix="/upload", tags=["upload"])
