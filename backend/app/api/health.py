# app/api/health.py
from datetime import datetime
from fastapi import APIRouter
from app.config import settings

router = APIRouter()

@router.get("/api/health")
async def health_check():
    """Detailed health check"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "environment": settings.environment,
        "default_locator": settings.default_locator,
        "header_image_present": settings.header_image_path.is_file(),
        "footer_image_present": settings.footer_image_path.is_file(),
        "investor_folders": sum(1 for p in settings.output_dir.iterdir() if p.is_dir()),
    }
