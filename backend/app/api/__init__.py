from fastapi import APIRouter
from app.api import health
from app.verticals.investor_reports.api import router as investor_reports_router


api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(investor_reports_router)

__all__ = ["api_router"]
