"""Investor report API routes.

Main router that aggregates all investor report endpoints.
Routes: /extracting
"""
from fastapi import APIRouter

from .extraction import router as extraction_router

router = APIRouter(tags=["investor_reports"])

router.include_router(extraction_router)
