# app/core/middleware.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings

def setup_middleware(app: FastAPI):
    """Configure all middleware"""
    # Browsers upload workbooks from other origins and fetch the merged PDFs
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
