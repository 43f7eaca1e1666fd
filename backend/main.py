# backend/main.py
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.api import api_router
from app.config import settings
from app.core.lifespan import lifespan
from app.core.middleware import setup_middleware


app = FastAPI(
    title="Investor Reports API",
    version="1.0.0",
    description="Extract investor tables from workbooks and publish merged PDF reports",
    lifespan=lifespan
)

# Setup middleware
setup_middleware(app)

# Register API routes
app.include_router(api_router)

# Merged reports are published straight from the output folders
app.mount(settings.public_files_prefix, StaticFiles(directory=str(settings.output_dir)), name="files")

# ---------- Run ----------

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        log_level="info"
    )
