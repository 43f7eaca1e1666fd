# app/core/lifespan.py
import asyncio
import time
from contextlib import asynccontextmanager
from app.config import settings
from app.utils.logging import logger
from app.verticals.investor_reports.rendering import load_report_assets

# Retention settings (could later move to settings)
UPLOAD_RETENTION_HOURS = 6  # Delete leftover uploaded workbooks older than this
UPLOAD_SCAN_INTERVAL_SECONDS = 1800  # 30 minutes


@asynccontextmanager
async def lifespan(app):
    """Run setup and teardown logic for the app lifecycle."""

    # ---------- Startup ----------
    logger.info("Application starting", extra={
        "environment": settings.environment,
        "output_dir": str(settings.output_dir),
        "default_locator": settings.default_locator,
        "max_file_size_mb": settings.max_file_size_mb
    })

    # Header/footer images are read once and shared by every request
    app.state.report_assets = load_report_assets(settings.header_image_path, settings.footer_image_path)
    logger.info(
        "Report assets loaded",
        extra={
            "header": app.state.report_assets.has_header,
            "footer": app.state.report_assets.has_footer,
        }
    )

    removed = prune_stale_uploads()
    logger.info(f"Upload cleanup on startup: removed {removed} stale workbook(s)")

    # Start background cleanup task (uploaded file pruning)
    cleanup_task = asyncio.create_task(periodic_cleanup())

    logger.info("✅ Ready to extract investor reports")

    # yield control to the running app
    yield

    # ---------- Shutdown ----------

    cleanup_task.cancel()  # Stop background task
    try:
        await cleanup_task
    except asyncio.CancelledError:
        pass
    logger.info("Application shutting down")


def prune_stale_uploads() -> int:
    """Delete uploaded workbooks left behind by crashed requests."""
    if not settings.upload_dir.is_dir():
        return 0

    cutoff = time.time() - (UPLOAD_RETENTION_HOURS * 3600)
    deleted = 0
    for path in settings.upload_dir.iterdir():
        if not path.is_file():
            continue
        try:
            if path.stat().st_mtime < cutoff:
                path.unlink()
                deleted += 1
        except FileNotFoundError:
            continue
        except OSError as e:  # log and continue
            logger.warning("Failed to evaluate uploaded file for cleanup", extra={"file": str(path), "error": str(e)})
    return deleted


async def periodic_cleanup():
    """Run periodic cleanup of stale uploaded files"""
    while True:
        try:
            await asyncio.sleep(UPLOAD_SCAN_INTERVAL_SECONDS)
            logger.info("Running periodic maintenance cleanup...")
            deleted = prune_stale_uploads()
            logger.info(
                "Upload cleanup complete",
                extra={"deleted": deleted, "retention_hours": UPLOAD_RETENTION_HOURS}
            )
        except asyncio.CancelledError:
            logger.info("Cleanup task cancelled")
            break
        except Exception as e:
            logger.error(f"Error in periodic cleanup: {e}", exc_info=True)
            # Continue loop after logging
