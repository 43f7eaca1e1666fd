"""Investor report extraction endpoint.

Routes: POST /extracting

Accepts an uploaded workbook, renders every investor table to PDF, merges
them per investor and returns a public URL for each merged document.
"""
import shutil
from typing import Callable, Dict, List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from app.config import settings
from app.utils.file_utils import make_request_id, make_upload_path
from app.utils.logging import logger, request_id_ctx
from app.verticals.investor_reports.errors import ReportInputError
from app.verticals.investor_reports.layout_config import LayoutConfig
from app.verticals.investor_reports.locators import TableLocatorFactory
from app.verticals.investor_reports.pipeline import ReportPipeline
from app.verticals.investor_reports.rendering import PdfRenderSession, ReportAssets, load_report_assets

router = APIRouter()

NO_FILE_MESSAGE = 'لم يتم إرسال أي ملف. الرجاء إرسال الملف باسم الحقل "file".'
NO_TABLES_MESSAGE = "لم يتم العثور على أي جداول للطباعة."
SERVER_ERROR_MESSAGE = "خطأ داخلي في الخادم."


class ExtractionResponse(BaseModel):
    """Successful batch: merged PDF URLs per investor."""
    status: str = "success"
    message: str
    total_jobs: int
    success_count: int
    investors_files: Dict[str, List[str]] = Field(default_factory=dict)


class ExtractionStatus(BaseModel):
    """Warning or error payload."""
    status: str
    message: str
    error: Optional[str] = None


def get_render_session_factory() -> Callable:
    """Render session factory used by the endpoint (overridden in tests)."""
    return PdfRenderSession


def get_report_assets(request: Request) -> ReportAssets:
    """Header/footer images loaded at startup, or loaded now if startup was skipped."""
    assets = getattr(request.app.state, "report_assets", None)
    if assets is None:
        assets = load_report_assets(settings.header_image_path, settings.footer_image_path)
        request.app.state.report_assets = assets
    return assets


def _status(status_code: int, status: str, message: str, error: str = None) -> JSONResponse:
    payload = ExtractionStatus(status=status, message=message, error=error)
    return JSONResponse(status_code=status_code, content=payload.model_dump(exclude_none=True))


def build_file_url(request: Request, investor: str, filename: str) -> str:
    base = str(request.base_url).rstrip("/") + settings.public_files_prefix
    return f"{base}/{quote(investor, safe='')}/{quote(filename, safe='')}"


@router.post(
    "/extracting",
    response_model=ExtractionResponse,
    responses={400: {"model": ExtractionStatus}, 404: {"model": ExtractionStatus},
               422: {"model": ExtractionStatus}, 500: {"model": ExtractionStatus}},
)
def extract_investor_reports(
    request: Request,
    file: Optional[UploadFile] = File(None),
    strategy: str = Query(None, description="Table locator: 'anchor' or 'manifest'"),
    session_factory: Callable = Depends(get_render_session_factory),
    assets: ReportAssets = Depends(get_report_assets),
):
    """
    Extract, render and merge investor reports from an uploaded workbook.

    Returns:
        - 200 OK: merged PDF URL per investor
        - 400 Bad Request: no file uploaded, file too large, or unusable workbook
        - 404 Not Found: no table discovered (status "warning")
        - 422 Unprocessable: unknown locator strategy
        - 500 Error: unexpected failure
    """
    if file is None or not file.filename:
        return _status(400, "error", NO_FILE_MESSAGE)

    strategy = strategy or settings.default_locator
    config = LayoutConfig.from_settings(settings)
    try:
        locator = TableLocatorFactory.get_locator(strategy, config)
    except ValueError as e:
        return _status(422, "error", str(e))

    request_id = make_request_id()
    token = request_id_ctx.set(request_id)
    upload_path = make_upload_path(settings.upload_dir, request_id, file.filename)

    try:
        with open(upload_path, "wb") as out:
            shutil.copyfileobj(file.file, out)

        size_mb = upload_path.stat().st_size / (1024 * 1024)
        if size_mb > settings.max_file_size_mb:
            return _status(400, "error", f"File too large ({size_mb:.1f} MB, limit {settings.max_file_size_mb} MB)")

        logger.info(f"⏳ Reading workbook '{file.filename}'", extra={"strategy": strategy})

        pipeline = ReportPipeline(
            output_dir=settings.output_dir,
            config=config,
            locator=locator,
            assets=assets,
            session_factory=session_factory,
            delete_sources=settings.delete_merged_sources,
        )
        result = pipeline.run(upload_path)

        if result.total_jobs == 0:
            return _status(404, "warning", NO_TABLES_MESSAGE)

        investors_files = {
            investor: [build_file_url(request, investor, path.name)]
            for investor, path in result.merged_files.items()
        }
        return ExtractionResponse(
            message=(
                f"تم استخراج ودمج {result.success_count} ملف PDF نهائي بنجاح "
                f"من أصل {result.total_jobs} جدول."
            ),
            total_jobs=result.total_jobs,
            success_count=result.success_count,
            investors_files=investors_files,
        )

    except ReportInputError as e:
        logger.warning(f"Rejected workbook '{file.filename}': {e}")
        return _status(400, "error", str(e), error=str(e))
    except Exception as e:
        logger.exception(f"Extraction failed for '{file.filename}': {e}")
        return _status(500, "error", SERVER_ERROR_MESSAGE, error=str(e))
    finally:
        upload_path.unlink(missing_ok=True)
        request_id_ctx.reset(token)
