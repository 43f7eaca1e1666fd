"""Rendering of table regions to HTML and PDF."""
from .assets import ReportAssets, load_report_assets
from .html_template import HEADER_PLACEHOLDER, REPORT_HTML_TEMPLATE
from .pdf_session import PdfRenderSession
from .region_renderer import RegionRenderer

__all__ = [
    "ReportAssets",
    "load_report_assets",
    "HEADER_PLACEHOLDER",
    "REPORT_HTML_TEMPLATE",
    "PdfRenderSession",
    "RegionRenderer",
]
