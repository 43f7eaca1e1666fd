"""Headless Chromium session that prints HTML documents to A4 PDFs."""
from pathlib import Path

from playwright.sync_api import sync_playwright

from app.utils.logging import logger

# A4 portrait; right and bottom margins stay at zero so the footer image reaches the page edge
PDF_MARGINS = {"top": "10mm", "right": "0mm", "bottom": "0mm", "left": "10mm"}

CHROMIUM_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


class PdfRenderSession:
    """
    One browser and one page for a whole batch, reused for every document.

    Usage:
        with PdfRenderSession() as session:
            session.render(html, output_path)
    """

    def __init__(self, headless: bool = True):
        self._headless = headless
        self._playwright = None
        self._browser = None
        self._page = None

    def __enter__(self) -> "PdfRenderSession":
        self._playwright = sync_playwright().start()
        try:
            self._browser = self._playwright.chromium.launch(headless=self._headless, args=CHROMIUM_ARGS)
            self._page = self._browser.new_page()
        except Exception:
            self.close()
            raise
        logger.info("🖨️ Chromium render session started")
        return self

    def render(self, html: str, output_path: Path) -> Path:
        """Print one HTML document to output_path and return the path."""
        if self._page is None:
            raise RuntimeError("PdfRenderSession is not open")

        output_path = Path(output_path)
        self._page.set_content(html, wait_until="load")
        self._page.pdf(
            path=str(output_path),
            format="A4",
            landscape=False,
            print_background=True,
            display_header_footer=False,
            margin=PDF_MARGINS,
        )
        return output_path

    def close(self):
        if self._page is not None:
            self._page.close()
            self._page = None
        if self._browser is not None:
            self._browser.close()
            self._browser = None
        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None
            logger.info("Chromium render session closed")

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
