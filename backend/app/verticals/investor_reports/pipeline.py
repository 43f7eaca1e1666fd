"""Batch pipeline: workbook in, one merged PDF per investor out."""
from pathlib import Path
from typing import Callable, Dict, List, Optional

from openpyxl import load_workbook
from openpyxl.workbook.workbook import Workbook

from app.utils.file_utils import unique_pdf_path
from app.utils.logging import logger
from app.verticals.investor_reports.errors import ReportInputError
from app.verticals.investor_reports.layout_config import LayoutConfig
from app.verticals.investor_reports.locators import TableLocator, TableLocatorFactory
from app.verticals.investor_reports.merging import merge_investor_pdfs
from app.verticals.investor_reports.models import BatchResult, LocatedTable, PrintJob
from app.verticals.investor_reports.rendering import PdfRenderSession, RegionRenderer, ReportAssets


def load_report_workbook(workbook_path: Path) -> Workbook:
    """Open a workbook with cached formula results and rich text runs."""
    try:
        return load_workbook(str(workbook_path), data_only=True, rich_text=True)
    except Exception as e:
        raise ReportInputError(f"Could not read workbook '{Path(workbook_path).name}': {e}") from e


class ReportPipeline:
    """
    Locate, render and merge every investor table of one workbook.

    Runs strictly sequentially: one render session is opened for the batch
    and reused for every job. A failed job or merge is recorded and the
    remaining work continues.
    """

    def __init__(
        self,
        output_dir: Path,
        config: LayoutConfig = None,
        locator: Optional[TableLocator] = None,
        assets: Optional[ReportAssets] = None,
        session_factory: Callable = PdfRenderSession,
        delete_sources: bool = False,
    ):
        self.output_dir = Path(output_dir)
        self.config = config or LayoutConfig()
        self.locator = locator or TableLocatorFactory.get_locator("anchor", self.config)
        self.assets = assets or ReportAssets()
        self.session_factory = session_factory
        self.delete_sources = delete_sources
        self._renderer = RegionRenderer(self.config)

    def plan_jobs(self, tables: List[LocatedTable]) -> List[PrintJob]:
        """
        Give each located table a unique destination under its investor's folder.

        Tables whose investor folder would not sit strictly inside the
        output directory are skipped.
        """
        jobs = []
        reserved = set()
        output_root = self.output_dir.resolve()
        for table in tables:
            investor_dir = self.output_dir / table.fields.investor_name
            if output_root not in investor_dir.resolve().parents:
                logger.warning(
                    f"⚠️ Refusing investor folder '{table.fields.investor_name}' outside {self.output_dir}",
                    extra={"sheet": table.sheet_title, "investor": table.fields.investor_name},
                )
                continue
            investor_dir.mkdir(parents=True, exist_ok=True)

            path = unique_pdf_path(investor_dir, table.file_stem, reserved)
            reserved.add(path)
            jobs.append(PrintJob(table=table, output_path=path))
        return jobs

    def _render_jobs(self, workbook: Workbook, result: BatchResult):
        with self.session_factory() as session:
            for job in result.jobs:
                table = job.table
                sheet = workbook[table.sheet_title]
                try:
                    html = self._renderer.render_html(
                        sheet, table.region, self.locator.merge_index(sheet), self.assets
                    )
                    session.render(html, job.output_path)
                    result.rendered.append(job)
                    logger.info(
                        f"✅ Rendered {job.output_path.name}",
                        extra={"sheet": table.sheet_title, "investor": job.investor_name},
                    )
                except Exception as e:
                    result.failed.append(job)
                    logger.exception(
                        f"❌ Failed to render {job.output_path.name}: {e}",
                        extra={"sheet": table.sheet_title, "investor": job.investor_name},
                    )

    def _merge_investors(self, result: BatchResult):
        investors: Dict[str, None] = {}
        for job in result.jobs:
            investors.setdefault(job.investor_name, None)

        for investor in investors:
            try:
                merged = merge_investor_pdfs(
                    self.output_dir / investor,
                    investor,
                    year=self.config.report_year,
                    delete_sources=self.delete_sources,
                )
            except Exception as e:
                result.merge_failures.append(investor)
                logger.exception(f"❌ Failed to merge PDFs for '{investor}': {e}", extra={"investor": investor})
                continue
            if merged is not None:
                result.merged_files[investor] = merged

    def run(self, workbook_path: Path) -> BatchResult:
        """
        Process one workbook end to end.

        Args:
            workbook_path: Path to the .xlsx workbook

        Returns:
            BatchResult with jobs, render outcomes and merged documents

        Raises:
            ReportInputError: If the workbook (or its manifest) cannot be used
        """
        workbook = load_report_workbook(workbook_path)
        tables = self.locator.locate(workbook)

        result = BatchResult(jobs=self.plan_jobs(tables))
        logger.info(f"🔍 Located {result.total_jobs} table(s) with '{self.locator.name}' strategy")
        if not result.jobs:
            return result

        self._render_jobs(workbook, result)
        self._merge_investors(result)

        logger.info(result.summary())
        return result
