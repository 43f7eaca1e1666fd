"""Standalone script to export investor report PDFs from a workbook.

Usage (from backend directory):
    python scripts/export_reports.py /path/to/workbook.xlsx [--strategy manifest] [--output-dir out] [--keep-sources]

Strategies:
    anchor    Tables announced by the "تقرير المستثمر" marker anywhere in any sheet
    manifest  Investor list sheet + one sheet per investor with side-by-side tables

Outputs:
    - <output-dir>/<investor>/<table>.pdf        (one per discovered table)
    - <output-dir>/<investor>/<investor> <year>.pdf  (merged per investor)
    - Console summary of tables found and merged documents.
"""
import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

backend_root = Path(__file__).parent.parent
sys.path.insert(0, str(backend_root))
load_dotenv(backend_root / ".env")

from app.config import settings  # ensures .env is loaded
from app.utils.logging import logger
from app.verticals.investor_reports.errors import ReportInputError
from app.verticals.investor_reports.layout_config import LayoutConfig
from app.verticals.investor_reports.locators import TableLocatorFactory
from app.verticals.investor_reports.pipeline import ReportPipeline
from app.verticals.investor_reports.rendering import load_report_assets


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Export one merged PDF per investor from a workbook.")
    parser.add_argument("workbook", type=str, help="Path to .xlsx workbook")
    parser.add_argument(
        "--strategy", type=str, default=settings.default_locator,
        choices=TableLocatorFactory.available(), help="Table locator strategy",
    )
    parser.add_argument("--output-dir", type=str, default=str(settings.output_dir), help="Output root folder")
    parser.add_argument(
        "--keep-sources", action=argparse.BooleanOptionalAction, default=True,
        help="Keep per-table PDFs after merging (--no-keep-sources deletes them)",
    )
    args = parser.parse_args(argv)

    workbook_path = Path(args.workbook)
    if not workbook_path.exists():
        print(f"File not found: {workbook_path}")
        return 1

    config = LayoutConfig.from_settings(settings)
    pipeline = ReportPipeline(
        output_dir=Path(args.output_dir),
        config=config,
        locator=TableLocatorFactory.get_locator(args.strategy, config),
        assets=load_report_assets(settings.header_image_path, settings.footer_image_path),
        delete_sources=not args.keep_sources,
    )

    try:
        result = pipeline.run(workbook_path)
    except ReportInputError as e:
        logger.error(f"Workbook rejected: {e}")
        print(f"Workbook rejected: {e}")
        return 2

    if result.total_jobs == 0:
        print("No tables found to print.")
        return 3

    print(result.summary())
    for investor, path in result.merged_files.items():
        print(f"  {investor}: {path}")
    if result.failed:
        print(f"Failed tables: {', '.join(job.output_path.name for job in result.failed)}")
    if result.merge_failures:
        print(f"Failed merges: {', '.join(result.merge_failures)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
