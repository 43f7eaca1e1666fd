"""Manifest-driven locator: investor list + side-by-side column runs."""
from typing import List

from openpyxl.workbook.workbook import Workbook

from app.utils.file_utils import sanitize_path_component
from app.utils.logging import logger
from app.verticals.investor_reports.excel import ColumnRunScanner, ManifestReader, SheetMatcher
from app.verticals.investor_reports.layout_config import LayoutConfig
from app.verticals.investor_reports.models import ExtractedFields, LocatedTable
from .base import TableLocator


class ManifestTableLocator(TableLocator):
    """
    Use the manifest sheet's (investor, item count) rows to find tables.

    Output order follows manifest row order, then left-to-right column runs
    on each investor's sheet. Investors without a matching sheet are skipped.
    """

    name = "manifest"

    def __init__(self, config: LayoutConfig = None):
        super().__init__(config)
        self._reader = ManifestReader(self._config)
        self._matcher = SheetMatcher(self._config)

    def locate(self, workbook: Workbook) -> List[LocatedTable]:
        entries = self._reader.read(workbook)
        located = []

        for entry in entries:
            sheet = self._matcher.find_sheet(workbook.worksheets, entry.name)
            if sheet is None:
                logger.warning(
                    f"⚠️ No sheet found for investor '{entry.name}' (manifest row {entry.row}); skipping",
                    extra={"investor": entry.name},
                )
                continue

            logger.info(
                f"👤 Investor '{entry.name}' -> sheet '{sheet.title}' ({entry.item_count} table(s) declared)",
                extra={"sheet": sheet.title, "investor": entry.name},
            )

            safe_name = (
                sanitize_path_component(entry.name)
                or sanitize_path_component(sheet.title)
                or "Unknown"
            )
            regions = ColumnRunScanner(sheet, self._config).scan(entry.item_count)
            if len(regions) < entry.item_count:
                logger.warning(
                    f"Sheet '{sheet.title}' holds {len(regions)} table(s), manifest declares {entry.item_count}",
                    extra={"sheet": sheet.title, "investor": entry.name},
                )

            for index, region in enumerate(regions, start=1):
                identifier = f"{self._config.manifest_item_label} {index}"
                located.append(LocatedTable(
                    sheet_title=sheet.title,
                    region=region,
                    fields=ExtractedFields(investor_name=safe_name, item_identifier=identifier),
                    file_stem=f"{safe_name} - {identifier}",
                ))
                logger.info(
                    f"   ✔️ Table {index}: columns {region.start_col}-{region.end_col}, last row {region.end_row}",
                    extra={"sheet": sheet.title, "investor": entry.name},
                )

        return located
