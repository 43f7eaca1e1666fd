"""Anchor-keyword locator: tables announced by an in-sheet marker phrase."""
from typing import List

from openpyxl.workbook.workbook import Workbook

from app.utils.logging import logger
from app.verticals.investor_reports.excel import BoundsRefiner, FieldExtractor, TableDetector
from app.verticals.investor_reports.layout_config import LayoutConfig
from app.verticals.investor_reports.models import LocatedTable
from .base import TableLocator


class AnchorTableLocator(TableLocator):
    """Scan every sheet for the anchor keyword, then bound and name each table."""

    name = "anchor"

    def __init__(self, config: LayoutConfig = None):
        super().__init__(config)
        self._detector = TableDetector(self._config)
        self._refiner = BoundsRefiner(self._config)
        self._extractor = FieldExtractor(self._config)

    def locate(self, workbook: Workbook) -> List[LocatedTable]:
        located = []

        for sheet in workbook.worksheets:
            merges = self.merge_index(sheet)
            origins = self._detector.detect_tables(sheet, merges)

            for origin in origins:
                region = self._refiner.refine(sheet, origin)
                fields = self._extractor.extract(sheet, region)
                located.append(LocatedTable(
                    sheet_title=sheet.title,
                    region=region,
                    fields=fields,
                    file_stem=f"{fields.investor_name}_{fields.item_identifier}",
                ))
                logger.info(
                    f"📋 Table '{fields.investor_name}' / '{fields.item_identifier}' in '{sheet.title}': "
                    f"rows {region.start_row}-{region.end_row}, columns {region.start_col}-{region.end_col}",
                    extra={"sheet": sheet.title, "investor": fields.investor_name},
                )

        return located
