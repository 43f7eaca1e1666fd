"""Anchor-keyword table detection for investor report worksheets."""

from typing import List

from openpyxl.worksheet.worksheet import Worksheet

from app.utils.logging import logger
from app.verticals.investor_reports.layout_config import LayoutConfig
from app.verticals.investor_reports.models import TableOrigin
from .cell_values import cell_text
from .merge_index import MergeIndex


class TableDetector:
    """Find table origins by scanning for the anchor keyword."""

    def __init__(self, config: LayoutConfig = None):
        self._config = config or LayoutConfig()

    def _find_anchor_hits(self, sheet: Worksheet, merges: MergeIndex) -> List[TableOrigin]:
        """
        Collect every cell whose text contains the anchor keyword.

        Merge members are skipped so a merged header only counts at its master.

        Args:
            sheet: Worksheet
            merges: Merge index for the sheet

        Returns:
            Anchor hits sorted by row, then column
        """
        hits = []
        max_scan_row = min(sheet.max_row, self._config.anchor_scan_rows)

        for row in sheet.iter_rows(min_row=1, max_row=max_scan_row):
            for cell in row:
                if merges.is_member(cell.row, cell.column):
                    continue
                if self._config.anchor_keyword in cell_text(cell, self._config):
                    hits.append(TableOrigin(row=cell.row, col=cell.column))

        hits.sort(key=lambda h: (h.row, h.col))
        return hits

    def _deduplicate_hits(self, hits: List[TableOrigin]) -> List[TableOrigin]:
        """
        Drop hits that sit close to an already-kept origin.

        One logical header may match in several cells (e.g. merged or repeated
        captions); anything within the row/column proximity of a kept origin
        is treated as the same table.
        """
        kept: List[TableOrigin] = []
        for hit in hits:
            is_duplicate = any(
                abs(origin.row - hit.row) <= self._config.dedup_row_distance
                and abs(origin.col - hit.col) <= self._config.dedup_col_distance
                for origin in kept
            )
            if not is_duplicate:
                kept.append(hit)
        return kept

    def _assign_widths(self, origins: List[TableOrigin]) -> None:
        """
        Infer each table's column span from the next origin on the same row.

        Falls back to the default width when there is no neighbour to the
        right or the neighbour is too close to be a separate table.
        """
        for origin in origins:
            next_on_row = next(
                (o for o in origins if o.row == origin.row and o.col > origin.col),
                None,
            )
            width = self._config.default_table_width
            if next_on_row is not None:
                distance = next_on_row.col - origin.col
                if distance > 1:
                    width = distance
            origin.width = width

    def detect_tables(self, sheet: Worksheet, merges: MergeIndex) -> List[TableOrigin]:
        """
        Locate table origins on a worksheet.

        Args:
            sheet: openpyxl Worksheet object
            merges: Merge index for the sheet

        Returns:
            Deduplicated origins in (row, column) order, each with a width
        """
        hits = self._find_anchor_hits(sheet, merges)
        origins = self._deduplicate_hits(hits)
        self._assign_widths(origins)

        if origins:
            logger.info(
                f"🔍 Found {len(origins)} investor table(s) in '{sheet.title}' "
                f"({len(hits)} anchor hit(s) before dedup)",
                extra={"sheet": sheet.title},
            )
        return origins
