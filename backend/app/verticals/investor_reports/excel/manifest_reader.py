"""Investor manifest parsing and contiguous column-run table scanning."""

import re
from typing import Dict, List, Optional, Tuple

from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from app.utils.logging import logger
from app.verticals.investor_reports.errors import ReportInputError
from app.verticals.investor_reports.layout_config import LayoutConfig
from app.verticals.investor_reports.models import ManifestEntry, TableRegion
from .cell_values import cell_text, text_at

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_item_count(value) -> Optional[int]:
    """Leading integer of a count cell (numbers truncate, "3 cars" -> 3)."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if value != value:
            return None
        return int(value)
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))


class ManifestReader:
    """Read the investor list: one (name, item count) entry per row."""

    def __init__(self, config: LayoutConfig = None):
        self._config = config or LayoutConfig()

    def _find_header(self, sheet: Worksheet) -> Tuple[int, int, int]:
        """
        Locate the header row holding both the name and the count columns.

        Returns:
            (header_row, name_col, count_col)

        Raises:
            ReportInputError: If either column is missing from the scanned rows
        """
        name_col = None
        count_col = None

        for row in range(1, min(self._config.manifest_header_scan_rows, sheet.max_row) + 1):
            for col in range(1, sheet.max_column + 1):
                text = text_at(sheet, row, col, self._config).strip()
                if not text:
                    continue
                if self._config.manifest_name_header in text:
                    name_col = col
                if self._config.manifest_count_header in text:
                    count_col = col
            if name_col is not None and count_col is not None:
                return row, name_col, count_col

        raise ReportInputError(
            f"Columns '{self._config.manifest_name_header}' and '{self._config.manifest_count_header}' "
            f"not found in the first {self._config.manifest_header_scan_rows} rows of "
            f"'{sheet.title}'"
        )

    def read(self, workbook: Workbook) -> List[ManifestEntry]:
        """
        Parse manifest entries in sheet order.

        Rows without a name or with a non-positive count are skipped.

        Raises:
            ReportInputError: If the manifest sheet or its header columns are missing
        """
        if self._config.manifest_sheet_name not in workbook.sheetnames:
            raise ReportInputError(f"Manifest sheet '{self._config.manifest_sheet_name}' not found")

        sheet = workbook[self._config.manifest_sheet_name]
        header_row, name_col, count_col = self._find_header(sheet)

        entries = []
        for row in range(header_row + 1, sheet.max_row + 1):
            name = text_at(sheet, row, name_col, self._config).strip()
            count = parse_item_count(sheet.cell(row=row, column=count_col).value)
            if not name or not count or count < 1:
                continue
            entries.append(ManifestEntry(name=name, item_count=count, row=row))

        logger.info(
            f"Manifest '{sheet.title}': {len(entries)} investor(s) from header row {header_row}",
            extra={"sheet": sheet.title},
        )
        return entries


class ColumnRunScanner:
    """
    Split an investor sheet into tables laid side by side.

    Each table is a run of contiguous non-empty columns; runs are separated
    by one or more fully-empty columns.
    """

    def __init__(self, sheet: Worksheet, config: LayoutConfig = None):
        self._sheet = sheet
        self._config = config or LayoutConfig()
        self._column_cache: Dict[int, bool] = {}

    def column_has_data(self, col: int) -> bool:
        if col not in self._column_cache:
            self._column_cache[col] = any(
                cell_text(self._sheet.cell(row=row, column=col), self._config).strip()
                for row in range(1, self._sheet.max_row + 1)
            ) if col <= self._sheet.max_column else False
        return self._column_cache[col]

    def _last_data_row(self, start_col: int, end_col: int) -> int:
        last_row = 1
        for row in range(1, self._sheet.max_row + 1):
            if any(text_at(self._sheet, row, col, self._config).strip() for col in range(start_col, end_col + 1)):
                last_row = row
        return last_row

    def _run_end(self, start_col: int) -> int:
        """Grow the right boundary until an empty column (or the cap) is reached."""
        cap = self._config.column_scan_cap
        end_col = start_col
        while True:
            if not self.column_has_data(end_col) and end_col > start_col:
                return end_col - 1
            end_col += 1
            if end_col > cap:
                return cap

    def _skip_empty(self, col: int) -> int:
        while col <= self._config.column_scan_cap and not self.column_has_data(col):
            col += 1
        return col

    def scan(self, item_count: int) -> List[TableRegion]:
        """
        Produce one region per declared item, left to right.

        Args:
            item_count: Number of tables declared for the investor

        Returns:
            Regions spanning rows 1..last data row of each column run
        """
        regions = []
        start_col = 1

        for _ in range(item_count):
            if start_col > self._config.column_scan_cap:
                break
            end_col = self._run_end(start_col)
            last_row = self._last_data_row(start_col, end_col)
            regions.append(TableRegion(start_row=1, start_col=start_col, end_row=last_row, end_col=end_col))
            start_col = self._skip_empty(end_col + 1)

        return regions
