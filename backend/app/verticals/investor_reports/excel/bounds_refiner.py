"""Row/column extent refinement for anchor-detected tables."""

from openpyxl.worksheet.worksheet import Worksheet

from app.utils.logging import logger
from app.verticals.investor_reports.layout_config import LayoutConfig
from app.verticals.investor_reports.models import TableOrigin, TableRegion
from .cell_values import text_at


class BoundsRefiner:
    """Turn a table origin plus candidate width into a finalized region."""

    def __init__(self, config: LayoutConfig = None):
        self._config = config or LayoutConfig()

    def _row_has_data(self, sheet: Worksheet, row: int, start_col: int, end_col: int) -> bool:
        for col in range(start_col, end_col + 1):
            if text_at(sheet, row, col, self._config):
                return True
        return False

    def _col_has_data(self, sheet: Worksheet, col: int, start_row: int, end_row: int) -> bool:
        for row in range(start_row, end_row + 1):
            if text_at(sheet, row, col, self._config):
                return True
        return False

    def _find_end_row(self, sheet: Worksheet, origin: TableOrigin, end_col: int) -> int:
        """
        Grow the table downward from the minimum height toward the cap.

        A streak of fully-empty rows ends the table at the last row holding
        data. Without a streak the height saturates at the cap.
        """
        end_row = origin.row + self._config.min_rows_per_table
        empty_count = 0

        for row in range(end_row, origin.row + self._config.max_rows_per_table):
            if self._row_has_data(sheet, row, origin.col, end_col):
                empty_count = 0
                end_row = row
                continue

            empty_count += 1
            if empty_count >= self._config.empty_row_streak:
                end_row = row - self._config.empty_row_streak
                break

        # Short tables stop inside the minimum window; drop the blank tail
        while end_row > origin.row and not self._row_has_data(sheet, end_row, origin.col, end_col):
            end_row -= 1

        return end_row

    def refine(self, sheet: Worksheet, origin: TableOrigin) -> TableRegion:
        """
        Compute the final region for a table origin.

        Args:
            sheet: Worksheet holding the table
            origin: Origin with its inferred width

        Returns:
            TableRegion with trailing empty columns trimmed
        """
        width = origin.width or self._config.default_table_width
        end_col = origin.col + width - 1
        end_row = self._find_end_row(sheet, origin, end_col)

        # Trim empty columns from the right, stop at the first one holding data
        while end_col > origin.col and not self._col_has_data(sheet, end_col, origin.row, end_row):
            end_col -= 1

        region = TableRegion(
            start_row=origin.row,
            start_col=origin.col,
            end_row=end_row,
            end_col=end_col,
        )
        logger.debug(
            f"Table at ({origin.row}, {origin.col}) in '{sheet.title}': "
            f"rows {region.start_row}-{region.end_row}, columns {region.start_col}-{region.end_col}",
            extra={"sheet": sheet.title},
        )
        return region
