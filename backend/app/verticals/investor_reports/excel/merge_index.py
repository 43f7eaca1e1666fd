"""Cell-to-merge-span lookup built once per worksheet."""

from typing import Dict, Iterable, Optional, Tuple

from openpyxl.utils.cell import range_boundaries
from openpyxl.worksheet.worksheet import Worksheet

from app.verticals.investor_reports.models import MergeInfo


class MergeIndex:
    """Map every merged cell to its master/member status.

    The top-left cell of a merge range is its master and carries the span;
    every other covered cell is a member whose content lives on the master.
    Cells outside any merge range are reported as not merged.
    """

    def __init__(self, merges: Optional[Dict[Tuple[int, int], MergeInfo]] = None):
        self._merges: Dict[Tuple[int, int], MergeInfo] = merges or {}

    @classmethod
    def from_ranges(cls, ranges: Iterable[str]) -> "MergeIndex":
        """
        Build the index from merge range strings such as "A1:C2".

        Args:
            ranges: Range strings naming top-left and bottom-right addresses

        Returns:
            MergeIndex covering every cell of every range

        Raises:
            ValueError: If a range is malformed or two ranges overlap
        """
        merges: Dict[Tuple[int, int], MergeInfo] = {}

        for range_str in ranges:
            # range_boundaries resolves column letters base-26 ('A' = 1)
            min_col, min_row, max_col, max_row = range_boundaries(str(range_str))
            row_span = max_row - min_row + 1
            col_span = max_col - min_col + 1

            for row in range(min_row, max_row + 1):
                for col in range(min_col, max_col + 1):
                    if (row, col) in merges:
                        raise ValueError(f"Merge range {range_str} overlaps another merge at row {row}, column {col}")
                    is_master = row == min_row and col == min_col
                    merges[(row, col)] = MergeInfo(
                        is_master=is_master,
                        master_row=min_row,
                        master_col=min_col,
                        row_span=row_span if is_master else 1,
                        col_span=col_span if is_master else 1,
                    )

        return cls(merges)

    @classmethod
    def from_sheet(cls, sheet: Worksheet) -> "MergeIndex":
        """Build the index from a worksheet's merged cell ranges."""
        return cls.from_ranges(r.coord for r in sheet.merged_cells.ranges)

    def get(self, row: int, col: int) -> Optional[MergeInfo]:
        """Return merge info for a cell, or None when the cell is not merged."""
        return self._merges.get((row, col))

    def is_member(self, row: int, col: int) -> bool:
        """True if the cell is covered by a merge but is not its master."""
        info = self._merges.get((row, col))
        return info is not None and not info.is_master

    def is_master(self, row: int, col: int) -> bool:
        info = self._merges.get((row, col))
        return info is not None and info.is_master

    def __len__(self) -> int:
        return len(self._merges)

    def __contains__(self, cell: Tuple[int, int]) -> bool:
        return cell in self._merges
