"""Base class for table locator strategies."""
from abc import ABC, abstractmethod
from typing import Dict, List

from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from app.verticals.investor_reports.excel.merge_index import MergeIndex
from app.verticals.investor_reports.layout_config import LayoutConfig
from app.verticals.investor_reports.models import LocatedTable


class TableLocator(ABC):
    """Find the per-investor tables of a workbook.

    Each strategy:
    1. Decides where tables sit (anchor keywords, or an external manifest)
    2. Bounds each table to a TableRegion
    3. Names it (investor, item identifier, file stem)

    Rendering, styling and value normalization are shared by all strategies.
    """

    name: str = "base"

    def __init__(self, config: LayoutConfig = None):
        self._config = config or LayoutConfig()
        self._merge_indexes: Dict[str, MergeIndex] = {}

    @property
    def config(self) -> LayoutConfig:
        return self._config

    def merge_index(self, sheet: Worksheet) -> MergeIndex:
        """Merge index for a sheet, built once and reused."""
        if sheet.title not in self._merge_indexes:
            self._merge_indexes[sheet.title] = MergeIndex.from_sheet(sheet)
        return self._merge_indexes[sheet.title]

    @abstractmethod
    def locate(self, workbook: Workbook) -> List[LocatedTable]:
        """Return located tables in output order.

        Args:
            workbook: Workbook loaded with cached formula results

        Returns:
            LocatedTable list; empty when nothing was found
        """
        pass
