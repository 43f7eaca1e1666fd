"""Layout-preserving rendering of a table region to a styled document."""

from jinja2 import Environment, select_autoescape
from openpyxl.worksheet.worksheet import Worksheet

from app.verticals.investor_reports.excel.cell_values import cell_text
from app.verticals.investor_reports.excel.merge_index import MergeIndex
from app.verticals.investor_reports.excel.style_inspector import StyleInspector
from app.verticals.investor_reports.layout_config import LayoutConfig
from app.verticals.investor_reports.models import RenderedCell, RenderedTable, TableRegion
from .assets import ReportAssets
from .html_template import HEADER_PLACEHOLDER, REPORT_HTML_TEMPLATE


class RegionRenderer:
    """Walk a region row-major and emit styled cells honoring merge spans."""

    def __init__(self, config: LayoutConfig = None):
        self._config = config or LayoutConfig()
        self._style_inspector = StyleInspector()
        env = Environment(autoescape=select_autoescape(default=True, default_for_string=True))
        self._template = env.from_string(REPORT_HTML_TEMPLATE)

    def render(self, sheet: Worksheet, region: TableRegion, merges: MergeIndex) -> RenderedTable:
        """
        Build the serializable rendering of one region.

        Merge members are skipped entirely; masters carry their spans.

        Args:
            sheet: Worksheet holding the region
            region: Bounded table region
            merges: Merge index for the sheet

        Returns:
            RenderedTable with one list of cells per grid row
        """
        table = RenderedTable(region=region)

        for row in range(region.start_row, region.end_row + 1):
            cells = []
            for col in range(region.start_col, region.end_col + 1):
                info = merges.get(row, col)
                if info is not None and not info.is_master:
                    continue

                cell = sheet.cell(row=row, column=col)
                cells.append(RenderedCell(
                    row=row,
                    col=col,
                    text=cell_text(cell, self._config),
                    style=self._style_inspector.cell_style(cell),
                    row_span=info.row_span if info else 1,
                    col_span=info.col_span if info else 1,
                ))
            table.rows.append(cells)

        return table

    def to_html(self, table: RenderedTable, assets: ReportAssets) -> str:
        """Compose header, styled table and repeating footer into one HTML page."""
        return self._template.render(
            table=table,
            assets=assets,
            header_placeholder=HEADER_PLACEHOLDER,
            css=StyleInspector.to_css,
        )

    def render_html(self, sheet: Worksheet, region: TableRegion, merges: MergeIndex, assets: ReportAssets) -> str:
        return self.to_html(self.render(sheet, region, merges), assets)
