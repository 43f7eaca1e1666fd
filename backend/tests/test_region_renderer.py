from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill

from app.verticals.investor_reports.excel import MergeIndex
from app.verticals.investor_reports.models import TableRegion
from app.verticals.investor_reports.rendering import HEADER_PLACEHOLDER, RegionRenderer, ReportAssets


def _sheet():
    ws = Workbook().active
    ws["A1"] = "تقرير المستثمر: خالد"
    ws.merge_cells("A1:C1")
    ws["A1"].fill = PatternFill(fill_type="solid", fgColor="DDEBF7")
    ws["A1"].font = Font(bold=True)
    ws["A2"] = "Revenue"
    ws["B2"] = 1234.5
    ws["C2"] = "<b>raw</b>"
    ws["A3"] = "Total"
    ws.merge_cells("A3:A4")
    ws["B3"] = 10
    ws["B4"] = 20
    return ws


def test_render_skips_merge_members_and_keeps_spans():
    ws = _sheet()
    table = RegionRenderer().render(ws, TableRegion(1, 1, 4, 3), MergeIndex.from_sheet(ws))

    assert [len(row) for row in table.rows] == [1, 3, 3, 2]
    header = table.rows[0][0]
    assert (header.row_span, header.col_span) == (1, 3)
    assert header.style.background == "#DDEBF7"
    assert header.style.bold
    assert table.rows[1][1].text == "1,234.5"
    assert table.rows[2][0].row_span == 2
    assert [c.col for c in table.rows[3]] == [2, 3]
    assert table.cell_count == 9


def test_rendered_table_is_serializable():
    ws = _sheet()
    data = RegionRenderer().render(ws, TableRegion(1, 1, 2, 3), MergeIndex.from_sheet(ws)).to_dict()
    assert data["region"] == {"start_row": 1, "start_col": 1, "end_row": 2, "end_col": 3}
    assert data["rows"][0][0]["col_span"] == 3
    assert data["rows"][1][0]["style"]["bold"] is False


def test_html_has_spans_escaped_text_and_header_placeholder():
    ws = _sheet()
    renderer = RegionRenderer()
    html = renderer.to_html(
        renderer.render(ws, TableRegion(1, 1, 4, 3), MergeIndex.from_sheet(ws)),
        ReportAssets(),
    )

    assert 'dir="rtl"' in html
    assert 'colspan="3"' in html
    assert 'rowspan="2"' in html
    assert "&lt;b&gt;raw&lt;/b&gt;" in html
    assert HEADER_PLACEHOLDER in html
    assert "page-footer" not in html.split("</style>")[1]


def test_html_embeds_header_and_footer_images():
    ws = _sheet()
    renderer = RegionRenderer()
    html = renderer.render_html(
        ws, TableRegion(1, 1, 2, 3), MergeIndex.from_sheet(ws),
        ReportAssets(header_base64="SEVBREVS", footer_base64="Rk9PVEVS"),
    )

    assert "data:image/png;base64,SEVBREVS" in html
    assert "data:image/jpeg;base64,Rk9PVEVS" in html
    assert HEADER_PLACEHOLDER not in html
