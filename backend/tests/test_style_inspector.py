from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.styles.colors import Color

from app.verticals.investor_reports.excel import StyleInspector
from app.verticals.investor_reports.excel.style_inspector import apply_tint, theme_color_hex
from app.verticals.investor_reports.models import CellStyle


def _cell():
    ws = Workbook().active
    ws["A1"] = "value"
    return ws["A1"]


def test_positive_tint_lightens_toward_white():
    assert apply_tint((68, 114, 196), 0.4) == (143, 170, 220)
    assert theme_color_hex(4, 0.4) == "#8faadc"


def test_negative_tint_darkens_by_scaling():
    assert apply_tint((255, 255, 255), -0.25) == (191, 191, 191)
    assert theme_color_hex(0, -0.25) == "#bfbfbf"


def test_unknown_theme_slot_falls_back_to_white():
    assert theme_color_hex(42) == "#ffffff"


def test_explicit_rgb_fill_and_bold_font():
    cell = _cell()
    cell.fill = PatternFill(fill_type="solid", fgColor="FFFF00")
    cell.font = Font(bold=True, color="FF0000")

    style = StyleInspector().cell_style(cell)
    assert style.background == "#FFFF00"
    assert style.color == "#FF0000"
    assert style.bold


def test_theme_fill_with_tint():
    cell = _cell()
    cell.fill = PatternFill(fill_type="solid", fgColor=Color(theme=4, tint=0.4))
    assert StyleInspector().cell_style(cell).background == "#8faadc"


def test_indexed_palette_and_system_indexes():
    inspector = StyleInspector()
    assert inspector.resolve_color(Color(indexed=2)) == "#FF0000"
    assert inspector.resolve_color(Color(indexed=64)) is None


def test_no_fill_means_no_background():
    style = StyleInspector().cell_style(_cell())
    assert style.background is None
    assert not style.bold


def test_center_across_selection_becomes_center():
    cell = _cell()
    cell.alignment = Alignment(horizontal="centerContinuous")
    assert StyleInspector().cell_style(cell).text_align == "center"

    cell.alignment = Alignment(horizontal="right")
    assert StyleInspector().cell_style(cell).text_align == "right"


def test_css_appends_overrides_after_base_style():
    css = StyleInspector.to_css(CellStyle(background="#8faadc", color="#000000", bold=True, text_align="right"))
    assert css.startswith("border: 1px solid #444;")
    assert "background-color: #8faadc;" in css
    assert "font-weight: bold;" in css
    assert css.endswith("text-align: right;")
