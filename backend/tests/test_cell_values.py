from datetime import datetime, time

from openpyxl import Workbook
from openpyxl.cell.rich_text import CellRichText, TextBlock
from openpyxl.cell.text import InlineFont

from app.verticals.investor_reports.excel import cell_text, text_at
from app.verticals.investor_reports.excel.cell_values import format_value, is_blank

ACCOUNTING_FORMAT = '_-* #,##0_-;-* #,##0_-;_-* "-"_-;_-@_-'


def _cell(value, number_format=None):
    ws = Workbook().active
    ws["A1"] = value
    if number_format:
        ws["A1"].number_format = number_format
    return ws["A1"]


def test_zero_with_accounting_format_renders_dash():
    assert cell_text(_cell(0, ACCOUNTING_FORMAT)) == "-"


def test_zero_with_plain_format_renders_zero():
    assert cell_text(_cell(0)) == "0"
    assert cell_text(_cell(0.0000001)) == "0"


def test_integral_numbers_have_no_decimals_or_grouping():
    assert cell_text(_cell(1500)) == "1500"
    assert cell_text(_cell(2500.0)) == "2500"


def test_fractions_round_half_up_to_two_places_with_grouping():
    assert cell_text(_cell(1234.567)) == "1,234.57"
    assert cell_text(_cell(1234.5)) == "1,234.5"
    assert cell_text(_cell(2.005)) == "2.01"
    assert cell_text(_cell(-0.125)) == "-0.13"


def test_dates_render_day_month_year():
    assert cell_text(_cell(datetime(2025, 3, 7, 14, 30))) == "07/03/2025"
    assert format_value(time(9, 5, 0)) == "09:05:00"


def test_formula_without_cached_result_and_errors_are_empty():
    assert cell_text(_cell("=SUM(B1:B3)")) == ""
    assert cell_text(_cell("#DIV/0!")) == ""
    assert cell_text(_cell("#N/A")) == ""


def test_rich_text_spans_are_concatenated():
    rich = CellRichText([TextBlock(InlineFont(b=True), "تقرير"), " المستثمر"])
    assert format_value(rich) == "تقرير المستثمر"


def test_booleans_and_unknown_objects():
    assert format_value(True) == "TRUE"
    assert format_value(object()) == ""
    assert format_value(float("nan")) == ""


def test_blank_and_out_of_range_reads():
    wb = Workbook()
    ws = wb.active
    ws["A1"] = "x"
    assert text_at(ws, 1, 1) == "x"
    assert text_at(ws, 50, 50) == ""
    assert text_at(ws, 0, 1) == ""
    # Reading past the used range must not grow the sheet
    assert (ws.max_row, ws.max_column) == (1, 1)
    assert is_blank(ws["B1"])
    assert not is_blank(ws["A1"])
