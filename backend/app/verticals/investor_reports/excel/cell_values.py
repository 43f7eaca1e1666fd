"""Canonical display text for spreadsheet cells.

Every place that needs a cell's text (keyword matching, field extraction,
emptiness checks, rendering) goes through cell_text() so numbers, dates and
rich text read the same everywhere.
"""

from datetime import date, datetime, time, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable

from openpyxl.cell.cell import ERROR_CODES
from openpyxl.cell.rich_text import CellRichText, TextBlock

from app.verticals.investor_reports.layout_config import LayoutConfig

_DEFAULT_CONFIG = LayoutConfig()
_TWO_PLACES = Decimal("0.01")


def cell_text(cell: Any, config: LayoutConfig = _DEFAULT_CONFIG) -> str:
    """
    Normalize one cell to its display string.

    Resolution order:
    - rich text: spans concatenated
    - formulas: cached result (workbooks are loaded with data_only=True);
      a formula without a cached result renders empty
    - error values (#DIV/0!, #N/A, ...): empty
    - numbers: dash/zero convention, integers without decimals, fractions
      with up to 2 digits grouped by thousands
    - dates: DD/MM/YYYY
    - anything unrecognized: empty, never the raw object

    Args:
        cell: openpyxl Cell (or anything exposing value, number_format, data_type)
        config: Formatting constants

    Returns:
        Display text ("" for empty cells)
    """
    if cell is None:
        return ""

    value = getattr(cell, "value", None)
    if value is None:
        return ""

    data_type = getattr(cell, "data_type", None)
    if data_type == "e":
        return ""
    if data_type == "f":
        # Formula text without a cached result; never surface it
        return ""

    return format_value(value, getattr(cell, "number_format", None) or "", config)


def format_value(value: Any, number_format: str = "", config: LayoutConfig = _DEFAULT_CONFIG) -> str:
    """Format a raw cell value using the cell's number format string."""
    if value is None:
        return ""

    if isinstance(value, CellRichText):
        return _join_rich_text(value)

    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"

    if isinstance(value, (int, float, Decimal)):
        return _format_number(value, number_format, config)

    if isinstance(value, (datetime, date)):
        return value.strftime("%d/%m/%Y")

    if isinstance(value, time):
        return value.strftime("%H:%M:%S")

    if isinstance(value, timedelta):
        return str(value)

    if isinstance(value, str):
        if value in ERROR_CODES:
            return ""
        return value

    # ArrayFormula, DataTableFormula and other wrappers
    return ""


def is_blank(cell: Any, config: LayoutConfig = _DEFAULT_CONFIG) -> bool:
    """True if the cell has no display text."""
    return cell_text(cell, config) == ""


def _join_rich_text(blocks: Iterable) -> str:
    parts = []
    for block in blocks:
        if isinstance(block, TextBlock):
            parts.append(block.text or "")
        else:
            parts.append(str(block))
    return "".join(parts)


def _format_number(value, number_format: str, config: LayoutConfig) -> str:
    if isinstance(value, float) and (value != value or value in (float("inf"), float("-inf"))):
        return ""

    if abs(value) < config.zero_epsilon:
        if any(token in number_format for token in config.accounting_dash_tokens):
            return "-"
        return "0"

    if isinstance(value, int) or value == int(value):
        return str(int(value))

    # Half-up rounding to 2 places, comma thousands, '.' decimal point
    rounded = Decimal(repr(value) if isinstance(value, float) else value).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
    text = format(rounded, ",f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def text_at(sheet, row: int, col: int, config: LayoutConfig = _DEFAULT_CONFIG) -> str:
    """
    Display text of the cell at (row, col).

    Coordinates outside the sheet's used range read as empty without
    creating cells, so scans past the data never grow the worksheet.
    """
    if row < 1 or col < 1 or row > sheet.max_row or col > sheet.max_column:
        return ""
    return cell_text(sheet.cell(row=row, column=col), config)
