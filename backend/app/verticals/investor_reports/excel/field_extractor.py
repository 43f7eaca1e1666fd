"""Investor name and item identifier extraction from a bounded table."""

import re
from typing import Optional

from openpyxl.worksheet.worksheet import Worksheet

from app.utils.logging import logger
from app.verticals.investor_reports.layout_config import LayoutConfig
from app.verticals.investor_reports.models import ExtractedFields, TableRegion
from .cell_values import text_at

# Latin letters, digits, Arabic block, space, hyphen, underscore
_UNSAFE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9\u0600-\u06FF _-]")


def sanitize_name(name: Optional[str], max_length: int = 50) -> str:
    """Keep only path-safe characters of an extracted name ("" if nothing survives)."""
    if not name:
        return ""
    return _UNSAFE_NAME_CHARS.sub("", name).strip()[:max_length]


class FieldExtractor:
    """Pull the investor name and item identifier out of a table region."""

    def __init__(self, config: LayoutConfig = None):
        self._config = config or LayoutConfig()

    def _text(self, sheet: Worksheet, row: int, col: int) -> str:
        return text_at(sheet, row, col, self._config)

    def extract_investor_name(self, sheet: Worksheet, region: TableRegion) -> Optional[str]:
        """
        Read the investor name from the anchor cell on the origin row.

        "<anchor>: <name> (<details>)" yields "<name>".
        """
        for col in range(region.start_col, region.end_col + 1):
            text = self._text(sheet, region.start_row, col)
            if self._config.anchor_keyword not in text:
                continue
            parts = text.split(":")
            if len(parts) > 1 and parts[1]:
                name = parts[1].split("(")[0].strip()
                return name or None
            return None
        return None

    def _scan_for_keyword(self, sheet: Worksheet, region: TableRegion, keywords, offsets) -> Optional[str]:
        """
        Find the first keyword cell in the scan window and read a neighbour.

        Offsets are tried in order; the first non-empty neighbour wins.
        """
        last_row = region.start_row + self._config.identifier_scan_rows
        for row in range(region.start_row, last_row):
            for col in range(region.start_col, region.end_col + 1):
                text = self._text(sheet, row, col)
                if not text or not any(keyword in text for keyword in keywords):
                    continue
                for row_offset, col_offset in offsets:
                    candidate = self._text(sheet, row + row_offset, col + col_offset).strip()
                    if candidate:
                        return candidate
        return None

    def extract_item_identifier(self, sheet: Worksheet, region: TableRegion) -> Optional[str]:
        """
        Read the plate number, falling back to the vehicle type.

        Plate value: right neighbour, else the cell below, else two columns over.
        Vehicle type value: right neighbour only.
        """
        plate = self._scan_for_keyword(
            sheet, region, self._config.identifier_keywords, ((0, 1), (1, 0), (0, 2))
        )
        if plate:
            return plate
        return self._scan_for_keyword(
            sheet, region, (self._config.fallback_identifier_keyword,), ((0, 1),)
        )

    def extract(self, sheet: Worksheet, region: TableRegion) -> ExtractedFields:
        """
        Extract and sanitize both fields, applying fallbacks.

        Missing name falls back to the sheet name; missing identifier falls
        back to "Report_Col<start column>" so every table gets a usable path.

        Args:
            sheet: Worksheet holding the table
            region: Refined table region

        Returns:
            ExtractedFields safe for use in file paths
        """
        max_len = self._config.max_name_length
        name = sanitize_name(self.extract_investor_name(sheet, region), max_len)
        identifier = sanitize_name(self.extract_item_identifier(sheet, region), max_len)

        name_fallback = not name
        if name_fallback:
            name = sanitize_name(sheet.title, max_len) or "Unknown"
            logger.debug(
                f"No investor name at ({region.start_row}, {region.start_col}); using sheet name '{name}'",
                extra={"sheet": sheet.title},
            )

        identifier_fallback = not identifier
        if identifier_fallback:
            identifier = f"Report_Col{region.start_col}"

        return ExtractedFields(
            investor_name=name,
            item_identifier=identifier,
            name_from_fallback=name_fallback,
            identifier_from_fallback=identifier_fallback,
        )
