"""Tunable constants for table discovery, bounds, extraction, and naming.

Values are tuned empirically against real investor workbooks. Every engine
component takes a LayoutConfig so tests and callers can pin them explicitly.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class LayoutConfig:
    """Immutable engine configuration (defaults mirror Settings)."""

    # Anchor keyword scan
    anchor_keyword: str = "تقرير المستثمر"
    anchor_scan_rows: int = 100
    dedup_row_distance: int = 2
    dedup_col_distance: int = 3
    default_table_width: int = 4

    # Bounds refinement
    min_rows_per_table: int = 15
    max_rows_per_table: int = 60
    empty_row_streak: int = 2

    # Field extraction
    identifier_scan_rows: int = 15
    identifier_keywords: Tuple[str, ...] = ("لوحة", "اللوحة")
    fallback_identifier_keyword: str = "نوع السيارة"
    max_name_length: int = 50

    # Value formatting
    accounting_dash_tokens: Tuple[str, ...] = ('"-"', " - ", "_-")
    zero_epsilon: float = 1e-6

    # Manifest-driven discovery
    manifest_sheet_name: str = "قائمة المستثمرين"
    manifest_name_header: str = "اسم المستثمر"
    manifest_count_header: str = "عدد السيارات"
    manifest_header_scan_rows: int = 20
    manifest_item_label: str = "سيارة"
    column_scan_cap: int = 500
    token_match_min_shared: int = 2
    token_match_min_length: int = 3
    token_match_max_count_gap: int = 2

    # Merge
    report_year: int = 2025

    @classmethod
    def from_settings(cls, settings) -> "LayoutConfig":
        """Build a LayoutConfig from application Settings."""
        return cls(
            anchor_keyword=settings.anchor_keyword,
            anchor_scan_rows=settings.anchor_scan_rows,
            dedup_row_distance=settings.dedup_row_distance,
            dedup_col_distance=settings.dedup_col_distance,
            default_table_width=settings.default_table_width,
            min_rows_per_table=settings.min_rows_per_table,
            max_rows_per_table=settings.max_rows_per_table,
            empty_row_streak=settings.empty_row_streak,
            identifier_scan_rows=settings.identifier_scan_rows,
            identifier_keywords=tuple(settings.identifier_keywords),
            fallback_identifier_keyword=settings.fallback_identifier_keyword,
            max_name_length=settings.max_name_length,
            accounting_dash_tokens=tuple(settings.accounting_dash_tokens),
            zero_epsilon=settings.zero_epsilon,
            manifest_sheet_name=settings.manifest_sheet_name,
            manifest_name_header=settings.manifest_name_header,
            manifest_count_header=settings.manifest_count_header,
            manifest_header_scan_rows=settings.manifest_header_scan_rows,
            manifest_item_label=settings.manifest_item_label,
            column_scan_cap=settings.column_scan_cap,
            token_match_min_shared=settings.token_match_min_shared,
            token_match_min_length=settings.token_match_min_length,
            token_match_max_count_gap=settings.token_match_max_count_gap,
            report_year=settings.report_year,
        )
