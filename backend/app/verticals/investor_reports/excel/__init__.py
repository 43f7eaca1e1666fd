"""Spreadsheet-level building blocks: merges, values, styles, tables, fields."""

from .bounds_refiner import BoundsRefiner
from .cell_values import cell_text, text_at
from .field_extractor import FieldExtractor, sanitize_name
from .manifest_reader import ColumnRunScanner, ManifestReader
from .merge_index import MergeIndex
from .sheet_matching import SheetMatcher, normalize_key
from .style_inspector import StyleInspector
from .table_detector import TableDetector

__all__ = [
    "BoundsRefiner",
    "ColumnRunScanner",
    "FieldExtractor",
    "ManifestReader",
    "MergeIndex",
    "SheetMatcher",
    "StyleInspector",
    "TableDetector",
    "cell_text",
    "normalize_key",
    "sanitize_name",
    "text_at",
]
