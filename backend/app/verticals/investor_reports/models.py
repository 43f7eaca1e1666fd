"""Domain types shared by the investor report engine."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional


@dataclass(frozen=True)
class MergeInfo:
    """Merge membership of one grid cell.

    Masters carry the span; members point back at their master.
    """
    is_master: bool
    master_row: int
    master_col: int
    row_span: int = 1
    col_span: int = 1


@dataclass
class TableOrigin:
    """Anchor hit kept after deduplication, plus its inferred column width."""
    row: int
    col: int
    width: int = 0


@dataclass(frozen=True)
class TableRegion:
    """Inclusive rectangle of grid cells forming one logical table."""
    start_row: int
    start_col: int
    end_row: int
    end_col: int

    def __post_init__(self):
        if self.end_row < self.start_row or self.end_col < self.start_col:
            raise ValueError(
                f"Invalid table region rows {self.start_row}-{self.end_row}, "
                f"columns {self.start_col}-{self.end_col}"
            )

    @property
    def height(self) -> int:
        return self.end_row - self.start_row + 1

    @property
    def width(self) -> int:
        return self.end_col - self.start_col + 1

    def contains(self, row: int, col: int) -> bool:
        return self.start_row <= row <= self.end_row and self.start_col <= col <= self.end_col


@dataclass(frozen=True)
class ExtractedFields:
    """Identifying fields for one table, already sanitized for file paths."""
    investor_name: str
    item_identifier: str
    name_from_fallback: bool = False
    identifier_from_fallback: bool = False


@dataclass(frozen=True)
class LocatedTable:
    """A table found by a locator strategy, ready to become a print job."""
    sheet_title: str
    region: TableRegion
    fields: ExtractedFields
    file_stem: str


@dataclass
class PrintJob:
    """One located table paired with the PDF it will be rendered to."""
    table: LocatedTable
    output_path: Path

    @property
    def investor_name(self) -> str:
        return self.table.fields.investor_name


@dataclass(frozen=True)
class ManifestEntry:
    """One investor row of the manifest sheet."""
    name: str
    item_count: int
    row: int


@dataclass
class BatchResult:
    """Outcome of one pipeline run."""
    jobs: List[PrintJob] = field(default_factory=list)
    rendered: List[PrintJob] = field(default_factory=list)
    failed: List[PrintJob] = field(default_factory=list)
    merged_files: Dict[str, Path] = field(default_factory=dict)
    merge_failures: List[str] = field(default_factory=list)

    @property
    def total_jobs(self) -> int:
        return len(self.jobs)

    @property
    def success_count(self) -> int:
        return len(self.merged_files)

    def summary(self) -> str:
        return (
            f"Produced {self.success_count} merged PDF(s) from {self.total_jobs} table(s) "
            f"({len(self.rendered)} rendered, {len(self.failed)} failed)"
        )


@dataclass(frozen=True)
class CellStyle:
    """Presentation style translated from a cell's fill, font, and alignment."""
    background: Optional[str] = None
    color: Optional[str] = None
    bold: bool = False
    text_align: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "background": self.background,
            "color": self.color,
            "bold": self.bold,
            "text_align": self.text_align,
        }


@dataclass(frozen=True)
class RenderedCell:
    """One emitted table cell (merge members are never emitted)."""
    row: int
    col: int
    text: str
    style: CellStyle
    row_span: int = 1
    col_span: int = 1

    def to_dict(self) -> dict:
        return {
            "row": self.row,
            "col": self.col,
            "text": self.text,
            "row_span": self.row_span,
            "col_span": self.col_span,
            "style": self.style.to_dict(),
        }


@dataclass
class RenderedTable:
    """Serializable, layout-preserving rendering of one table region."""
    region: TableRegion
    rows: List[List[RenderedCell]] = field(default_factory=list)

    @property
    def cell_count(self) -> int:
        return sum(len(r) for r in self.rows)

    def to_dict(self) -> dict:
        return {
            "region": {
                "start_row": self.region.start_row,
                "start_col": self.region.start_col,
                "end_row": self.region.end_row,
                "end_col": self.region.end_col,
            },
            "rows": [[cell.to_dict() for cell in row] for row in self.rows],
        }
