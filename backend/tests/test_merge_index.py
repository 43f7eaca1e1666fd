import pytest
from openpyxl import Workbook

from app.verticals.investor_reports.excel import MergeIndex


def test_master_carries_span_and_members_point_back():
    index = MergeIndex.from_ranges(["B2:D3"])

    master = index.get(2, 2)
    assert master.is_master
    assert (master.row_span, master.col_span) == (2, 3)

    member = index.get(3, 4)
    assert not member.is_master
    assert (member.master_row, member.master_col) == (2, 2)
    assert index.is_member(3, 4)
    assert not index.is_member(2, 2)
    assert len(index) == 6


def test_unmerged_cells_report_not_merged():
    index = MergeIndex.from_ranges(["A1:B1"])
    assert index.get(5, 5) is None
    assert not index.is_member(5, 5)
    assert not index.is_master(5, 5)
    assert (5, 5) not in index


def test_multi_letter_columns_resolve_base_26():
    index = MergeIndex.from_ranges(["AA10:AB10"])
    assert index.is_master(10, 27)
    assert index.is_member(10, 28)


def test_overlapping_ranges_are_rejected():
    with pytest.raises(ValueError):
        MergeIndex.from_ranges(["A1:B2", "B2:C3"])


def test_from_sheet_reads_worksheet_merges():
    wb = Workbook()
    ws = wb.active
    ws.merge_cells("A1:C1")
    ws.merge_cells("E5:E7")

    index = MergeIndex.from_sheet(ws)
    assert index.get(1, 1).col_span == 3
    assert index.get(5, 5).row_span == 3
    assert index.is_member(7, 5)
