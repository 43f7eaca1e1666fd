from openpyxl import Workbook

from app.verticals.investor_reports.excel import MergeIndex, TableDetector
from app.verticals.investor_reports.layout_config import LayoutConfig

CONFIG = LayoutConfig(anchor_keyword="Investor Report")


def _detect(ws):
    return TableDetector(CONFIG).detect_tables(ws, MergeIndex.from_sheet(ws))


def test_nearby_hits_collapse_to_one_origin():
    ws = Workbook().active
    ws["B2"] = "Investor Report: A"
    ws["C3"] = "Investor Report: A (copy)"
    ws["E4"] = "Investor Report: A (caption)"

    origins = _detect(ws)
    assert [(o.row, o.col) for o in origins] == [(2, 2)]


def test_width_is_distance_to_next_origin_on_same_row():
    ws = Workbook().active
    ws["A1"] = "Investor Report: A"
    ws["F1"] = "Investor Report: B"
    ws["A30"] = "Investor Report: C"

    origins = _detect(ws)
    assert [(o.row, o.col, o.width) for o in origins] == [(1, 1, 5), (1, 6, 4), (30, 1, 4)]


def test_merge_members_are_not_anchor_hits():
    ws = Workbook().active
    ws["A1"] = "Investor Report: A"
    # Stale text left in a member cell must not produce a second table
    ws["H1"] = "Investor Report: B"
    merges = MergeIndex.from_ranges(["A1:D1", "G1:H1"])

    origins = TableDetector(CONFIG).detect_tables(ws, merges)
    assert [(o.row, o.col) for o in origins] == [(1, 1)]


def test_scan_stops_at_row_cap():
    ws = Workbook().active
    ws["A101"] = "Investor Report: too far"
    assert _detect(ws) == []


def test_default_anchor_keyword_matches_arabic_marker():
    ws = Workbook().active
    ws["C5"] = "تقرير المستثمر: خالد"
    origins = TableDetector().detect_tables(ws, MergeIndex.from_sheet(ws))
    assert [(o.row, o.col, o.width) for o in origins] == [(5, 3, 4)]
