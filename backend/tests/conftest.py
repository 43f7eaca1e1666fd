import os
from pathlib import Path

# Keep test runs from writing rotating log files into the working directory
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from openpyxl import Workbook
from PyPDF2 import PdfWriter

from app.verticals.investor_reports.layout_config import LayoutConfig


A4_WIDTH = 595
A4_HEIGHT = 842


def write_blank_pdf(path: Path, pages: int = 1, width: float = A4_WIDTH) -> Path:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=width, height=A4_HEIGHT)
    with open(path, "wb") as f:
        writer.write(f)
    return path


class FakeRenderSession:
    """Stands in for the browser: records HTML and writes a one-page PDF per call."""

    instances = []

    def __init__(self):
        self.rendered = []
        self.closed = False
        FakeRenderSession.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.closed = True
        return False

    def render(self, html, output_path):
        self.rendered.append((html, Path(output_path)))
        return write_blank_pdf(Path(output_path))


@pytest.fixture
def fake_session_factory():
    FakeRenderSession.instances = []
    return FakeRenderSession


@pytest.fixture
def english_config() -> LayoutConfig:
    """Engine config with a Latin anchor phrase, handy for readable fixtures."""
    return LayoutConfig(anchor_keyword="Investor Report")


def build_anchor_workbook() -> Workbook:
    """One sheet, two side-by-side investor tables announced by the anchor phrase."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Q1"

    ws["A1"] = "Investor Report: Khalid (Fund A)"
    ws.merge_cells("A1:C1")
    ws["A2"] = "لوحة"
    ws["B2"] = "ABC 123"
    ws["A3"] = "Revenue"
    ws["B3"] = 1500
    ws["C3"] = "Q1"
    ws["A4"] = "Expenses"
    ws["B4"] = 0
    ws["B4"].number_format = '_-* #,##0_-;-* #,##0_-;_-* "-"_-;_-@_-'
    ws["A5"] = "Net"
    ws["B5"] = 1234.567

    ws["F1"] = "Investor Report: Sara"
    ws["F2"] = "نوع السيارة"
    ws["G2"] = "Camry"
    ws["F3"] = "Revenue"
    ws["G3"] = 900
    return wb


def build_manifest_workbook() -> Workbook:
    """Investor list sheet plus one investor sheet holding two column runs."""
    wb = Workbook()
    manifest = wb.active
    manifest.title = "قائمة المستثمرين"
    manifest["A1"] = "م"
    manifest["B1"] = "اسم المستثمر"
    manifest["C1"] = "عدد السيارات"
    manifest["B2"] = "سالم العتيبي"
    manifest["C2"] = 2
    manifest["B3"] = "غير موجود"
    manifest["C3"] = 1
    manifest["B4"] = "بدون سيارات"
    manifest["C4"] = 0

    sheet = wb.create_sheet("سالم  العتيبي")
    sheet["A1"] = "البيان"
    sheet["B1"] = "القيمة"
    sheet["A2"] = "الإيراد"
    sheet["B2"] = 100
    sheet["A3"] = "المصروف"
    sheet["B3"] = 40

    sheet["D1"] = "البيان"
    sheet["E1"] = "القيمة"
    sheet["D2"] = "الإيراد"
    sheet["E2"] = 250
    sheet["D3"] = "المصروف"
    sheet["E3"] = 75
    sheet["D4"] = "الصافي"
    sheet["E4"] = 175
    return wb
