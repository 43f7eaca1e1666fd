from pathlib import Path

from PyPDF2 import PdfReader

from app.verticals.investor_reports.merging import (
    collect_merge_inputs,
    merge_investor_pdfs,
    merge_order,
    merged_filename,
)

from conftest import write_blank_pdf


def test_fewer_hyphens_first_then_alphabetical():
    assert merge_order(["B.pdf", "A-x.pdf", "A.pdf"]) == ["A.pdf", "B.pdf", "A-x.pdf"]
    assert merge_order(["خالد - سيارة 2.pdf", "خالد - سيارة 1.pdf", "ملخص - خالد - 2025.pdf"]) == [
        "خالد - سيارة 1.pdf",
        "خالد - سيارة 2.pdf",
        "ملخص - خالد - 2025.pdf",
    ]


def test_alphabetical_tie_break_ignores_case():
    assert merge_order(["b.pdf", "A.pdf", "a2.pdf"]) == ["A.pdf", "a2.pdf", "b.pdf"]


def test_merge_concatenates_pages_in_order(tmp_path: Path):
    investor_dir = tmp_path / "Khalid"
    investor_dir.mkdir()
    write_blank_pdf(investor_dir / "B.pdf", width=300)
    write_blank_pdf(investor_dir / "A-x.pdf", pages=2, width=400)
    write_blank_pdf(investor_dir / "A.pdf", width=200)

    merged = merge_investor_pdfs(investor_dir, "Khalid", year=2025)

    assert merged == investor_dir / "Khalid 2025.pdf"
    widths = [float(page.mediabox.width) for page in PdfReader(str(merged)).pages]
    assert widths == [200, 300, 400, 400]


def test_rerun_excludes_previous_merged_output(tmp_path: Path):
    investor_dir = tmp_path / "Khalid"
    investor_dir.mkdir()
    write_blank_pdf(investor_dir / "Khalid_1.pdf")
    write_blank_pdf(investor_dir / "Khalid_2.pdf")

    merge_investor_pdfs(investor_dir, "Khalid", year=2025)
    merged = merge_investor_pdfs(investor_dir, "Khalid", year=2025)

    assert len(PdfReader(str(merged)).pages) == 2
    assert [p.name for p in collect_merge_inputs(investor_dir, 2025)] == ["Khalid_1.pdf", "Khalid_2.pdf"]


def test_delete_sources_keeps_only_merged_document(tmp_path: Path):
    investor_dir = tmp_path / "Sara"
    investor_dir.mkdir()
    write_blank_pdf(investor_dir / "Sara_Camry.pdf")

    merged = merge_investor_pdfs(investor_dir, "Sara", year=2025, delete_sources=True)

    assert sorted(p.name for p in investor_dir.iterdir()) == [merged.name]


def test_empty_directory_produces_nothing(tmp_path: Path):
    assert merge_investor_pdfs(tmp_path, "Nobody") is None


def test_merged_filename_is_what_collection_excludes(tmp_path: Path):
    assert merged_filename("Khalid", 2025) == "Khalid 2025.pdf"
    write_blank_pdf(tmp_path / merged_filename("Khalid", 2025))
    write_blank_pdf(tmp_path / merged_filename("Khalid", 2024))

    assert [p.name for p in collect_merge_inputs(tmp_path, 2025)] == ["Khalid 2024.pdf"]
