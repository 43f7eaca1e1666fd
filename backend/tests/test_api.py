from io import BytesIO
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook

from app.config import settings
from app.verticals.investor_reports.api.extraction import get_render_session_factory
from main import app

from conftest import build_anchor_workbook, build_manifest_workbook

XLSX_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _upload(wb):
    buffer = BytesIO()
    wb.save(buffer)
    return {"file": ("report.xlsx", buffer.getvalue(), XLSX_TYPE)}


@pytest.fixture
def client(tmp_path: Path, monkeypatch, fake_session_factory):
    output_dir = tmp_path / "files"
    upload_dir = tmp_path / "uploads"
    output_dir.mkdir()
    upload_dir.mkdir()
    monkeypatch.setattr(settings, "output_dir", output_dir)
    monkeypatch.setattr(settings, "upload_dir", upload_dir)
    monkeypatch.setattr(settings, "anchor_keyword", "Investor Report")

    app.dependency_overrides[get_render_session_factory] = lambda: fake_session_factory
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_missing_file_is_rejected(client):
    response = client.post("/extracting")
    assert response.status_code == 400
    assert response.json()["status"] == "error"


def test_unknown_strategy_is_rejected(client):
    response = client.post("/extracting?strategy=magic", files=_upload(build_anchor_workbook()))
    assert response.status_code == 422
    assert "magic" in response.json()["message"]


def test_workbook_without_tables_returns_warning(client):
    wb = Workbook()
    wb.active["A1"] = "nothing here"
    response = client.post("/extracting", files=_upload(wb))

    assert response.status_code == 404
    assert response.json()["status"] == "warning"


def test_successful_extraction_returns_merged_file_urls(client):
    response = client.post("/extracting", files=_upload(build_anchor_workbook()))

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["total_jobs"] == 2
    assert body["success_count"] == 2
    assert body["investors_files"]["Khalid"] == ["http://testserver/files/Khalid/Khalid%202025.pdf"]

    # Per-table sources are removed after merging; the upload is cleaned up
    assert sorted(p.name for p in (settings.output_dir / "Khalid").iterdir()) == ["Khalid 2025.pdf"]
    assert list(settings.upload_dir.iterdir()) == []


def test_manifest_strategy_and_arabic_urls(client):
    response = client.post("/extracting?strategy=manifest", files=_upload(build_manifest_workbook()))

    assert response.status_code == 200
    urls = response.json()["investors_files"]["سالم العتيبي"]
    assert urls[0].startswith("http://testserver/files/%D8%B3")
    assert urls[0].endswith("%202025.pdf")


def test_missing_manifest_sheet_is_a_bad_request(client):
    response = client.post("/extracting?strategy=manifest", files=_upload(build_anchor_workbook()))
    assert response.status_code == 400
    assert response.json()["status"] == "error"


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
