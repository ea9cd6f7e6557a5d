"""Integration tests for FastAPI endpoints."""
import io

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from statement_intake.api.app import create_app
from statement_intake.pipeline import IntakePipeline


@pytest.fixture
def client(mock_settings, mock_llm_client):
    pipeline = IntakePipeline(mock_settings, client=mock_llm_client)
    app = create_app(mock_settings, pipeline=pipeline)
    return TestClient(app, raise_server_exceptions=False)


def _pdf_upload(content: bytes, filename: str = "statement.pdf", content_type: str = "application/pdf"):
    return {"file": (filename, content, content_type)}


@pytest.mark.integration
class TestHealthEndpoint:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


@pytest.mark.integration
class TestValidateEndpoint:
    def test_valid_pdf(self, client, pdf_bytes):
        response = client.post("/upload/validate", files=_pdf_upload(pdf_bytes))
        assert response.status_code == 200
        assert response.json() == {"success": True, "error": None}

    def test_wrong_type(self, client):
        response = client.post("/upload/validate", files=_pdf_upload(b"hello", "notes.txt", "text/plain"))
        assert response.json() == {"success": False, "error": "Only PDF files are supported"}

    def test_empty_file(self, client):
        response = client.post("/upload/validate", files=_pdf_upload(b""))
        assert response.json()["error"] == "File cannot be empty"

    def test_missing_file(self, client):
        response = client.post("/upload/validate")
        assert response.json() == {"success": False, "error": "No file provided"}


@pytest.mark.integration
class TestUploadEndpoint:
    def test_extracts_and_formats(self, client, pdf_bytes):
        response = client.post("/upload?locale=pt", files=_pdf_upload(pdf_bytes))

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["display"]["balance"] == "2.000,50"
        assert body["display"]["transactions"][1]["date"] == "07/12/2025"

    def test_rejects_non_pdf(self, client, mock_llm_client):
        response = client.post("/upload", files=_pdf_upload(b"hello", "notes.txt", "text/plain"))

        assert response.status_code == 400
        assert response.json()["detail"] == "Only PDF files are supported"
        mock_llm_client.complete_vision.assert_not_awaited()

    def test_extraction_failure(self, client, mock_llm_client, pdf_bytes):
        mock_llm_client.complete_vision.side_effect = RuntimeError("boom")

        response = client.post("/upload", files=_pdf_upload(pdf_bytes))

        assert response.status_code == 502
        assert response.json()["detail"] == "ERROR_DATA_EXTRACTION_FAILED"

    def test_export_xlsx(self, client, pdf_bytes):
        response = client.post("/upload/export?locale=en", files=_pdf_upload(pdf_bytes))

        assert response.status_code == 200
        assert response.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        assert "bank-statement-transactions.xlsx" in response.headers["content-disposition"]
        sheet = load_workbook(io.BytesIO(response.content)).active
        assert sheet["B3"].value == "Rent"
        assert sheet["C3"].value == -1200.5
        assert sheet["A1"].value == "Date"

    def test_export_headers_follow_locale(self, client, pdf_bytes):
        response = client.post("/upload/export?locale=pt", files=_pdf_upload(pdf_bytes))

        sheet = load_workbook(io.BytesIO(response.content)).active
        assert [c.value for c in sheet[1]] == ["Data", "Descrição", "Valor", "Moeda", "Tipo"]


@pytest.mark.integration
class TestFormattingEndpoints:
    def test_rules(self, client):
        response = client.get("/formatting/rules/pt")
        assert response.json() == {
            "date_format": "dd/mm/yyyy",
            "decimal_separator": ",",
            "thousand_separator": ".",
        }

    def test_unknown_locale_rules(self, client):
        assert client.get("/formatting/rules/xx").json() == client.get("/formatting/rules/en").json()

    def test_preview(self, client):
        response = client.post("/formatting/preview", json={
            "locale": "pt", "date": "2025-12-05", "amount": "BRL2000.50",
        })
        assert response.json() == {
            "locale": "pt",
            "date": "05/12/2025",
            "number": "2.000,50",
            "signed_amount": "+2.000,50",
        }
