"""
tests/test_audit_router.py

HTTP tests for the /audit endpoint using FastAPI's TestClient.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.api.routers import audit_router
from app.services.audit_service import AuditService, get_audit_service

SAMPLE_CSV = (
    "Fecha Ingreso,Cuota Actual,Cargado por,Producto,Estado\n"
    "2024-03-01,1000,Ana,Curso de Python,Garantizado\n"
    "02-03-2024,500,Bruno,Taller de Arte,\n"
    "bad,100,Ana,Curso de Python,\n"
).encode("utf-8")


@pytest.fixture()
def client() -> TestClient:
    application = FastAPI()
    application.include_router(audit_router)
    application.dependency_overrides[get_audit_service] = lambda: AuditService(
        default_revenue_target=3000.0
    )
    return TestClient(application)


class TestAuditEndpoint:
    def test_returns_report(self, client: TestClient) -> None:
        response = client.post(
            "/audit",
            files={"file": ("ventas.csv", SAMPLE_CSV, "text/csv")},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["rows_processed"] == 2
        assert body["rows_failed"] == 1
        assert body["rejections"][0]["row_number"] == 4

        report = body["report"]
        assert report["total_revenue"] == 1500.0
        assert report["total_count"] == 2
        assert report["guaranteed_count"] == 1
        assert report["average_ticket"] == 750.0
        assert report["target_progress"] == 50.0
        assert len(report["activity_window"]) == 30
        assert report["activity_window"][-1]["day"] == "2024-03-02"
        assert report["sellers"][0]["name"] == "Ana"
        assert report["sellers"][0]["trend"] == [{"day": "2024-03-01", "amount": 1000.0}]
        assert report["products"][0]["display_name"] == "PYTHON"

    def test_revenue_target_query_parameter(self, client: TestClient) -> None:
        response = client.post(
            "/audit",
            params={"revenue_target": 1500},
            files={"file": ("ventas.csv", SAMPLE_CSV, "text/csv")},
        )

        assert response.status_code == 200
        assert response.json()["report"]["target_progress"] == 100.0

    def test_empty_file_returns_null_report(self, client: TestClient) -> None:
        response = client.post(
            "/audit",
            files={"file": ("ventas.csv", b"Fecha Ingreso,Cuota Actual\n", "text/csv")},
        )

        assert response.status_code == 200
        assert response.json()["report"] is None
        assert response.json()["rows_processed"] == 0

    def test_oversized_amounts_do_not_break_the_report(self, client: TestClient) -> None:
        huge = "1" * 400
        csv_bytes = (
            "Fecha Ingreso,Cuota Actual,Cargado por,Producto,Estado\n"
            f"2024-03-01,{huge},Ana,Curso de Python,\n"
            f"2024-03-02,{huge},Bruno,Taller de Arte,\n"
        ).encode("utf-8")

        response = client.post("/audit", files={"file": ("ventas.csv", csv_bytes, "text/csv")})

        assert response.status_code == 200
        report = response.json()["report"]
        assert report["total_revenue"] == 0.0
        assert [s["share"] for s in report["sellers"]] == [0.0, 0.0]
        assert [p["share"] for p in report["products"]] == [0.0, 0.0]

    def test_accepts_csv_media_type_with_charset(self, client: TestClient) -> None:
        response = client.post(
            "/audit",
            files={"file": ("export.txt", SAMPLE_CSV, "text/csv; charset=utf-8")},
        )

        assert response.status_code == 200

    def test_rejects_non_csv_upload(self, client: TestClient) -> None:
        response = client.post(
            "/audit",
            files={"file": ("ventas.pdf", b"%PDF-1.4", "application/pdf")},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Sales export must be a CSV file."

    def test_rejects_undecodable_csv(self, client: TestClient) -> None:
        response = client.post(
            "/audit",
            files={"file": ("ventas.csv", b"\xff\xfe\xfa", "text/csv")},
        )

        assert response.status_code == 400
        assert "UTF-8" in response.json()["detail"]

    def test_missing_file_is_unprocessable(self, client: TestClient) -> None:
        response = client.post("/audit")

        assert response.status_code == 422


class TestHealth:
    def test_health(self) -> None:
        from app.main import create_app

        response = TestClient(create_app()).get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
