"""
tests/test_import_router.py

HTTP-level tests for the transaction import router.

The router is mounted on a bare FastAPI app with the service and settings
dependencies overridden, so no environment or network is needed.
"""

from __future__ import annotations

import io
import json
from unittest import mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from txn_import.api.routers import transaction_import_router
from txn_import.config import TransactionImportSettings, get_transaction_import_settings
from txn_import.connectors.sync_client import SyncRequestError, SyncResponse, TransactionSyncClient
from txn_import.main import create_app
from txn_import.services.import_service import TransactionImportService, get_transaction_import_service

CLEAN_ROWS = [
    {"client_code": "CL001", "date": "15-01-2024", "amount": 50000, "remark": "Initial investment"},
    {"client_code": "CL002", "date": "16-01-2024", "amount": 75000},
]
INVALID_ROWS = [
    {"client_code": "AB-12", "date": "15-01-2024", "amount": 100},
    {"client_code": "CL002", "date": "16-01-2024"},
]


@pytest.fixture()
def sync_client() -> mock.Mock:
    return mock.Mock(spec=TransactionSyncClient)


@pytest.fixture()
def client(sync_client: mock.Mock) -> TestClient:
    application = FastAPI()
    application.include_router(transaction_import_router)
    application.dependency_overrides[get_transaction_import_service] = lambda: TransactionImportService(
        sync_client=sync_client
    )
    application.dependency_overrides[get_transaction_import_settings] = lambda: TransactionImportSettings(
        max_reported_validation_errors=1
    )
    return TestClient(application)


def _json_file(rows: list[dict], filename: str = "batch.json") -> dict:
    return {"file": (filename, json.dumps(rows).encode("utf-8"), "application/json")}


class TestUploadEndpoint:
    def test_clean_upload_returns_server_tally(self, client: TestClient, sync_client: mock.Mock) -> None:
        sync_client.submit.return_value = SyncResponse(success=2, errors=[])

        response = client.post("/imports/investment", files=_json_file(CLEAN_ROWS))

        assert response.status_code == 200
        body = response.json()
        assert body["indicator"] == "Investment"
        assert body["submitted"] is True
        assert body["total_rows"] == 2
        assert body["validation_errors"] == []
        assert body["result"] == {"success_count": 2, "errors": []}

    def test_validation_errors_are_capped_for_display(self, client: TestClient, sync_client: mock.Mock) -> None:
        response = client.post("/imports/payout", files=_json_file(INVALID_ROWS))

        assert response.status_code == 200
        body = response.json()
        assert body["submitted"] is False
        assert body["result"] is None
        assert body["validation_error_count"] == 2
        assert body["validation_errors_truncated"] is True
        assert body["validation_errors"] == [
            {"row_number": 2, "field": "client_code", "message": "Client code must be alphanumeric"}
        ]
        sync_client.submit.assert_not_called()

    def test_transport_failure_is_row_zero(self, client: TestClient, sync_client: mock.Mock) -> None:
        sync_client.submit.side_effect = SyncRequestError("Failed to upload transactions: connection refused")

        response = client.post("/imports/Withdrawal", files=_json_file(CLEAN_ROWS))

        assert response.status_code == 200
        assert response.json()["result"] == {
            "success_count": 0,
            "errors": [{"row_number": 0, "message": "Failed to upload transactions: connection refused"}],
        }

    def test_declared_format_mismatch_is_rejected(self, client: TestClient, sync_client: mock.Mock) -> None:
        response = client.post(
            "/imports/investment",
            params={"file_format": "spreadsheet"},
            files=_json_file(CLEAN_ROWS),
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Please select a valid Excel file (.xls or .xlsx)"
        sync_client.submit.assert_not_called()

    def test_empty_file_is_rejected(self, client: TestClient) -> None:
        response = client.post("/imports/closure", files=_json_file([]))

        assert response.status_code == 400
        assert response.json()["detail"] == "No data found in the JSON file"

    def test_unknown_indicator_is_unprocessable(self, client: TestClient) -> None:
        response = client.post("/imports/dividend", files=_json_file(CLEAN_ROWS))

        assert response.status_code == 422


class TestSampleEndpoint:
    def test_json_sample_download(self, client: TestClient) -> None:
        response = client.get("/imports/closure/sample", params={"file_format": "structured-text"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert 'filename="closure_sample.json"' in response.headers["content-disposition"]
        assert response.json()[0]["client_code"] == "CLI001"

    def test_spreadsheet_sample_download(self, client: TestClient) -> None:
        response = client.get("/imports/payout/sample")

        assert response.status_code == 200
        assert 'filename="payout_sample.xlsx"' in response.headers["content-disposition"]
        workbook = load_workbook(io.BytesIO(response.content))
        assert workbook.worksheets[0].title == "Payout Sample"

    def test_uploaded_sample_round_trips_through_import(self, client: TestClient, sync_client: mock.Mock) -> None:
        sync_client.submit.return_value = SyncResponse(success=3, errors=[])
        sample = client.get("/imports/withdrawal/sample").content

        response = client.post(
            "/imports/withdrawal",
            files={
                "file": (
                    "withdrawal_sample.xlsx",
                    sample,
                    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                )
            },
        )

        assert response.status_code == 200
        assert response.json()["result"] == {"success_count": 3, "errors": []}


class TestCreateApp:
    def test_health(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TXN_SYNC_API_TOKEN", "token-123")
        monkeypatch.setenv("TXN_SYNC_BASE_URL", "https://ops.example.test/api")

        response = TestClient(create_app()).get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_startup_lists_every_invalid_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TXN_SYNC_API_TOKEN", raising=False)
        monkeypatch.setenv("TXN_SYNC_BASE_URL", "ops.example.test")

        with pytest.raises(RuntimeError) as excinfo:
            create_app()

        message = str(excinfo.value)
        assert "TXN_SYNC_BASE_URL" in message
        assert "TXN_SYNC_API_TOKEN" in message
