from __future__ import annotations

import pytest

from bizops_client_sdk import ApiSession, AuthStore, ClientConfig, HttpClient, TraceContext

BASE_URL = "https://api.example.com"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("BIZOPS_ENV", "BIZOPS_API_BASE_URL_DEV", "BIZOPS_TELEMETRY_ENABLED"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("BIZOPS_API_BASE_URL", BASE_URL)


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=BASE_URL, retry_backoff_seconds=0.0)


@pytest.fixture
def http(config: ClientConfig) -> HttpClient:
    return HttpClient(config, trace=TraceContext(), sleep=lambda _seconds: None)


@pytest.fixture
def auth_store(tmp_path) -> AuthStore:
    return AuthStore(base_dir=tmp_path)


@pytest.fixture
def session(config: ClientConfig, auth_store: AuthStore, http: HttpClient) -> ApiSession:
    return ApiSession(config, auth_store=auth_store, token="token-1", current_store_id="store-1", http=http)


def _employee_payload(employee_id: str, first: str, last: str, **extra) -> dict:
    payload = {
        "id": employee_id,
        "employeeCode": "123456",
        "firstName": first,
        "lastName": last,
        "email": f"{first.lower()}@example.com",
        "role": "cashier",
        "status": "active",
        "permissions": [],
    }
    payload.update(extra)
    return payload


def _tracking_payload(order_id: str, **extra) -> dict:
    payload = {
        "id": order_id,
        "customerName": "Dana Shop",
        "status": "pending_verification",
        "paymentAmount": 120.5,
        "paymentType": "CASH",
        "driverName": "Lee",
        "isVerified": False,
        "storeId": "store-1",
    }
    payload.update(extra)
    return payload


@pytest.fixture
def employee_payload():
    return _employee_payload


@pytest.fixture
def tracking_payload():
    return _tracking_payload
