from __future__ import annotations

import pytest
import requests
import responses

from bizops_client_sdk import ApiSession, AuthStore, ClientConfig, HttpClient
from bizops_client_sdk.exceptions import TransportError
from bizops_client_sdk.models import SessionData, UserResponse

BASE_URL = "https://api.example.com"


def test_auth_store_round_trip(auth_store: AuthStore) -> None:
    auth_store.save(
        SessionData(
            access_token="abc",
            user=UserResponse(id="u1", email="ann@example.com", store_ids=["s1"]),
            env_name="test",
            current_store_id="s1",
        )
    )

    loaded = auth_store.load()

    assert loaded is not None
    assert loaded.access_token == "abc"
    assert loaded.user.store_ids == ["s1"]
    assert loaded.current_store_id == "s1"


def test_auth_store_discards_corrupt_file(tmp_path) -> None:
    store = AuthStore(base_dir=tmp_path)
    (tmp_path / "session.json").write_text("{not json")

    assert store.load() is None
    assert not (tmp_path / "session.json").exists()


@responses.activate
def test_login_selects_first_store_and_persists(config: ClientConfig, auth_store: AuthStore, http: HttpClient) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/auth/login",
        json={"data": {"accessToken": "tok", "user": {"id": "u1", "email": "ann@example.com", "storeIds": ["s1", "s2"]}}},
    )
    session = ApiSession(config, auth_store=auth_store, http=http)

    user = session.login("ann@example.com", "secret")

    assert user.id == "u1"
    assert session.is_authenticated
    assert session.current_store_id == "s1"
    restored = ApiSession(config, auth_store=auth_store, http=http)
    assert restored.token == "tok"
    assert restored.current_store_id == "s1"


def test_select_store_is_persisted(session: ApiSession, auth_store: AuthStore) -> None:
    session.select_store("store-2")

    assert auth_store.load().current_store_id == "store-2"
    assert session.employees_client().store_id == "store-2"


def test_clients_share_one_http_client(session: ApiSession) -> None:
    assert session.sales_client().http is session.order_tracking_client().http is session.http


@responses.activate
def test_logout_clears_local_session_even_when_request_fails(session: ApiSession, auth_store: AuthStore) -> None:
    session.select_store("store-1")
    responses.add(responses.POST, f"{BASE_URL}/auth/logout", body=requests.ConnectionError("offline"))

    with pytest.raises(TransportError):
        session.logout()

    assert not session.is_authenticated
    assert session.current_store_id is None
    assert auth_store.load() is None
