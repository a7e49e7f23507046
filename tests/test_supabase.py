from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from sms_expense_parser.errors import BackendError, BackendNotConfigured
from sms_expense_parser.integration.supabase import SupabaseClient


def _response(status_code: int = 200, payload: object = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


def _client(mock_http: AsyncMock) -> SupabaseClient:
    return SupabaseClient(
        base_url="https://project.supabase.co/",
        api_key="anon-key",
        client=mock_http,
        timeout=5.0,
    )


@pytest.fixture
def mock_http() -> AsyncMock:
    mock = AsyncMock()
    mock.is_closed = False
    return mock


@pytest.mark.anyio
async def test_get_user_sends_api_key_and_token(mock_http: AsyncMock) -> None:
    mock_http.request = AsyncMock(return_value=_response(payload={"id": "user-1", "email": "a@b.c"}))
    client = _client(mock_http)

    user = await client.get_user("user-token")

    assert user == {"id": "user-1", "email": "a@b.c"}
    method, url = mock_http.request.call_args.args
    headers = mock_http.request.call_args.kwargs["headers"]
    assert method == "GET"
    assert url == "https://project.supabase.co/auth/v1/user"
    assert headers["apikey"] == "anon-key"
    assert headers["Authorization"] == "Bearer user-token"
    assert mock_http.request.call_args.kwargs["timeout"] == 5.0


@pytest.mark.anyio
async def test_get_user_rejected_token(mock_http: AsyncMock) -> None:
    mock_http.request = AsyncMock(return_value=_response(status_code=401, payload={"msg": "bad jwt"}))
    assert await _client(mock_http).get_user("expired") is None


@pytest.mark.anyio
async def test_get_categories_filters_by_user(mock_http: AsyncMock) -> None:
    categories = [{"id": "c1", "name": "Fuel", "user_id": "user-1"}]
    mock_http.request = AsyncMock(return_value=_response(payload=categories))

    result = await _client(mock_http).get_categories("user-1", "tok")

    assert result == categories
    _, url = mock_http.request.call_args.args
    assert url == "https://project.supabase.co/rest/v1/categories"
    assert mock_http.request.call_args.kwargs["params"] == {"select": "*", "user_id": "eq.user-1"}


@pytest.mark.anyio
async def test_insert_expenses_asks_for_representation(mock_http: AsyncMock) -> None:
    rows = [{"user_id": "user-1", "amount": 10.0}]
    mock_http.request = AsyncMock(return_value=_response(status_code=201, payload=[{"id": "e1"}]))

    stored = await _client(mock_http).insert_expenses(rows, "tok")

    assert stored == [{"id": "e1"}]
    kwargs = mock_http.request.call_args.kwargs
    assert kwargs["json"] == rows
    assert kwargs["headers"]["Prefer"] == "return=representation"


@pytest.mark.anyio
async def test_insert_no_rows_skips_request(mock_http: AsyncMock) -> None:
    mock_http.request = AsyncMock()
    assert await _client(mock_http).insert_expenses([], "tok") == []
    mock_http.request.assert_not_awaited()


@pytest.mark.anyio
async def test_http_error_becomes_backend_error(mock_http: AsyncMock) -> None:
    response = _response(status_code=500)
    response.raise_for_status.side_effect = httpx.HTTPStatusError(
        "boom", request=MagicMock(), response=MagicMock()
    )
    mock_http.request = AsyncMock(return_value=response)

    with pytest.raises(BackendError):
        await _client(mock_http).insert_expenses([{"amount": 1.0}], "tok")


@pytest.mark.anyio
async def test_transport_error_becomes_backend_error(mock_http: AsyncMock) -> None:
    mock_http.request = AsyncMock(side_effect=httpx.ConnectError("connection refused"))

    with pytest.raises(BackendError):
        await _client(mock_http).get_categories("user-1", "tok")


@pytest.mark.anyio
async def test_not_configured() -> None:
    client = SupabaseClient(base_url="", api_key="")
    assert client.configured is False
    with pytest.raises(BackendNotConfigured):
        await client.get_user("tok")


@pytest.mark.anyio
async def test_aclose_closes_client(mock_http: AsyncMock) -> None:
    mock_http.aclose = AsyncMock()
    await _client(mock_http).aclose()
    mock_http.aclose.assert_awaited_once()


@pytest.mark.anyio
async def test_aclose_skips_closed_client(mock_http: AsyncMock) -> None:
    mock_http.is_closed = True
    mock_http.aclose = AsyncMock()
    await _client(mock_http).aclose()
    mock_http.aclose.assert_not_awaited()


@pytest.mark.anyio
async def test_aclose_without_client() -> None:
    await SupabaseClient(base_url="http://test", api_key="key").aclose()


def test_refresh_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://env.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "env-key")
    monkeypatch.setenv("SUPABASE_TIMEOUT", "not-a-number")

    client = SupabaseClient()

    assert client.base_url == "https://env.supabase.co"
    assert client.api_key == "env-key"
    assert client.configured
    assert client.timeout == 30.0
