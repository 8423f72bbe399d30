"""Tests for the dashboard's HTTP client."""

import json
import httpx
import pytest
from portfolio_app.services.api_client import PortfolioApiClient


def make_client(handler, token=None):
    return PortfolioApiClient("http://api.test/", token=token, transport=httpx.MockTransport(handler))


def test_login_keeps_token_for_later_requests():
    seen = []

    def handler(request):
        seen.append((request.method, request.url.path, request.headers.get("authorization")))
        if request.url.path == "/api/v1/auth/login":
            assert json.loads(request.content) == {"email": "a@example.com", "password": "pw"}
            return httpx.Response(200, json={"access_token": "tok", "token_type": "bearer"})
        return httpx.Response(200, json=[{"id": "1", "name": "Go"}])

    client = make_client(handler)
    client.login("a@example.com", "pw")
    records = client.list_records("skills")

    assert records == [{"id": "1", "name": "Go"}]
    assert seen[1] == ("GET", "/api/v1/skills", "Bearer tok")


def test_delete_returns_none_on_204():
    client = make_client(lambda request: httpx.Response(204), token="tok")

    assert client.delete_record("projects", "1") is None


def test_errors_raise_http_status_error():
    client = make_client(lambda request: httpx.Response(503, json={"detail": "offline"}), token="tok")

    with pytest.raises(httpx.HTTPStatusError):
        client.add_record("projects", {"title": "T"})


def test_move_category_and_next_order():
    def handler(request):
        if request.url.path.endswith("/next-order"):
            return httpx.Response(200, json={"order": 4})
        assert request.url.path == "/api/v1/skill-categories/b/move"
        assert json.loads(request.content) == {"direction": "up"}
        return httpx.Response(200, json=[{"id": "b", "name": "B", "order": 1}])

    client = make_client(handler, token="tok")

    assert client.next_category_order() == 4
    assert client.move_category("b", "up")[0]["order"] == 1


def test_logout_forgets_token():
    client = make_client(lambda request: httpx.Response(204), token="tok")

    client.logout()

    assert client.token is None
