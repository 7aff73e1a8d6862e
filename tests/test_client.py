"""
Tests for the HTTP API client.
"""

import json

import httpx
import pytest

from client.api import (
    REGISTRATION_TEMPLATE,
    ApiClientError,
    Nyc58Client,
    build_url,
    handle_response,
)


def _mock_client(handler) -> Nyc58Client:
    return Nyc58Client("http://api.test/", http_client=httpx.Client(transport=httpx.MockTransport(handler)))


class TestBuildUrl:
    def test_joins_without_double_slash(self):
        assert build_url("http://api.test/", "/health") == "http://api.test/health"

    def test_adds_leading_slash(self):
        assert build_url("http://api.test", "health") == "http://api.test/health"

    def test_empty_base_stays_relative(self):
        assert build_url("", "api/v1/user-info") == "/api/v1/user-info"


class TestHandleResponse:
    def test_json_success(self):
        assert handle_response(httpx.Response(200, json={"ok": 1})) == {"ok": 1}

    def test_json_error_uses_message(self):
        with pytest.raises(ApiClientError) as info:
            handle_response(httpx.Response(409, json={"success": False, "message": "User already exists"}))
        assert info.value.message == "User already exists"
        assert info.value.status == 409
        assert info.value.payload["success"] is False

    def test_text_error_uses_body(self):
        with pytest.raises(ApiClientError, match="Bad Gateway"):
            handle_response(httpx.Response(502, text="Bad Gateway"))

    def test_empty_error_falls_back_to_status(self):
        with pytest.raises(ApiClientError, match="Request failed with status 500"):
            handle_response(httpx.Response(500))


class TestNyc58Client:
    def test_register_merges_template(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={"success": True, "data": {"userId": 1}})

        result = _mock_client(handler).register("alice", "a@b.com", "secret1", "secret1")
        assert result["data"]["userId"] == 1
        assert seen["url"] == "http://api.test/api/v1/user/registration"
        assert seen["body"] == {
            "username": "alice",
            "email": "a@b.com",
            "password": "secret1",
            "confirmPassword": "secret1",
        }

    def test_template_is_immutable(self):
        with pytest.raises(TypeError):
            REGISTRATION_TEMPLATE["username"] = "x"

    def test_login_failure_raises(self):
        def handler(request):
            return httpx.Response(401, json={"success": False, "message": "Invalid credentials"})

        with pytest.raises(ApiClientError) as info:
            _mock_client(handler).login("a@b.com", "wrong")
        assert info.value.status == 401

    def test_round_trip_against_app(self, client, alice):
        api = Nyc58Client("http://testserver", http_client=client)
        registered = api.register(
            alice["username"], alice["email"], alice["password"], alice["confirmPassword"],
            phone="555-0100",
        )["data"]
        api.login("a@b.com", "secret1")
        me = api.current_user()["data"]
        assert me["userId"] == registered["userId"]
        assert me["phone"] == "555-0100"
        assert api.health() == {"status": "ok"}

    def test_current_user_without_login(self, client):
        api = Nyc58Client("http://testserver", http_client=client)
        with pytest.raises(ApiClientError, match="Not authenticated"):
            api.current_user()
