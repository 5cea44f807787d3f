import json
from unittest import mock

import pytest
import requests

from core.errors import APIError, AuthenticationError, RegistrationError
from models import Credentials, Sentiment
from utils.api_client import APIClient


def make_response(status_code=200, body=None):
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = json.dumps(body).encode() if body is not None else b""
    resp.headers["Content-Type"] = "application/json"
    return resp


@pytest.fixture
def http():
    return mock.Mock(spec=requests.Session)


@pytest.fixture
def client(http):
    return APIClient("http://journal.test/", token_provider=lambda: "tok", timeout=5, session=http)


def test_authenticate(client, http):
    http.request.return_value = make_response(200, {"access": "a", "refresh": "r"})

    assert client.authenticate("alice", "pw") == Credentials("a", "r")

    method, url = http.request.call_args.args
    assert (method, url) == ("POST", "http://journal.test/api/token/")
    assert http.request.call_args.kwargs["json"] == {"username": "alice", "password": "pw"}
    assert "Authorization" not in http.request.call_args.kwargs["headers"]


def test_bad_credentials(client, http):
    http.request.return_value = make_response(401, {"detail": "No active account found"})

    with pytest.raises(AuthenticationError, match="No active account found"):
        client.authenticate("alice", "wrong")


def test_register_field_errors(client, http):
    http.request.return_value = make_response(400, {"username": ["A user with that username already exists."]})

    with pytest.raises(RegistrationError, match="username: A user with that username already exists."):
        client.register("alice", "a@example.com", "pw")


def test_connection_error(client, http):
    http.request.side_effect = requests.exceptions.ConnectionError()

    with pytest.raises(APIError) as excinfo:
        client.fetch_entries()
    assert excinfo.value.is_connection_error


def test_register_connection_error_is_not_registration_error(client, http):
    http.request.side_effect = requests.exceptions.ConnectionError()

    with pytest.raises(APIError) as excinfo:
        client.register("alice", "a@example.com", "pw")
    assert not isinstance(excinfo.value, RegistrationError)


def test_fetch_entries_sends_bearer_token(client, http):
    http.request.return_value = make_response(200, [
        {"id": 2, "user": 1, "content": "b", "created_at": "2024-01-02T10:00:00Z",
         "sentiment": None, "emotions": None},
        {"id": 1, "user": 1, "content": "a", "created_at": "2024-01-01T10:00:00Z",
         "sentiment": "Neutral", "emotions": ["calm"]},
    ])

    entries = client.fetch_entries()

    assert [e.id for e in entries] == [2, 1]
    assert entries[1].sentiment is Sentiment.NEUTRAL
    assert http.request.call_args.kwargs["headers"]["Authorization"] == "Bearer tok"
    assert http.request.call_args.kwargs["timeout"] == 5


def test_fetch_entries_paginated(client, http):
    http.request.return_value = make_response(200, {"count": 0, "results": []})
    assert client.fetch_entries() == []


def test_create_and_analyze(client, http):
    http.request.side_effect = [
        make_response(201, {"id": 9, "user": 1, "content": "text", "created_at": "2024-01-01T10:00:00Z",
                            "sentiment": None, "emotions": None}),
        make_response(200, {"sentiment": "Negative", "emotions": ["sadness"],
                            "feedback": "f", "affirmation": "a"}),
    ]

    entry = client.create_entry("text")
    result = client.analyze(entry.id)

    assert entry.id == 9
    assert result.sentiment is Sentiment.NEGATIVE
    urls = [c.args[1] for c in http.request.call_args_list]
    assert urls == ["http://journal.test/api/journal/", "http://journal.test/api/journal/9/analyze/"]


def test_server_error_keeps_status(client, http):
    http.request.return_value = make_response(503, {"detail": "Analysis backend unavailable"})

    with pytest.raises(APIError) as excinfo:
        client.analyze(1)
    assert excinfo.value.status_code == 503
    assert str(excinfo.value) == "Analysis backend unavailable"


def test_verify_and_refresh(client, http):
    http.request.side_effect = [
        make_response(401, {"detail": "Token is invalid or expired"}),
        make_response(200, {"access": "new"}),
    ]

    with pytest.raises(AuthenticationError):
        client.verify("old")
    assert client.refresh("ref") == "new"


def test_verify_server_error_is_not_auth_failure(client, http):
    http.request.return_value = make_response(500)

    with pytest.raises(APIError) as excinfo:
        client.verify("tok")
    assert not isinstance(excinfo.value, AuthenticationError)


# =============================================================================
# Malformed bodies
# =============================================================================

@pytest.mark.parametrize("item", [
    {"id": 1, "user": 1, "content": "x", "created_at": "2024-01-01T10:00:00Z",
     "sentiment": None, "emotions": []},
    {"id": 1, "user": 1, "content": "x", "created_at": "2024-01-01T10:00:00Z",
     "sentiment": "Ecstatic", "emotions": ["joy"]},
    {"id": 1, "user": 1, "content": "x", "sentiment": None, "emotions": None},
    {"id": 1, "user": 1, "content": "x", "created_at": "yesterday",
     "sentiment": None, "emotions": None},
])
def test_malformed_entry_becomes_api_error(client, http, item):
    http.request.return_value = make_response(200, [item])

    with pytest.raises(APIError, match="Unexpected response from /api/journal/") as excinfo:
        client.fetch_entries()
    assert isinstance(excinfo.value.__cause__, (KeyError, ValueError))


def test_malformed_created_entry_becomes_api_error(client, http):
    http.request.return_value = make_response(201, {"content": "text"})

    with pytest.raises(APIError):
        client.create_entry("text")


def test_refresh_without_access_becomes_api_error(client, http):
    http.request.return_value = make_response(200, {"refresh": "r"})

    with pytest.raises(APIError, match="/api/token/refresh/"):
        client.refresh("r")


def test_empty_token_body_becomes_api_error(client, http):
    http.request.return_value = make_response(200)

    with pytest.raises(APIError) as excinfo:
        client.authenticate("alice", "pw")
    assert not isinstance(excinfo.value, AuthenticationError)
