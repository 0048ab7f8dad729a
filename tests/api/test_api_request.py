import pytest
import requests

from src.field_service.field_service.api.http_base import api_request
from src.field_service.field_service.core.exceptions import (
    ApiError,
    AuthorizationError,
    BackendUnavailableError,
    NotFoundError,
)


def test_returns_decoded_json_and_sends_bearer_token(conn, fake_session):
    fake_session.respond("GET", "/api/promotions", [{"id": 1}])

    assert api_request(conn, "GET", "/api/promotions") == [{"id": 1}]

    call = fake_session.calls[0]
    assert call["headers"]["Authorization"] == "Bearer t"
    assert call["json"] is None


def test_body_is_sent_as_json_only_when_given(conn, fake_session):
    fake_session.respond("POST", "/api/calls/end", {"ok": True})

    api_request(conn, "POST", "/api/calls/end", {"callId": "c1"})

    assert fake_session.calls[0]["json"] == {"callId": "c1"}


def test_empty_body_decodes_to_none(conn, fake_session):
    fake_session.respond("DELETE", "/api/promotions/3", status=204, text="")

    assert api_request(conn, "DELETE", "/api/promotions/3") is None


@pytest.mark.parametrize(
    "status, exc_type",
    [(401, AuthorizationError), (403, AuthorizationError), (404, NotFoundError), (500, ApiError)],
)
def test_failure_status_maps_to_error_type(conn, fake_session, status, exc_type):
    fake_session.respond("GET", "/api/x", {"message": "nope"}, status=status)

    with pytest.raises(exc_type) as info:
        api_request(conn, "GET", "/api/x")

    assert str(info.value) == "nope"
    assert info.value.status == status
    assert info.value.path == "/api/x"


def test_error_message_falls_back_to_raw_text(conn, fake_session):
    fake_session.respond("GET", "/api/x", status=502, text="Bad gateway")

    with pytest.raises(ApiError, match="Bad gateway"):
        api_request(conn, "GET", "/api/x")


def test_transport_failure_raises_backend_unavailable(conn, fake_session):
    fake_session.fail("GET", "/api/x", requests.ConnectionError("refused"))

    with pytest.raises(BackendUnavailableError) as info:
        api_request(conn, "GET", "/api/x")

    assert info.value.status == 0
