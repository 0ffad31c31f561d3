"""Tests for request dispatch and error classification."""

import json
import logging

import httpx
import pytest

from geotab import (
    ApiError,
    ErrorKind,
    Failure,
    GeotabClient,
    GeotabError,
    IncorrectCredentialsError,
    Success,
)

URL = "https://my.geotab.com/apiv1/"
PAYLOAD = {"method": "Get", "params": {"typeName": "Device", "credentials": {}, "search": {}}}
CREDENTIALS_MESSAGE = "Incorrect MyGeotab login credentials @ 'demo_db'"


def test_post_returns_success(client, fake_geotab):
    fake_geotab.reply({"result": [{"id": "b1"}]})

    response = client.post(URL, PAYLOAD)

    assert response == Success(result=[{"id": "b1"}])
    assert len(fake_geotab.requests) == 1
    assert json.loads(fake_geotab.requests[0].content) == PAYLOAD


def test_post_classifies_credentials_error(client, fake_geotab):
    fake_geotab.reply(
        {
            "error": {
                "errors": [
                    {"message": CREDENTIALS_MESSAGE, "name": "InvalidUserException"},
                    {"message": "second"},
                ]
            }
        }
    )

    response = client.post(URL, PAYLOAD)

    assert isinstance(response, Failure)
    assert response.kind is ErrorKind.INCORRECT_CREDENTIALS
    assert response.message == CREDENTIALS_MESSAGE
    assert response.code == "InvalidUserException"
    assert len(response.errors) == 2


def test_post_classifies_other_errors(client, fake_geotab):
    fake_geotab.reply({"error": {"errors": [{"message": "Something else"}]}})

    response = client.post(URL, PAYLOAD)

    assert isinstance(response, Failure)
    assert response.kind is ErrorKind.API
    assert response.message == "Something else"
    assert response.code is None


def test_post_error_without_entries(client, fake_geotab):
    fake_geotab.reply({"error": {"message": "Top level failure", "errors": []}})

    response = client.post(URL, PAYLOAD)

    assert response.kind is ErrorKind.API
    assert response.message == "Top level failure"


def test_call_raises_credentials_error(client, fake_geotab):
    fake_geotab.reply({"error": {"errors": [{"message": CREDENTIALS_MESSAGE}]}})

    with pytest.raises(IncorrectCredentialsError) as exc_info:
        client.call(URL, PAYLOAD)

    assert str(exc_info.value) == CREDENTIALS_MESSAGE
    assert not isinstance(exc_info.value, ApiError)
    assert isinstance(exc_info.value, GeotabError)


def test_call_raises_api_error(client, fake_geotab):
    fake_geotab.reply({"error": {"errors": [{"message": "Something else", "name": "ArgumentException"}]}})

    with pytest.raises(ApiError) as exc_info:
        client.call(URL, PAYLOAD)

    assert exc_info.value.message == "Something else"
    assert exc_info.value.code == "ArgumentException"


def test_call_returns_result(client, fake_geotab):
    fake_geotab.reply({"result": {"data": [], "toVersion": "1"}})

    assert client.call(URL, PAYLOAD) == {"data": [], "toVersion": "1"}


def test_error_envelope_on_http_error_status_is_classified(client, fake_geotab):
    fake_geotab.reply({"error": {"errors": [{"message": "Server busy"}]}}, status_code=500)

    with pytest.raises(ApiError, match="Server busy"):
        client.call(URL, PAYLOAD)


def test_http_error_status_propagates(client, fake_geotab):
    fake_geotab.reply({"unexpected": True}, status_code=502)

    with pytest.raises(httpx.HTTPStatusError):
        client.call(URL, PAYLOAD)


def test_malformed_json_propagates(client, fake_geotab):
    fake_geotab.reply_raw(b"<html>oops</html>")

    with pytest.raises(json.JSONDecodeError):
        client.call(URL, PAYLOAD)


def test_non_object_body_is_rejected(client, fake_geotab):
    fake_geotab.reply([1, 2, 3])

    with pytest.raises(ValueError, match="list"):
        client.call(URL, PAYLOAD)


def test_transport_errors_propagate():
    def refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)

    with GeotabClient(transport=httpx.MockTransport(refuse)) as client:
        with pytest.raises(httpx.ConnectError):
            client.call(URL, PAYLOAD)


def test_logging_never_includes_credentials(client, fake_geotab, caplog):
    fake_geotab.reply({"error": {"errors": [{"message": "Something else"}]}})
    payload = {
        "method": "Get",
        "params": {"typeName": "Device", "credentials": {"password": "hunter2"}, "search": {}},
    }

    with caplog.at_level(logging.DEBUG, logger="geotab"):
        client.post(URL, payload)

    assert "Get request for Device" in caplog.text
    assert "Something else" in caplog.text
    assert "hunter2" not in caplog.text


@pytest.mark.parametrize(
    "body,message",
    [
        ({"error": {}}, "Unknown Geotab API error"),
        ({"error": "Internal failure"}, "Internal failure"),
        ({"error": {"errors": ["not an object"], "message": "Fallback"}}, "Fallback"),
    ],
)
def test_any_error_member_is_classified(client, fake_geotab, body, message):
    fake_geotab.reply(body)

    response = client.post(URL, PAYLOAD)

    assert isinstance(response, Failure)
    assert response.kind is ErrorKind.API
    assert response.message == message


def test_html_error_page_raises_status_error(client, fake_geotab):
    fake_geotab.reply_raw(b"<html>Bad Gateway</html>", status_code=502)

    with pytest.raises(httpx.HTTPStatusError):
        client.call(URL, PAYLOAD)
