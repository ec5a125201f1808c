"""
Test Fetch Client - retries, linear backoff and FetchError
"""

from unittest.mock import MagicMock, Mock

import pytest
import requests

from mfl_salaries.coreutils.request import FetchError, fetch_json, new_session

URL = "https://example.test/2024/export?TYPE=rosters"


def _response(status=200, payload=None, json_error=None):
    response = Mock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.reason = "OK" if response.ok else "Server Error"
    if json_error:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


def test_fetch_json_success_first_try():
    session = MagicMock()
    session.get.return_value = _response(payload={"rosters": {}})
    sleep = Mock()

    assert fetch_json(session, URL, sleep=sleep) == {"rosters": {}}
    session.get.assert_called_once()
    sleep.assert_not_called()


def test_fetch_json_retries_with_linear_backoff():
    session = MagicMock()
    session.get.side_effect = [
        requests.ConnectionError("connection reset"),
        _response(status=503),
        _response(payload={"players": {}}),
    ]
    sleep = Mock()

    result = fetch_json(session, URL, backoff_seconds=1.5, sleep=sleep)

    assert result == {"players": {}}
    assert session.get.call_count == 3
    assert [c.args[0] for c in sleep.call_args_list] == [1.5, 3.0]


def test_fetch_json_error_body_is_retried():
    session = MagicMock()
    session.get.side_effect = [
        _response(payload={"error": {"$t": "API rate limit"}}),
        _response(payload={"auctionResults": {}}),
    ]
    sleep = Mock()

    assert fetch_json(session, URL, sleep=sleep) == {"auctionResults": {}}
    sleep.assert_called_once_with(1.5)


def test_fetch_json_raises_after_three_attempts():
    session = MagicMock()
    session.get.return_value = _response(status=500)
    sleep = Mock()

    with pytest.raises(FetchError) as excinfo:
        fetch_json(session, URL, sleep=sleep)

    assert session.get.call_count == 3
    assert sleep.call_count == 2
    assert excinfo.value.url == URL
    assert "HTTP 500" in excinfo.value.message
    assert str(excinfo.value).startswith(f"Failed after 3 attempts: {URL}")


def test_fetch_json_invalid_json_is_retried_then_fails():
    session = MagicMock()
    session.get.return_value = _response(json_error=ValueError("Expecting value"))

    with pytest.raises(FetchError) as excinfo:
        fetch_json(session, URL, sleep=Mock())

    assert "Expecting value" in excinfo.value.message


def test_new_session_headers():
    session = new_session()
    assert session.headers["Accept"] == "application/json"
    assert session.headers["User-Agent"].startswith("mfl-salaries/")
