import requests

from telegram_error_notifier.errorRecord import NO_RESPONSE, ErrorRecord
from tests.conftest import make_response


def test_http_error_captures_status_reason_and_json_body():
    resp = make_response(404, {"error": "not found"}, reason="Not Found")
    exc = requests.HTTPError("404 Client Error", response=resp)

    record = ErrorRecord.from_exception(
        exc,
        url="https://api.example.com/items",
        method="GET",
        headers={"X-Trace": "abc"},
        params={"page": 2},
        data=None,
    )

    assert record.status == 404
    assert record.status_text == "Not Found"
    assert record.response_data == {"error": "not found"}
    assert record.params == {"page": 2}
    assert record.data == {}
    assert record.headers == {"X-Trace": "abc"}


def test_non_json_body_is_kept_as_text():
    resp = make_response(502, "<html>Bad Gateway</html>", reason="Bad Gateway")
    record = ErrorRecord.from_exception(requests.HTTPError(response=resp), url="u", method="POST")

    assert record.response_data == "<html>Bad Gateway</html>"


def test_network_failure_uses_no_response_sentinel():
    exc = requests.ConnectionError("connection refused")

    record = ErrorRecord.from_exception(exc, url="https://down.example.com", method="GET")

    assert record.status == NO_RESPONSE
    assert record.status_text == NO_RESPONSE
    assert record.response_data == NO_RESPONSE


def test_missing_request_fields_default_to_empty_mappings():
    record = ErrorRecord.from_exception(requests.Timeout("slow"))

    assert record.url == ""
    assert record.method == ""
    assert record.headers == {}
    assert record.params == {}
    assert record.data == {}


def test_prepared_request_fills_url_method_and_merged_headers():
    prepared = requests.Request("PUT", "https://api.example.com/x", headers={"A": "1"}).prepare()
    exc = requests.ConnectionError("boom", request=prepared)

    record = ErrorRecord.from_exception(exc)

    assert record.url == "https://api.example.com/x"
    assert record.method == "PUT"
    assert record.headers["A"] == "1"


def test_as_document_shape():
    record = ErrorRecord(url="u", method="GET", data={"a": 1}, response_data={"b": 2})

    assert record.as_document() == {
        "request": {"url": "u", "method": "GET", "headers": {}, "params": {}, "data": {"a": 1}},
        "response": {"b": 2},
    }
