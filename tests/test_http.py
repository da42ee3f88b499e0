import json

import pytest
import responses

from difysdk.http import DifyAPIError, HttpClient, error_event
from difysdk.types import ChatRequest

SERVER = "http://api.example.com/v1"


@pytest.fixture
def client():
    return HttpClient(SERVER, "placeholder", user="tester", timeout=30.0)


@pytest.fixture
def rsps():
    with responses.RequestsMock() as mock:
        yield mock


def test_requires_api_server():
    with pytest.raises(ValueError, match="api_server"):
        HttpClient("", "placeholder")


def test_requires_api_key():
    with pytest.raises(ValueError, match="api_key"):
        HttpClient(SERVER, "")


def test_trailing_slashes_are_trimmed():
    http = HttpClient(SERVER + "//", "placeholder")
    assert http.api_server == SERVER


def test_create_base_request_sets_headers_and_body(client):
    req = client.create_base_request("POST", "/chat-messages", {"user": "tester"})
    assert req.method == "POST"
    assert req.url == SERVER + "/chat-messages"
    assert req.headers["Authorization"] == "Bearer placeholder"
    assert req.headers["Cache-Control"] == "no-cache"
    assert req.headers["Content-Type"] == "application/json; charset=utf-8"
    assert json.loads(req.body) == {"user": "tester"}


def test_create_base_request_without_body(client):
    req = client.create_base_request("GET", "/info", None)
    assert req.body is None
    assert req.url == SERVER + "/info"


def test_create_base_request_uses_to_dict(client):
    chat = ChatRequest(query="你好", inputs={"name": "张三"}, user="tester")
    req = client.create_base_request("POST", "/chat-messages", chat)
    assert json.loads(req.body.decode("utf-8")) == chat.to_dict()


def test_create_form_request_is_multipart(client):
    req = client.create_form_request("POST", "/text-to-audio", {"text": "hello", "user": "tester"})
    assert req.headers["Content-Type"].startswith("multipart/form-data; boundary=")
    assert req.headers["Authorization"] == "Bearer placeholder"
    assert b'name="text"' in req.body
    assert b"hello" in req.body
    assert b'name="user"' in req.body


def test_send_json_request_returns_decoded_body(client, rsps):
    rsps.add(responses.GET, SERVER + "/info", json={"name": "demo", "tags": ["a"]})
    result = client.send_json_request(client.create_base_request("GET", "/info", None))
    assert result == {"name": "demo", "tags": ["a"]}


def test_send_json_request_raises_api_error(client, rsps):
    rsps.add(
        responses.GET,
        SERVER + "/info",
        json={"code": "unauthorized", "message": "bad key", "status": 401},
        status=401,
    )
    with pytest.raises(DifyAPIError) as info:
        client.send_json_request(client.create_base_request("GET", "/info", None))
    assert info.value.status == 401
    assert info.value.code == "unauthorized"
    assert info.value.message == "bad key"
    assert str(info.value) == "ERROR: 401 [unauthorized] bad key"


def test_send_json_request_with_unreadable_error_body(client, rsps):
    rsps.add(responses.GET, SERVER + "/info", body="gateway down", status=502)
    with pytest.raises(ValueError):
        client.send_json_request(client.create_base_request("GET", "/info", None))


def test_send_raw_request_posts_json(client, rsps):
    rsps.add(responses.POST, SERVER + "/workflows/run", body="data: {}\n")
    response = client.send_raw_request("POST", "/workflows/run", {"inputs": {}})
    assert response.status_code == 200
    sent = rsps.calls[0].request
    assert json.loads(sent.body) == {"inputs": {}}


def test_error_event_format():
    assert error_event(400, "bad", "oops") == (
        '{"event":"error","status":"400","code":"bad","message":"oops"}'
    )


def test_error_event_round_trips_special_characters():
    decoded = json.loads(error_event("500", "x", 'say "hi"\n'))
    assert decoded == {"event": "error", "status": "500", "code": "x", "message": 'say "hi"\n'}


def test_sse_events_yields_data_and_skips_pings(client, rsps):
    body = 'data: {"event":"message","answer":"a"}\n\nevent: ping\n\ndata: {"event":"message_end"}\n\n'
    rsps.add(responses.POST, SERVER + "/chat-messages", body=body)
    response = client.send_raw_request("POST", "/chat-messages", {})
    events = list(client.sse_events(response))
    assert events == ['{"event":"message","answer":"a"}', '{"event":"message_end"}']


def test_sse_events_reports_error_body(client, rsps):
    body = '{"code": "invalid_param", "message": "missing query", "status": 400}\n'
    rsps.add(responses.POST, SERVER + "/chat-messages", body=body, status=400)
    response = client.send_raw_request("POST", "/chat-messages", {})
    events = list(client.sse_events(response))
    assert len(events) == 1
    assert json.loads(events[0]) == {
        "event": "error",
        "status": "400",
        "code": "invalid_param",
        "message": "missing query",
    }


def test_sse_events_reports_unparsable_error_body(client, rsps):
    rsps.add(responses.POST, SERVER + "/chat-messages", body="Bad Gateway\n", status=502)
    response = client.send_raw_request("POST", "/chat-messages", {})
    events = [json.loads(e) for e in client.sse_events(response)]
    assert len(events) == 1
    assert events[0]["status"] == "500"
    assert events[0]["code"] == "handleErrorResponse:json unmarshal err"
    assert events[0]["message"].endswith("data:Bad Gateway")


def test_sse_events_drops_unterminated_last_line(client, rsps):
    body = 'data: {"event":"message"}\ndata: {"event":"partial"}'
    rsps.add(responses.POST, SERVER + "/chat-messages", body=body)
    response = client.send_raw_request("POST", "/chat-messages", {})
    assert list(client.sse_events(response)) == ['{"event":"message"}']


def test_sse_events_empty_stream_yields_nothing(client, rsps):
    rsps.add(responses.POST, SERVER + "/chat-messages", body="\n\nevent: ping\n")
    response = client.send_raw_request("POST", "/chat-messages", {})
    assert list(client.sse_events(response)) == []