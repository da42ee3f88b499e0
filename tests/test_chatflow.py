import json
from urllib.parse import parse_qs, urlsplit

import pytest
import responses

from difysdk.chatflow import ChatflowApp
from difysdk.http import HttpClient
from difysdk.types import ChatRequest

API = "http://dify.example.com/v1"


@pytest.fixture
def rsps():
    with responses.RequestsMock() as mock:
        yield mock


def _app():
    return ChatflowApp(HttpClient(API, "placeholder", user="chatflow-demo", timeout=180))


def _sse(*events):
    return "".join(f"data: {json.dumps(e, ensure_ascii=False)}\n\n" for e in events)


def test_run_block(rsps):
    rsps.add(
        responses.POST,
        API + "/chat-messages",
        json={"mode": "advanced-chat", "answer": "张三", "conversation_id": "c1"},
    )
    resp = _app().run_block(ChatRequest(query="你好!你知道我是谁么？", inputs={"name": "张三"}))
    assert resp.mode == "advanced-chat"
    assert resp.conversation_id == "c1"
    body = json.loads(rsps.calls[0].request.body)
    assert body["response_mode"] == "blocking"
    assert body["user"] == "chatflow-demo"


def test_run_streams_workflow_events(rsps):
    body = "event: ping\n\n" + _sse(
        {"event": "workflow_started", "task_id": "t1", "workflow_run_id": "r1", "data": {"id": "r1"}},
        {"event": "message", "task_id": "t1", "answer": "hi"},
        {"event": "workflow_finished", "task_id": "t1", "data": {"status": "succeeded"}},
    )
    rsps.add(responses.POST, API + "/chat-messages", body=body, content_type="text/event-stream")
    chunks = list(_app().run(ChatRequest(query="q", inputs={"name": "张三"})))
    assert [c.event for c in chunks] == ["workflow_started", "message", "workflow_finished"]
    assert chunks[0].workflow_run_id == "r1"
    assert chunks[2].data.status == "succeeded"


def test_run_error_reply_becomes_error_event(rsps):
    rsps.add(
        responses.POST,
        API + "/chat-messages",
        status=400,
        body=json.dumps({"code": "invalid_param", "message": "bad", "status": 400}) + "\n",
    )
    chunks = list(_app().run(ChatRequest(query="q")))
    assert len(chunks) == 1
    assert chunks[0].event == "error"
    assert chunks[0].status == "400"
    assert chunks[0].code == "invalid_param"
    assert chunks[0].message == "bad"


def test_run_then_stop(rsps):
    events = [{"event": "message", "task_id": "task-7", "answer": "x"} for _ in range(4)]
    rsps.add(responses.POST, API + "/chat-messages", body=_sse(*events), content_type="text/event-stream")
    rsps.add(responses.POST, API + "/chat-messages/task-7/stop", json={"result": "success"})
    app = _app()
    stopped = []
    for count, msg in enumerate(app.run(ChatRequest(query="q")), start=1):
        if count == 4:
            app.stop(msg.task_id, "")
            stopped.append(msg.task_id)
    assert stopped == ["task-7"]
    assert json.loads(rsps.calls[1].request.body) == {"user": "chatflow-demo"}


def test_stop_failure_raises(rsps):
    rsps.add(responses.POST, API + "/chat-messages/t2/stop", json={"result": "error"})
    with pytest.raises(RuntimeError):
        _app().stop("t2", "someone")


def test_history_pro(rsps):
    rsps.add(responses.GET, API + "/messages", json={"data": [{"id": "m1", "answer": "a"}], "limit": 20})
    resp = _app().history_pro("0a9a0917-0c36-4121-8934-17367bb803c0", "", "", 20)
    assert [m.id for m in resp.data] == ["m1"]
    query = parse_qs(urlsplit(rsps.calls[0].request.url).query, keep_blank_values=True)
    assert query["conversation_id"] == ["0a9a0917-0c36-4121-8934-17367bb803c0"]
    assert query["user"] == ["chatflow-demo"]
    assert query["limit"] == ["20"]


def test_suggested_questions(rsps):
    url = API + "/messages/c71918e4-bb23-4ff9-bb63-e5fa5aaf6afa/suggested"
    rsps.add(responses.GET, url, json={"result": "success", "data": ["a", "b"]})
    assert _app().suggested_questions("c71918e4-bb23-4ff9-bb63-e5fa5aaf6afa", "") == ["a", "b"]