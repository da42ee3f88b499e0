import json

import pytest
import responses

from difysdk.chatbot import AppType, ChatbotApp
from difysdk.http import DifyAPIError, HttpClient
from difysdk.types import ChatRequest, Feedback, FeedbackRequest, ConversationRenameRequest

API = "http://dify.example.com/v1"


@pytest.fixture
def rsps():
    with responses.RequestsMock() as mock:
        yield mock


def _app(app_type=AppType.CHATBOT, user="chatbot-demo"):
    http = HttpClient(API, "placeholder", user=user, timeout=180)
    return ChatbotApp(http, app_type)


def _sse(*events):
    return "".join(f"data: {json.dumps(e, ensure_ascii=False)}\n\n" for e in events)


def test_run_block_sends_blocking_request(rsps):
    rsps.add(
        responses.POST,
        API + "/chat-messages",
        json={"id": "m1", "message_id": "m1", "mode": "chat", "answer": "你好", "event": "message"},
    )
    resp = _app().run_block(ChatRequest(query="你好!你知道我是谁么？", inputs={"name": "张三"}))
    assert resp.answer == "你好"
    assert resp.mode == "chat"
    body = json.loads(rsps.calls[0].request.body)
    assert body["response_mode"] == "blocking"
    assert body["user"] == "chatbot-demo"
    assert body["inputs"] == {"name": "张三"}
    assert body["query"] == "你好!你知道我是谁么？"
    assert rsps.calls[0].request.headers["Authorization"] == "Bearer placeholder"


def test_run_block_defaults_inputs_to_empty_object(rsps):
    rsps.add(responses.POST, API + "/chat-messages", json={"answer": "ok"})
    resp = _app().run_block(ChatRequest(query="q"))
    assert resp.answer == "ok"
    assert json.loads(rsps.calls[0].request.body)["inputs"] == {}


def test_run_block_does_not_change_callers_request(rsps):
    rsps.add(responses.POST, API + "/chat-messages", json={"answer": "ok"})
    request = ChatRequest(query="q")
    _app().run_block(request)
    assert request.response_mode == ""
    assert request.user == ""


def test_agent_does_not_support_blocking(rsps):
    with pytest.raises(ValueError, match="agent app does not support blocking"):
        _app(AppType.AGENT, "agent-demo").run_block(ChatRequest(query="q"))
    assert len(rsps.calls) == 0


def test_run_block_error_reply(rsps):
    rsps.add(
        responses.POST,
        API + "/chat-messages",
        status=400,
        json={"code": "invalid_param", "message": "bad", "status": 400},
    )
    with pytest.raises(DifyAPIError) as info:
        _app().run_block(ChatRequest(query="q"))
    assert info.value.status == 400
    assert info.value.code == "invalid_param"


def test_run_streams_chunks(rsps):
    body = _sse(
        {"event": "message", "task_id": "t1", "answer": "国庆"},
        {"event": "message", "task_id": "t1", "answer": "计划"},
        {"event": "message_end", "task_id": "t1"},
    )
    rsps.add(responses.POST, API + "/chat-messages", body=body, content_type="text/event-stream")
    chunks = list(
        _app().run(ChatRequest(query="帮我构思一个国庆五天的出游计划，尽可能详细一点", inputs={"name": "张三"}))
    )
    assert [c.answer for c in chunks] == ["国庆", "计划", ""]
    assert chunks[-1].event == "message_end"
    sent = json.loads(rsps.calls[0].request.body)
    assert sent["response_mode"] == "streaming"
    assert sent["user"] == "chatbot-demo"


def test_run_reports_undecodable_chunk_as_error(rsps):
    body = "data: {not json\n\n" + _sse({"event": "message", "answer": "a"})
    rsps.add(responses.POST, API + "/chat-messages", body=body, content_type="text/event-stream")
    chunks = list(_app().run(ChatRequest(query="q")))
    assert chunks[0].event == "error"
    assert chunks[0].status == "500"
    assert chunks[0].code == "json unmarshal error"
    assert chunks[1].answer == "a"


def test_run_then_stop_after_four_chunks(rsps):
    events = [{"event": "message", "task_id": "task-1", "answer": str(i)} for i in range(6)]
    rsps.add(responses.POST, API + "/chat-messages", body=_sse(*events), content_type="text/event-stream")
    rsps.add(responses.POST, API + "/chat-messages/task-1/stop", json={"result": "success"})
    app = _app()
    answers = []
    stop_results = []
    for msg in app.run(ChatRequest(query="q", inputs={"name": "张三"})):
        answers.append(msg.answer)
        if len(answers) == 4:
            stop_results.append(app.stop(msg.task_id, ""))
    assert answers == ["0", "1", "2", "3", "4", "5"]
    assert stop_results == [None]
    assert json.loads(rsps.calls[1].request.body) == {"user": "chatbot-demo"}


def test_stop_failure_raises(rsps):
    rsps.add(responses.POST, API + "/chat-messages/t9/stop", json={"result": "failed"})
    with pytest.raises(RuntimeError, match="err resp="):
        _app().stop("t9")


def test_feedback_null_rating_is_withdrawn(rsps):
    url = API + "/messages/a89094dd-8dac-4b51-aa77-920099ae4ef9/feedbacks"
    rsps.add(responses.POST, url, json={"result": "success"})
    result = _app(AppType.AGENT, "agent-demo").message_feedback(
        FeedbackRequest(
            message_id="a89094dd-8dac-4b51-aa77-920099ae4ef9",
            rating=Feedback.NULL,
            content="非常不错",
        )
    )
    assert result is None
    assert json.loads(rsps.calls[0].request.body) == {"user": "agent-demo", "content": "非常不错"}


def test_conversation_rename(rsps):
    url = API + "/conversations/f6da1bba-6341-42ed-9021-4a88b2f0dd0a/name"
    rsps.add(
        responses.POST,
        url,
        json={"id": "f6da1bba-6341-42ed-9021-4a88b2f0dd0a", "name": "修改后的新名称"},
    )
    resp = _app().rename_conversation(
        ConversationRenameRequest(
            conversation_id="f6da1bba-6341-42ed-9021-4a88b2f0dd0a", name="修改后的新名称"
        )
    )
    assert resp.name == "修改后的新名称"
    assert json.loads(rsps.calls[0].request.body) == {"name": "修改后的新名称", "user": "chatbot-demo"}