# difysdk

A Python client for the Dify application API. It supports chatbot, agent and
chatflow apps. Each one can run in blocking mode or stream its answer over
server-sent events.

## Installation

```
pip install difysdk
```

## Connecting

Every app client is built on a `difysdk.http.HttpClient`:

```python
from difysdk.http import HttpClient

http = HttpClient(
    "https://dify.example.com/v1",  # include the /v1 path
    "placeholder",                  # API key of the app
    user="demo-user",   # used whenever a call leaves `user` empty
    debug=False,        # log requests and responses via the `logging` module
    timeout=180,        # seconds; defaults to 300
)
```

If the server URL or the API key is empty, `HttpClient` raises `ValueError`.
Any trailing `/` is stripped from the server URL. You can pass your own
`requests.Session` as `session=`.

## Chatbot and agent apps

```python
from difysdk.chatbot import AppType, ChatbotApp
from difysdk.types import ChatRequest

app = ChatbotApp(http)                 # or ChatbotApp(http, AppType.AGENT)

# Blocking mode. On an agent app this raises ValueError.
reply = app.run_block(ChatRequest(query="Hello!", inputs={"name": "Alice"}))
print(reply.answer)

# Streaming mode: iterate over the chunks as they arrive.
for chunk in app.run(ChatRequest(query="Plan a five-day trip")):
    if chunk.event == "error":
        print(chunk.status, chunk.code, chunk.message)
        break
    print(chunk.answer, end="")

# Stop a running task.
app.stop(task_id)
```

Streaming yields `ChunkChatCompletionResponse` objects. Failures while the
stream is running do not raise. They arrive as chunks with `event == "error"`.
This covers read errors, payloads that are not valid JSON, and a non-SSE error
body sent by the server. The stream ends once the client's timeout has passed.

## Chatflow apps

```python
from difysdk.chatflow import ChatflowApp

app = ChatflowApp(http)
reply = app.run_block(ChatRequest(query="Hello!"))
```

`ChatflowApp` has the same `run`, `run_block` and `stop` methods. It supports
blocking mode.

## Shared operations

Both app classes derive from `difysdk.app.AppClient`, which provides:

* `upload_file(file_path="", file=None, user="")`: upload a file by path, or
  pass an open binary file. The MIME type is guessed from the file name, or
  else from the file's first bytes.
* `app_info()`
* `app_parameter()`
* `app_meta()`
* `message_feedback(FeedbackRequest(...))`: a rating of `Feedback.NULL`
  withdraws an earlier rating.
* `suggested_questions(message_id, user="")`
* `history(conversation_id, user="")`
* `history_pro(conversation_id, user, first_id, limit)`
* `conversation_list(user="")`
* `conversation_list_pro(user, last_id, sort_by, limit)`: `limit` is kept
  between 1 and 100, and `sort_by` defaults to `-updated_at`.
* `delete_conversation(conversation_id, user="")`
* `rename_conversation(ConversationRenameRequest(...))`
* `text_to_audio(TextToAudioRequest(...))`: sent as a multipart form.

Request and response models live in `difysdk.types`.

`difysdk.app.decode_chunks` turns any iterable of JSON payloads into
`ChunkChatCompletionResponse` objects.

## Errors

* If the server returns an error status, the call raises
  `difysdk.http.DifyAPIError`. The exception has `status`, `code` and
  `message` attributes.
* Endpoints that answer with a `result` field raise `RuntimeError` unless the
  result is `success`.

## What the package does not do

The package only has clients for chatbot, agent and chatflow apps.

`difysdk.types` defines `CompletionRequest`, `WorkflowRequest`,
`WorkflowResponse`, `WorkflowStatus`, `WorkflowLogs` and `Status`. No class in
the package sends these requests. There is no client for completion or
workflow apps, and no way to get workflow run status or logs.

There is also no single top-level client that builds the app objects for you.
Create an `HttpClient` and pass it to the app class you need.

## Running the tests

```
pip install -e ".[test]"
pytest
```