"""Chatbot and agent applications: chat messages, streamed or blocking."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from enum import Enum
from urllib.parse import quote

from difysdk.app import AppClient, _expect_success, decode_chunks
from difysdk.http import HttpClient
from difysdk.types import ChatCompletionResponse, ChatRequest, ChunkChatCompletionResponse


class AppType(str, Enum):
    """The kind of chat application."""

    CHATBOT = "Chatbot"
    AGENT = "Agent"


class ChatbotApp(AppClient):
    """A chatbot or agent application."""

    def __init__(self, http: HttpClient, app_type: AppType = AppType.CHATBOT) -> None:
        super().__init__(http)
        self.app_type = app_type

    def run(self, request: ChatRequest) -> Iterator[ChunkChatCompletionResponse]:
        """Send a chat message and stream the answer as it is produced."""
        request = dataclasses.replace(
            request, response_mode="streaming", user=self._user(request.user)
        )
        response = self.http.send_raw_request("POST", "/chat-messages", request)
        return decode_chunks(self.http.sse_events(response))

    def run_block(self, request: ChatRequest) -> ChatCompletionResponse:
        """Send a chat message and wait for the whole answer.

        Agent applications do not support blocking mode.
        """
        request = dataclasses.replace(
            request, response_mode="blocking", user=self._user(request.user)
        )
        if self.app_type is AppType.AGENT:
            raise ValueError("agent app does not support blocking")
        if request.inputs is None:
            request.inputs = {}
        http_request = self.http.create_base_request("POST", "/chat-messages", request)
        return ChatCompletionResponse.from_dict(self.http.send_json_request(http_request))

    def stop(self, task_id: str, user: str = "") -> None:
        """Stop a streamed answer that is still being produced."""
        http_request = self.http.create_base_request(
            "POST",
            f"/chat-messages/{quote(task_id, safe='')}/stop",
            {"user": self._user(user)},
        )
        _expect_success(self.http.send_json_request(http_request))