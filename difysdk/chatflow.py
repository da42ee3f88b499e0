"""Chatflow applications: chat messages driven by a workflow."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from urllib.parse import quote

from difysdk.app import AppClient, _expect_success, decode_chunks
from difysdk.types import ChatCompletionResponse, ChatRequest, ChunkChatCompletionResponse


class ChatflowApp(AppClient):
    """A chatflow application."""

    def run(self, request: ChatRequest) -> Iterator[ChunkChatCompletionResponse]:
        """Send a chat message and stream the events it produces."""
        request = dataclasses.replace(
            request, response_mode="streaming", user=self._user(request.user)
        )
        response = self.http.send_raw_request("POST", "/chat-messages", request)
        return decode_chunks(self.http.sse_events(response))

    def run_block(self, request: ChatRequest) -> ChatCompletionResponse:
        """Send a chat message and wait for the whole answer."""
        request = dataclasses.replace(
            request, response_mode="blocking", user=self._user(request.user)
        )
        if request.inputs is None:
            request.inputs = {}
        http_request = self.http.create_base_request("POST", "/chat-messages", request)
        return ChatCompletionResponse.from_dict(self.http.send_json_request(http_request))

    def stop(self, task_id: str, user: str = "") -> None:
        """Stop an answer that is still being produced."""
        http_request = self.http.create_base_request(
            "POST",
            f"/chat-messages/{quote(task_id, safe='')}/stop",
            {"user": self._user(user)},
        )
        _expect_success(self.http.send_json_request(http_request))