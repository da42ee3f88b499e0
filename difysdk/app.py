"""Operations common to every kind of application: metadata, files, conversations, messages."""

from __future__ import annotations

import json
import logging
import mimetypes
import os
from collections.abc import Iterable, Iterator
from typing import Any, BinaryIO
from urllib.parse import quote, urlencode

import requests

from difysdk.http import DifyAPIError, HttpClient, _parse_error_body
from difysdk.types import (
    AppInfo,
    AppMeta,
    AppParameter,
    ChunkChatCompletionResponse,
    ConversationListResponse,
    ConversationRenameRequest,
    ConversationRenameResponse,
    Feedback,
    FeedbackRequest,
    FileInfo,
    MessageHistory,
    TextToAudioRequest,
)

logger = logging.getLogger(__name__)

_DEFAULT_PAGE_SIZE = 20
_MAX_CONVERSATION_PAGE = 100
_DEFAULT_SORT = "-updated_at"
_SNIFF_LENGTH = 512

_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"%PDF-", "application/pdf"),
    (b"%!PS-Adobe-", "application/postscript"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
    (b"\x00\x00\x01\x00", "image/x-icon"),
    (b"\x00\x00\x02\x00", "image/x-icon"),
    (b"ID3", "audio/mpeg"),
    (b"OggS\x00", "application/ogg"),
    (b"PK\x03\x04", "application/zip"),
    (b"\x1f\x8b\x08", "application/x-gzip"),
    (b"Rar!\x1a\x07", "application/x-rar-compressed"),
    (b"\x00asm", "application/wasm"),
)

_HTML_TAGS = (
    b"<!doctype html", b"<html", b"<head", b"<script", b"<iframe", b"<h1", b"<div",
    b"<font", b"<table", b"<a", b"<style", b"<title", b"<b", b"<body", b"<br", b"<p",
    b"<!--",
)

_BINARY_BYTES = frozenset(
    list(range(0x00, 0x09)) + [0x0B] + list(range(0x0E, 0x1B)) + list(range(0x1C, 0x20))
)


def _detect_content_type(header: bytes) -> str:
    """Guess a MIME type from the first bytes of a file."""
    for signature, mime in _SIGNATURES:
        if header.startswith(signature):
            return mime
    if header[:4] == b"RIFF" and header[8:14] == b"WEBPVP":
        return "image/webp"
    if header[:4] == b"RIFF" and header[8:12] == b"WAVE":
        return "audio/wave"
    if header[:4] == b"RIFF" and header[8:12] == b"AVI ":
        return "video/avi"
    if header[4:8] == b"ftyp":
        return "video/mp4"
    if header.startswith(b"\xfe\xff"):
        return "text/plain; charset=utf-16be"
    if header.startswith(b"\xff\xfe"):
        return "text/plain; charset=utf-16le"
    if header.startswith(b"\xef\xbb\xbf"):
        return "text/plain; charset=utf-8"

    stripped = header.lstrip(b"\t\n\x0c\r ").lower()
    for tag in _HTML_TAGS:
        if stripped.startswith(tag):
            rest = stripped[len(tag):len(tag) + 1]
            if rest in (b" ", b">"):
                return "text/html; charset=utf-8"
    if stripped.startswith(b"<?xml"):
        return "text/xml; charset=utf-8"

    if any(byte in _BINARY_BYTES for byte in header):
        return "application/octet-stream"
    return "text/plain; charset=utf-8"


def _expect_success(reply: Any) -> None:
    """Raise unless the reply is ``{"result": "success", ...}``."""
    result = reply.get("result") if isinstance(reply, dict) else None
    if result != "success":
        raise RuntimeError(f"err resp={reply!r}")


def decode_chunks(
    data_stream: Iterable[str | bytes],
) -> Iterator[ChunkChatCompletionResponse]:
    """Turn a stream of JSON event payloads into response chunks.

    A payload that cannot be decoded becomes an ``error`` chunk instead of
    ending the stream.
    """
    for data in data_stream:
        try:
            chunk = ChunkChatCompletionResponse.from_dict(json.loads(data))
        except (ValueError, TypeError) as exc:
            logger.error("Error unmarshalling chunk completion response: %s", exc)
            chunk = ChunkChatCompletionResponse(
                event="error",
                status="500",
                code="json unmarshal error",
                message=str(exc),
            )
        yield chunk


class AppClient:
    """Endpoints shared by chatbot, agent, chatflow, completion and workflow apps."""

    def __init__(self, http: HttpClient) -> None:
        self.http = http

    @property
    def user(self) -> str:
        """The default user identifier used when a call leaves it empty."""
        return self.http.user

    def _user(self, user: str) -> str:
        return user or self.user

    def _get(self, api_url: str) -> Any:
        return self.http.send_json_request(
            self.http.create_base_request("GET", api_url, None)
        )

    def upload_file(
        self, file_path: str = "", file: BinaryIO | None = None, user: str = ""
    ) -> FileInfo:
        """Upload a file, either an open binary file or one named by path."""
        user = self._user(user)
        if file is not None:
            return self._upload(file, os.path.basename(str(getattr(file, "name", ""))), user)
        try:
            handle = open(file_path, "rb")
        except OSError as exc:
            raise OSError(f"failed to open file: {exc}") from exc
        with handle:
            return self._upload(handle, os.path.basename(file_path), user)

    def _upload(self, file: BinaryIO, file_name: str, user: str) -> FileInfo:
        mime_type = mimetypes.guess_type(file_name)[0] or ""
        if not mime_type:
            header = file.read(_SNIFF_LENGTH)
            if not header:
                raise ValueError("failed to read file header: empty file")
            file.seek(0)
            mime_type = _detect_content_type(header)

        if "." not in file_name:
            parts = mime_type.split(";", 1)[0].strip().split("/")
            if len(parts) == 2:
                file_name += "." + parts[1]

        content = file.read()
        request = requests.Request(
            "POST",
            self.http.api_server + "/files/upload",
            files={
                "user": (None, user),
                "file": (file_name, content, mime_type),
            },
            headers={"Authorization": f"Bearer {self.http.api_key}"},
        )
        prepared = self.http.session.prepare_request(request)
        with self.http.send_request(prepared) as response:
            text = response.content.decode("utf-8", errors="replace")
            if response.status_code != 201:
                status, code, message = _parse_error_body(text)
                raise DifyAPIError(status, code, message)
            return FileInfo.from_dict(json.loads(text))

    def app_info(self) -> AppInfo:
        """Basic information about the application."""
        return AppInfo.from_dict(self._get("/info"))

    def app_parameter(self) -> AppParameter:
        """The application's configuration parameters."""
        return AppParameter.from_dict(self._get("/parameters"))

    def app_meta(self) -> AppMeta:
        """Application meta information such as tool icons."""
        return AppMeta.from_dict(self._get("/meta"))

    def delete_conversation(self, conversation_id: str, user: str = "") -> None:
        """Delete a conversation."""
        request = self.http.create_base_request(
            "DELETE",
            f"/conversations/{quote(conversation_id, safe='')}",
            {"user": self._user(user)},
        )
        _expect_success(self.http.send_json_request(request))

    def conversation_list(self, user: str = "") -> ConversationListResponse:
        """The user's most recently updated conversations."""
        return self.conversation_list_pro(self._user(user), "", "", _DEFAULT_PAGE_SIZE)

    def conversation_list_pro(
        self,
        user: str = "",
        last_id: str = "",
        sort_by: str = "",
        limit: int = _DEFAULT_PAGE_SIZE,
    ) -> ConversationListResponse:
        """A page of conversations.

        ``sort_by`` is one of created_at, -created_at, updated_at, -updated_at;
        ``limit`` is kept between 1 and 100.
        """
        if limit <= 0:
            limit = _DEFAULT_PAGE_SIZE
        limit = min(limit, _MAX_CONVERSATION_PAGE)
        query = urlencode(
            {
                "user": self._user(user),
                "last_id": last_id,
                "limit": limit,
                "sort_by": sort_by or _DEFAULT_SORT,
            }
        )
        return ConversationListResponse.from_dict(self._get(f"/conversations?{query}"))

    def rename_conversation(
        self, rename: ConversationRenameRequest
    ) -> ConversationRenameResponse:
        """Rename a conversation or have the server generate its name."""
        body: dict[str, Any] = {}
        if rename.name:
            body["name"] = rename.name
        if rename.auto_generate:
            body["auto_generate"] = True
        body["user"] = self._user(rename.user)
        request = self.http.create_base_request(
            "POST", f"/conversations/{quote(rename.conversation_id, safe='')}/name", body
        )
        return ConversationRenameResponse.from_dict(self.http.send_json_request(request))

    def history(self, conversation_id: str, user: str = "") -> MessageHistory:
        """The newest messages of a conversation."""
        return self.history_pro(conversation_id, self._user(user), "", _DEFAULT_PAGE_SIZE)

    def history_pro(
        self,
        conversation_id: str,
        user: str = "",
        first_id: str = "",
        limit: int = _DEFAULT_PAGE_SIZE,
    ) -> MessageHistory:
        """Up to ``limit`` messages of a conversation, newest first."""
        if limit <= 0:
            limit = _DEFAULT_PAGE_SIZE
        query = urlencode(
            {
                "conversation_id": conversation_id,
                "user": self._user(user),
                "first_id": first_id,
                "limit": limit,
            }
        )
        return MessageHistory.from_dict(self._get(f"/messages?{query}"))

    def message_feedback(self, feedback: FeedbackRequest) -> None:
        """Rate a message; a ``null`` rating withdraws an earlier one."""
        rating = feedback.rating
        if isinstance(rating, Feedback):
            rating = rating.value
        if rating == Feedback.NULL.value:
            rating = ""
        body: dict[str, Any] = {}
        if rating:
            body["rating"] = rating
        body["user"] = self._user(feedback.user)
        body["content"] = feedback.content
        request = self.http.create_base_request(
            "POST", f"/messages/{quote(feedback.message_id, safe='')}/feedbacks", body
        )
        _expect_success(self.http.send_json_request(request))

    def suggested_questions(self, message_id: str, user: str = "") -> list[str]:
        """Suggested follow-up questions for a message."""
        query = urlencode({"user": self._user(user)})
        reply = self._get(f"/messages/{quote(message_id, safe='')}/suggested?{query}")
        _expect_success(reply)
        data = reply.get("data") or []
        if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
            raise TypeError(f"field 'data': expected array of strings, got {data!r}")
        return list(data)

    def text_to_audio(self, info: TextToAudioRequest) -> None:
        """Ask the server to synthesise speech for a message or a text."""
        request = self.http.create_form_request(
            "POST",
            "/text-to-audio",
            {
                "message_id": info.message_id,
                "text": info.text,
                "user": self._user(info.user),
            },
        )
        self.http.send_json_request(request)