"""HTTP plumbing shared by every application client: requests, JSON replies and SSE."""

from __future__ import annotations

import dataclasses
import json
import logging
import time
from collections.abc import Iterator, Mapping
from typing import Any
from urllib.parse import urlsplit

import requests

logger = logging.getLogger(__name__)

_PING_LINE = "event: ping"
_DATA_PREFIX = "data: "


class DifyAPIError(Exception):
    """An error reply from the server."""

    def __init__(self, status: int, code: str, message: str) -> None:
        self.status = status
        self.code = code
        self.message = message
        super().__init__(f"ERROR: {status} [{code}] {message}")


def error_event(status: Any, code: str, message: str) -> str:
    """Build the JSON text of a synthetic ``error`` stream event."""
    return json.dumps(
        {"event": "error", "status": str(status), "code": code, "message": message},
        ensure_ascii=False,
        separators=(",", ":"),
    )


def _parse_error_body(text: str) -> tuple[int, str, str]:
    """Decode a ``{"status", "code", "message"}`` body, raising ValueError if malformed."""
    data = json.loads(text)
    if data is None:
        return 0, "", ""
    if not isinstance(data, dict):
        raise ValueError(f"error body is not a JSON object: {text!r}")
    status = data.get("status")
    code = data.get("code")
    message = data.get("message")
    if status is None:
        status = 0
    elif isinstance(status, bool) or not isinstance(status, int):
        raise ValueError(f"error body field 'status' is not an integer: {status!r}")
    if code is None:
        code = ""
    elif not isinstance(code, str):
        raise ValueError(f"error body field 'code' is not a string: {code!r}")
    if message is None:
        message = ""
    elif not isinstance(message, str):
        raise ValueError(f"error body field 'message' is not a string: {message!r}")
    return status, code, message


def _json_ready(body: Any) -> Any:
    to_dict = getattr(body, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(body) and not isinstance(body, type):
        return dataclasses.asdict(body)
    return body


class HttpClient:
    """Sends authenticated requests to the application API."""

    def __init__(
        self,
        api_server: str,
        api_key: str,
        user: str = "",
        debug: bool = False,
        timeout: float = 300.0,
        session: requests.Session | None = None,
    ) -> None:
        if not api_server:
            raise ValueError("api_server is required")
        if not api_key:
            raise ValueError("api_key is required")
        try:
            urlsplit(api_server)
        except ValueError as exc:
            raise ValueError(f"invalid API server URL: {exc}") from exc
        self.api_server = api_server.rstrip("/")
        self.api_key = api_key
        self.user = user
        self.debug = debug
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def _url(self, method: str, api_url: str) -> str:
        url = self.api_server + api_url
        if self.debug:
            logger.info("--== request URL ==--\n%s %s", method, url)
        return url

    def create_base_request(
        self, method: str, api_url: str, body: Any = None
    ) -> requests.PreparedRequest:
        """Prepare a request whose body, if any, is sent as JSON."""
        url = self._url(method, api_url)
        data = None
        if body is not None:
            text = json.dumps(_json_ready(body), ensure_ascii=False)
            if self.debug:
                logger.info("--== request body ==--\n%s", text)
            data = text.encode("utf-8")
        request = requests.Request(
            method,
            url,
            data=data,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Cache-Control": "no-cache",
                "Content-Type": "application/json; charset=utf-8",
            },
        )
        return self.session.prepare_request(request)

    def create_form_request(
        self, method: str, api_url: str, data: Mapping[str, str]
    ) -> requests.PreparedRequest:
        """Prepare a request whose fields are sent as multipart form data."""
        url = self._url(method, api_url)
        fields = {key: (None, value) for key, value in data.items()}
        request = requests.Request(
            method,
            url,
            files=fields or None,
            headers={"Authorization": f"Bearer {self.api_key}"},
        )
        return self.session.prepare_request(request)

    def send_request(self, request: requests.PreparedRequest) -> requests.Response:
        """Send a prepared request; the body of the reply is read lazily."""
        return self.session.send(request, stream=True, timeout=self.timeout)

    def send_json_request(self, request: requests.PreparedRequest) -> Any:
        """Send a request and return its decoded JSON reply.

        A status other than 200 raises DifyAPIError built from the error body.
        """
        with self.send_request(request) as response:
            text = response.content.decode("utf-8", errors="replace")
            if self.debug:
                self._log_response(response, text)
            if response.status_code != 200:
                status, code, message = _parse_error_body(text)
                raise DifyAPIError(status, code, message)
            return json.loads(text)

    def _log_response(self, response: requests.Response, text: str) -> None:
        headers = "\n".join(f"{k}: {v}" for k, v in response.headers.items())
        try:
            pretty = json.dumps(json.loads(text), ensure_ascii=False, indent=4)
        except ValueError:
            logger.info("response: %s\n%s", headers, text)
            return
        logger.info("--== response headers ==--\n%s", headers)
        logger.info("--== response body ==--\n%s", pretty)

    def send_raw_request(self, method: str, api_url: str, body: Any = None) -> requests.Response:
        """Send a JSON request and return the unread response."""
        return self.send_request(self.create_base_request(method, api_url, body))

    @staticmethod
    def _lines(response: requests.Response) -> Iterator[str]:
        pending = b""
        for chunk in response.iter_content(chunk_size=None):
            pending += chunk
            *complete, pending = pending.split(b"\n")
            for raw in complete:
                yield raw.decode("utf-8", errors="replace").strip()
        # A trailing line without a newline is not part of any event.

    def sse_events(self, response: requests.Response) -> Iterator[str]:
        """Yield the data payload of each server-sent event in the response.

        Lines that are neither data nor pings are gathered as an error body and
        reported as a single error event at the end of the stream.
        """
        deadline = time.monotonic() + self.timeout
        err_buffer: list[str] = []
        try:
            lines = self._lines(response)
            while True:
                if time.monotonic() > deadline:
                    return
                try:
                    line = next(lines)
                except StopIteration:
                    break
                except (requests.RequestException, OSError) as exc:
                    yield error_event("500", "read data err", str(exc))
                    return
                if not line:
                    continue
                if line.startswith(_DATA_PREFIX):
                    data = line[len(_DATA_PREFIX):]
                    if self.debug:
                        logger.info("SSE data received: %s", data)
                    if data:
                        yield data
                    continue
                if line == _PING_LINE:
                    continue
                err_buffer.append(line)
            if self.debug:
                logger.info("SSE stream finished")
            if err_buffer:
                yield self._error_from_body("".join(err_buffer))
        finally:
            response.close()

    @staticmethod
    def _error_from_body(text: str) -> str:
        try:
            status, code, message = _parse_error_body(text)
        except ValueError as exc:
            return error_event(
                "500", "handleErrorResponse:json unmarshal err", f"{exc}data:{text}"
            )
        return error_event(status, code, message)