"""Test doubles shared by the test-suite: a recording transport and envelope builders."""

import json
from concurrent.futures import Future
from typing import Any, Dict, List, Optional, Union

import requests

from telegram_sdk.http_client import HttpClientInterface

TOKEN = "123456:TEST-TOKEN"


def make_http_response(body: Union[Dict[str, Any], str], status_code: int = 200) -> requests.Response:
    """Build a real :class:`requests.Response` carrying *body*."""
    response = requests.Response()
    response.status_code = status_code
    raw = body if isinstance(body, str) else json.dumps(body)
    response._content = raw.encode("utf-8")
    response.encoding = "utf-8"
    response.headers["Content-Type"] = "application/json"
    return response


def ok_envelope(result: Any) -> Dict[str, Any]:
    return {"ok": True, "result": result}


def error_envelope(code: int, description: str, parameters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"ok": False, "error_code": code, "description": description}
    if parameters is not None:
        body["parameters"] = parameters
    return body


class StubHttpClient(HttpClientInterface):
    """Transport that records every call and answers from a queue.

    Queue items are JSON-able dicts, raw body strings, ready-made
    ``requests.Response`` objects, or exceptions (stored on the future).
    Synchronous sends resolve at once; asynchronous ones stay pending until
    :meth:`resolve_pending` is called.
    """

    def __init__(self, *replies: Any) -> None:
        self.replies: List[Any] = list(replies)
        self.calls: List[Dict[str, Any]] = []
        self.pending: List[Future] = []
        self.default_reply: Any = ok_envelope(True)

    def queue(self, *replies: Any) -> "StubHttpClient":
        self.replies.extend(replies)
        return self

    def _next_reply(self) -> Any:
        return self.replies.pop(0) if self.replies else self.default_reply

    @staticmethod
    def _settle(future: Future, reply: Any) -> None:
        if isinstance(reply, BaseException):
            future.set_exception(reply)
        elif isinstance(reply, requests.Response):
            future.set_result(reply)
        else:
            future.set_result(make_http_response(reply))

    def send(self, url, headers, options, timeout, is_async, connect_timeout) -> Future:
        self.calls.append(
            {
                "url": url,
                "headers": headers,
                "options": options,
                "timeout": timeout,
                "is_async": is_async,
                "connect_timeout": connect_timeout,
            }
        )
        future: Future = Future()
        reply = self._next_reply()
        if is_async:
            self.pending.append((future, reply))
        else:
            self._settle(future, reply)
        return future

    def resolve_pending(self) -> None:
        pending, self.pending = self.pending, []
        for future, reply in pending:
            self._settle(future, reply)

    @property
    def last_call(self) -> Dict[str, Any]:
        return self.calls[-1]

    def form(self, index: int = -1) -> Dict[str, str]:
        """Flat form params of the *index*-th call (multipart string parts included)."""
        options = self.calls[index]["options"]
        if "data" in options:
            return options["data"]
        return {name: value for name, (filename, value) in options["files"] if filename is None}

    def file_parts(self, index: int = -1) -> Dict[str, Any]:
        options = self.calls[index]["options"]
        return {name: (filename, value) for name, (filename, value) in options.get("files", []) if filename is not None}
