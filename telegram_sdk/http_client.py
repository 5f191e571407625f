"""HTTP transport for the Bot API.

The SDK talks to the network through :class:`HttpClientInterface` so tests
(and callers with special needs) can swap the transport.  Every send returns
a :class:`concurrent.futures.Future` resolving to a ``requests.Response``:
synchronous sends complete the future before returning, asynchronous ones
run on a thread pool.  Transport failures are stored on the future, never
raised from :meth:`send` itself.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, Optional

import requests

from config import MAX_ASYNC_WORKERS

_logger = logging.getLogger("telegram_sdk.http_client")


class HttpClientInterface(ABC):
    """A transport able to POST one Bot API request."""

    @abstractmethod
    def send(
        self,
        url: str,
        headers: Dict[str, str],
        options: Dict[str, Any],
        timeout: float,
        is_async: bool,
        connect_timeout: float,
    ) -> "Future[requests.Response]":
        """POST to *url* and return a future for the HTTP response.

        *options* holds the body, either ``{"data": {...}}`` for a form
        request or ``{"files": [...]}`` for a multipart upload.
        """


class RequestsHttpClient(HttpClientInterface):
    """Default transport built on a :class:`requests.Session`.

    Non-2xx answers are returned as ordinary responses; the Bot API puts its
    error envelope in the body.
    """

    def __init__(self, session: Optional[requests.Session] = None, max_workers: int = MAX_ASYNC_WORKERS) -> None:
        self._session = session or requests.Session()
        self._max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self._lock = threading.Lock()

    def _get_executor(self) -> ThreadPoolExecutor:
        """Return (and lazily create) the pool used for asynchronous sends."""
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers,
                    thread_name_prefix="telegram-sdk",
                )
            return self._executor

    def _post(self, url: str, headers: Dict[str, str], options: Dict[str, Any], timeout: float, connect_timeout: float) -> requests.Response:
        return self._session.post(url, headers=headers, timeout=(connect_timeout, timeout), **options)

    def send(
        self,
        url: str,
        headers: Dict[str, str],
        options: Dict[str, Any],
        timeout: float,
        is_async: bool,
        connect_timeout: float,
    ) -> "Future[requests.Response]":
        if is_async:
            return self._get_executor().submit(self._post, url, headers, options, timeout, connect_timeout)

        future: "Future[requests.Response]" = Future()
        try:
            future.set_result(self._post(url, headers, options, timeout, connect_timeout))
        except Exception as exc:
            _logger.debug("Transport error", extra={"error": str(exc)})
            future.set_exception(exc)
        return future

    def close(self) -> None:
        """Wait for in-flight asynchronous sends, then release the session."""
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
        self._session.close()

    def __enter__(self) -> "RequestsHttpClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
