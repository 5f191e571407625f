"""TelegramResponse: envelope around one in-flight or completed Bot API call.

The envelope holds the transport future and resolves it at most once, on the
first access to the body (or an explicit :meth:`TelegramResponse.wait`).  At
that moment it reads the body, decodes it, and, if the call failed, builds
the matching exception right away.  Raising is left to the caller, so an
asynchronous failure is kept on the envelope until someone asks for it.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from concurrent.futures import Future
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

import requests

from telegram_sdk.exceptions import TelegramResponseException, TelegramSDKException

if TYPE_CHECKING:  # pragma: no cover
    from telegram_sdk.request import TelegramRequest

_logger = logging.getLogger("telegram_sdk.response")

ResponseHook = Callable[["TelegramResponse", float], Any]


class TelegramResponse:
    """Outcome of one Bot API call.

    Args:
        request: The request that was sent.
        future: Transport future resolving to a ``requests.Response``.
        on_fulfilled: Called as ``hook(response, elapsed)`` once, when the
            call resolves successfully.
        on_rejected: Called the same way when the call resolves to an error.
        started_at: ``time.monotonic()`` taken just before the request was
            handed to the transport; defaults to now.
    """

    def __init__(
        self,
        request: "TelegramRequest",
        future: "Future[requests.Response]",
        on_fulfilled: Optional[ResponseHook] = None,
        on_rejected: Optional[ResponseHook] = None,
        started_at: Optional[float] = None,
    ) -> None:
        self.request = request
        self.request_exception: Optional[BaseException] = None
        self.exception: Optional[TelegramSDKException] = None

        self._future = future
        self._on_fulfilled = on_fulfilled
        self._on_rejected = on_rejected
        self._lock = threading.RLock()
        self._resolved = False
        self._settled = False
        self._hooks_fired = False
        self._http_response: Optional[requests.Response] = None
        self._body = ""
        self._decoded_body: Dict[str, Any] = {}

        self._started_at = started_at if started_at is not None else time.monotonic()
        self._finished_at: Optional[float] = None
        future.add_done_callback(self._mark_finished)

    def _mark_finished(self, _future: Future) -> None:
        self._finished_at = time.monotonic()

    # ------------------------------------------------------------------
    #  Resolution
    # ------------------------------------------------------------------

    def ready(self) -> bool:
        """True when the transport has finished, without blocking."""
        return self._future.done()

    def wait(self) -> "TelegramResponse":
        """Block until the transport finishes and decode the outcome (idempotent)."""
        with self._lock:
            if not self._resolved:
                self._resolve()
        self._fire_hooks()
        return self

    def _resolve(self) -> None:
        try:
            self._http_response = self._future.result()
        except Exception as exc:  # any failure stored on the future
            self.request_exception = exc

        if self._http_response is not None:
            self._body = self._http_response.text
            self._decoded_body = self._decode(self._body)

        # Accessors used while building the exception must not resolve again.
        self._resolved = True
        self.exception = self._build_exception()
        self._settled = True
        self._log_outcome()

    @staticmethod
    def _decode(body: str) -> Dict[str, Any]:
        try:
            decoded = json.loads(body)
        except ValueError:
            return {}
        return decoded if isinstance(decoded, dict) else {}

    def _build_exception(self) -> Optional[TelegramSDKException]:
        if self.request_exception is not None and self._http_response is None:
            exc = TelegramSDKException(f"Request to {self.request.endpoint} failed: {self.request_exception}")
            exc.__cause__ = self.request_exception
            return exc
        data = self._decoded_body
        if data.get("ok") is not True or data.get("result") is None:
            return TelegramResponseException.create(self)
        return None

    def _log_outcome(self) -> None:
        extra = {
            "api_endpoint": self.request.endpoint,
            "elapsed": round(self.elapsed, 4),
            "status_code": self._http_response.status_code if self._http_response is not None else 0,
        }
        if self.exception is None:
            _logger.debug("Request fulfilled", extra=extra)
        elif self.request_exception is not None:
            _logger.error("Request failed", extra={**extra, "error": str(self.request_exception)})
        else:
            _logger.warning(
                "Telegram error",
                extra={**extra, "error_code": getattr(self.exception, "code", None), "error": str(self.exception)},
            )

    def _fire_hooks(self) -> None:
        with self._lock:
            if self._hooks_fired or not self._settled:
                return
            self._hooks_fired = True
        hook = self._on_fulfilled if self.exception is None else self._on_rejected
        if hook is not None:
            hook(self, self.elapsed)

    # ------------------------------------------------------------------
    #  Accessors (each forces resolution)
    # ------------------------------------------------------------------

    @property
    def body(self) -> str:
        """Raw response body, ``""`` when the transport produced none."""
        self.wait()
        return self._body

    @property
    def decoded_body(self) -> Dict[str, Any]:
        """Parsed JSON body; ``{}`` if it was not a JSON object."""
        self.wait()
        return self._decoded_body

    @property
    def http_status_code(self) -> int:
        self.wait()
        return self._http_response.status_code if self._http_response is not None else 0

    @property
    def headers(self) -> Dict[str, str]:
        self.wait()
        return dict(self._http_response.headers) if self._http_response is not None else {}

    @property
    def access_token(self) -> str:
        return self.request.access_token

    @property
    def elapsed(self) -> float:
        """Seconds from submission until the transport finished (or until now)."""
        finished = self._finished_at if self._finished_at is not None else time.monotonic()
        return finished - self._started_at

    def is_error(self) -> bool:
        self.wait()
        return self.exception is not None

    def result(self) -> Any:
        """The ``result`` member of the body; check :meth:`is_error` first."""
        return self.decoded_body.get("result")

    def throw_exception(self) -> None:
        """Raise the exception built for this response, if the call failed."""
        self.wait()
        if self.exception is not None:
            raise self.exception

    def __repr__(self) -> str:
        state = "resolved" if self._resolved else "pending"
        return f"TelegramResponse(endpoint={self.request.endpoint!r}, {state})"


class PendingResult:
    """Deferred outcome of an asynchronous call.

    :meth:`result` blocks until the call finishes, then returns the converted
    value or raises the call's exception, every time it is called.
    """

    def __init__(self, response: TelegramResponse, convert: Callable[[TelegramResponse], Any]) -> None:
        self.response = response
        self._convert = convert
        self._value: Any = None
        self._converted = False

    def done(self) -> bool:
        return self.response.ready()

    def result(self) -> Any:
        self.response.throw_exception()
        if not self._converted:
            self._value = self._convert(self.response)
            self._converted = True
        return self._value

    def __repr__(self) -> str:
        return f"PendingResult({self.response!r})"
