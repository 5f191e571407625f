"""Exception hierarchy for the Telegram SDK.

``TelegramSDKException`` is the root.  Everything the Bot API reports back
becomes a :class:`TelegramResponseException` carrying the decoded error
envelope; network failures with no body stay plain SDK exceptions; bad
arguments caught before any request is sent raise
:class:`TelegramValidationError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:  # pragma: no cover
    from telegram_sdk.models import ResponseParameters
    from telegram_sdk.response import TelegramResponse


class TelegramSDKException(Exception):
    """Base exception for every error raised by the SDK."""


class TelegramValidationError(TelegramSDKException, ValueError):
    """Caller-supplied input failed a precondition; no request was sent."""


class TelegramResponseException(TelegramSDKException):
    """The Bot API answered with an error envelope.

    Attributes:
        response: The :class:`~telegram_sdk.response.TelegramResponse` that failed.
        response_data: Decoded response body (``{}`` when it was not JSON).
        code: ``error_code`` from the envelope, ``-1`` when absent.
        description: Human-readable ``description`` from the envelope.
    """

    def __init__(self, response: "TelegramResponse", message: str = "", code: int = 0) -> None:
        """Initialise from the failing *response*, a *message* and an error *code*."""
        self.response = response
        self.response_data: Dict[str, Any] = response.decoded_body
        self.code = code
        self.description = message
        super().__init__(message)

    @classmethod
    def create(cls, response: "TelegramResponse") -> "TelegramResponseException":
        """Build the exception that matches the shape of *response*'s body."""
        data = response.decoded_body

        if data.get("ok") is None or (data["ok"] is True and data.get("result") is None):
            return TelegramMalformedResponseException(
                response, "The ok/result fields are not set in the response", -2
            )

        code = data.get("error_code")
        message = data.get("description")
        return cls(
            response,
            message if message is not None else "Unknown error from API.",
            code if code is not None else -1,
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Return *key* from the decoded error body, or *default* when unset."""
        value = self.response_data.get(key)
        return default if value is None else value

    @property
    def parameters(self) -> "ResponseParameters":
        """Structured ``parameters`` of the error envelope (possibly empty)."""
        from telegram_sdk.models import ResponseParameters  # deferred: models imports file_upload → exceptions

        raw = self.get("parameters", {})
        return ResponseParameters.model_validate(raw if isinstance(raw, dict) else {})

    @property
    def retry_after(self) -> Optional[int]:
        """Seconds to wait before retrying, when the API reported flood control."""
        return self.parameters.retry_after

    @property
    def migrate_to_chat_id(self) -> Optional[int]:
        """Identifier of the supergroup the chat migrated to, if reported."""
        return self.parameters.migrate_to_chat_id

    @property
    def error_type(self) -> str:
        return self.get("type", "")

    @property
    def http_status_code(self) -> int:
        return self.response.http_status_code

    @property
    def raw_response(self) -> str:
        return self.response.body


class TelegramMalformedResponseException(TelegramResponseException):
    """The body did not follow the ``{ok, result}`` envelope contract.

    Usually transient (a proxy error page, a truncated body), so callers get a
    short fixed retry hint.
    """

    RETRY_AFTER: int = 5

    @property
    def retry_after(self) -> int:
        return self.RETRY_AFTER
