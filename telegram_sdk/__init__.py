"""Telegram Bot API SDK: Pydantic models, request/response envelopes, client, and exceptions.

The :class:`TelegramBotClient` class wraps the Bot API endpoints with
synchronous methods and an opt-in asynchronous mode.  Results are hydrated
into the models of :mod:`telegram_sdk.models`; failures raise the exceptions
of :mod:`telegram_sdk.exceptions`.

Usage::

    from telegram_sdk import TelegramBotClient, TelegramResponseException
    from telegram_sdk.models import Message, Update
    from telegram_sdk.file_upload import InputFile
    from telegram_sdk import causes
"""

from telegram_sdk.client import TelegramBotClient
from telegram_sdk.exceptions import (
    TelegramMalformedResponseException,
    TelegramResponseException,
    TelegramSDKException,
    TelegramValidationError,
)
from telegram_sdk.file_upload import FileId, HttpUrl, InputFile, InputStream
from telegram_sdk.request import SDK_VERSION as __version__
from telegram_sdk.response import PendingResult, TelegramResponse

__all__ = [
    "TelegramBotClient",
    "TelegramResponse",
    "PendingResult",
    "TelegramSDKException",
    "TelegramValidationError",
    "TelegramResponseException",
    "TelegramMalformedResponseException",
    "InputFile",
    "InputStream",
    "FileId",
    "HttpUrl",
    "__version__",
]
