"""Descriptors for files sent to the Bot API.

Telegram accepts a file in three forms: a ``file_id`` already on its servers,
an HTTP URL it fetches itself, or a multipart upload.  The classes here wrap
each form behind :class:`InputFileInterface` so the request builder can call
``open()`` and get either a plain string to send inline or a readable binary
stream to upload.
"""

from __future__ import annotations

import io
import os
import secrets
from abc import ABC, abstractmethod
from typing import IO, Any, NamedTuple, Optional, Union
from urllib.parse import urlparse

import requests
from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from config import DEFAULT_CONNECT_TIMEOUT, DEFAULT_TIMEOUT
from telegram_sdk.exceptions import TelegramSDKException, TelegramValidationError


_HTTP_URL = TypeAdapter(AnyHttpUrl)


def is_stream(value: Any) -> bool:
    """True for any object exposing a callable ``read`` (a file handle, ``BytesIO``, …)."""
    return callable(getattr(value, "read", None))


def is_http_url(value: Any) -> bool:
    """True when *value* is a string holding a valid ``http``/``https`` URL."""
    if not isinstance(value, str):
        return False
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        return False
    return True


def is_local_file(value: Any) -> bool:
    """True when *value* is a path to a regular file this process can read."""
    return isinstance(value, str) and os.path.isfile(value) and os.access(value, os.R_OK)


def stream_filename(stream: Any, default: Optional[str] = None) -> Optional[str]:
    """Best-effort upload filename for *stream*, taken from its ``name``."""
    name = getattr(stream, "name", None)
    if isinstance(name, str) and name:
        return os.path.basename(name)
    return default


class Attachment(NamedTuple):
    """A stream pulled out of a request parameter to travel as its own multipart part."""

    name: str
    contents: IO[bytes]
    filename: Optional[str] = None
    owned: bool = False


class InputFileInterface(ABC):
    """Anything that can be turned into a file parameter of a Bot API call."""

    filename: Optional[str] = None

    @abstractmethod
    def open(self) -> Union[str, IO[bytes]]:
        """Return a string to send inline or a binary stream to upload."""


class InputFile(InputFileInterface):
    """A file to upload, given as a local path, an open stream, or a remote URL.

    Remote URLs are downloaded here and re-uploaded; pass the URL as a plain
    string parameter instead to let Telegram fetch it directly.
    """

    def __init__(self, path: Union[str, IO[bytes]], filename: Optional[str] = None) -> None:
        self.path = path
        self.filename = filename

    def open(self) -> IO[bytes]:
        """Open the underlying file for reading.

        Raises:
            TelegramValidationError: The local path is not a readable file.
            TelegramSDKException: A remote file could not be downloaded.
        """
        if is_stream(self.path):
            return self.path

        if is_http_url(self.path):
            return self._download(self.path)

        if not is_local_file(self.path):
            raise TelegramValidationError(
                f"Failed to create InputFile entity. Unable to read resource: {self.path}."
            )
        return open(self.path, "rb")

    def _download(self, url: str) -> IO[bytes]:
        try:
            response = requests.get(url, timeout=(DEFAULT_CONNECT_TIMEOUT, DEFAULT_TIMEOUT))
            response.raise_for_status()
        except requests.RequestException as exc:
            raise TelegramSDKException(
                f"Failed to create InputFile entity. Unable to read resource: {url}."
            ) from exc

        stream = io.BytesIO(response.content)
        stream.name = os.path.basename(urlparse(url).path) or "file"
        return stream


class InputStream(InputFile):
    """In-memory content uploaded as a file.

    Telegram derives the file type from its name, so one is generated when
    *filename* is omitted.
    """

    def __init__(self, content: Union[str, bytes], filename: Optional[str] = None) -> None:
        data = content.encode("utf-8") if isinstance(content, str) else content
        stream = io.BytesIO(data)
        stream.name = filename or secrets.token_hex(8)
        super().__init__(stream, stream.name)


class FileId(InputFileInterface):
    """A ``file_id`` of a file already stored on Telegram's servers."""

    def __init__(self, file_id: str) -> None:
        self.file_id = file_id

    def open(self) -> str:
        return self.file_id


class HttpUrl(InputFileInterface):
    """An HTTP URL Telegram will download the file from."""

    def __init__(self, url: str) -> None:
        self.url = url

    def open(self) -> str:
        return self.url
