"""TelegramRequest: one Bot API call ready to hand to the transport.

The request turns a loose parameter mapping into the wire form the Bot API
expects: scalars become strings, structured values (reply markups, entity
lists, result lists, …) become JSON strings, and file parameters become
binary multipart parts.

File parameters are opened *eagerly*, while the request is constructed, so an
unreadable :class:`~telegram_sdk.file_upload.InputFile` raises right away on
the caller's path rather than later inside the transport.  Streams the request
opened itself are closed by :meth:`TelegramRequest.close` once the transport
is done with them; streams passed in by the caller are left open.
"""

from __future__ import annotations

import json
import logging
from typing import IO, Any, Dict, Iterable, List, Mapping, Optional, Tuple

from config import BASE_BOT_URL, DEFAULT_CONNECT_TIMEOUT, DEFAULT_TIMEOUT
from telegram_sdk.file_upload import (
    Attachment,
    InputFileInterface,
    is_local_file,
    is_stream,
    stream_filename,
)
from telegram_sdk.models import BaseObject, InputMedia

_logger = logging.getLogger("telegram_sdk.request")

SDK_VERSION: str = "3.0.0"
USER_AGENT: str = f"Telegram Bot Python SDK v{SDK_VERSION}"
ATTACHMENT_PREFIX: str = "__ATTACHED_FILE__"


def to_jsonable(value: Any) -> Any:
    """Convert *value* (possibly holding SDK objects) to plain JSON data."""
    if isinstance(value, BaseObject):
        return value.model_dump(by_alias=True, exclude_none=True, mode="json")
    if isinstance(value, Mapping):
        return {key: to_jsonable(item) for key, item in value.items() if item is not None}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def to_wire(value: Any) -> Optional[str]:
    """Render one parameter value as the string the Bot API expects.

    ``None`` means "omit this parameter".
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (BaseObject, Mapping, list, tuple)):
        return json.dumps(to_jsonable(value), ensure_ascii=False)
    return str(value)


class TelegramRequest:
    """A single POST to ``<base><token>/<endpoint>``.

    Args:
        access_token: Bot token the call is made with.
        endpoint: Bot API method name, e.g. ``"sendMessage"``.
        params: Parameters of the call; ``None`` values are dropped.
        file_fields: Names of parameters that may carry a file.
        media_fields: Names of parameters holding input media (one
            descriptor or a list of them) whose files must travel as
            attachments.
        is_async: Whether the transport should run the call in background.
        timeout: Overall request timeout in seconds.
        connect_timeout: Connection-establishment timeout in seconds.
    """

    def __init__(
        self,
        access_token: str,
        endpoint: str,
        params: Optional[Mapping[str, Any]] = None,
        file_fields: Iterable[str] = (),
        media_fields: Iterable[str] = (),
        is_async: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        base_url: str = BASE_BOT_URL,
    ) -> None:
        self.access_token = access_token
        self.endpoint = endpoint
        self.is_async = is_async
        self.timeout = timeout
        self.connect_timeout = connect_timeout
        self.base_url = base_url

        self.params: Dict[str, Any] = {k: v for k, v in dict(params or {}).items() if v is not None}
        self.files: Dict[str, Tuple[Optional[str], IO[bytes]]] = {}
        self.attachments: List[Attachment] = []
        self._owned: List[IO[bytes]] = []

        try:
            for name in media_fields:
                if name in self.params:
                    self.params[name] = self._extract_media(self.params[name])
            for name in file_fields:
                if name in self.params:
                    self._normalize_file_field(name, self.params.pop(name))
        except Exception:
            self.close()
            raise

    # ------------------------------------------------------------------
    #  Construction helpers
    # ------------------------------------------------------------------

    def _normalize_file_field(self, name: str, value: Any) -> None:
        """Route *value* either to :attr:`files` as a stream or back to :attr:`params` as a string."""
        filename = None
        if isinstance(value, InputFileInterface):
            filename = value.filename
            opened = value.open()
            if is_stream(opened) and opened is not getattr(value, "path", None):
                self._owned.append(opened)
            value = opened
        elif is_local_file(value):
            value = open(value, "rb")
            self._owned.append(value)

        if is_stream(value):
            self.files[name] = (filename or stream_filename(value, name), value)
        else:
            self.params[name] = str(value)

    def _extract_media(self, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [self._extract_one_media(item) for item in value]
        return self._extract_one_media(value)

    def _extract_one_media(self, item: Any) -> Any:
        if isinstance(item, Mapping):
            item = InputMedia.model_validate(dict(item))
        if not isinstance(item, InputMedia):
            return item

        attachment = item.extract_attachment(f"{ATTACHMENT_PREFIX}{len(self.attachments)}")
        if attachment is not None:
            self.attachments.append(attachment)
            if attachment.owned:
                self._owned.append(attachment.contents)
        return item

    # ------------------------------------------------------------------
    #  Wire form
    # ------------------------------------------------------------------

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.access_token}/{self.endpoint}"

    @property
    def headers(self) -> Dict[str, str]:
        return {"User-Agent": USER_AGENT}

    @property
    def has_files(self) -> bool:
        return bool(self.files or self.attachments)

    def form_params(self) -> Dict[str, str]:
        """Flat ``name -> string`` map of every non-file parameter."""
        form: Dict[str, str] = {}
        for key, value in self.params.items():
            rendered = to_wire(value)
            if rendered is not None:
                form[key] = rendered
        return form

    def multipart(self) -> List[Tuple[str, Tuple[Optional[str], Any]]]:
        """Ordered ``(name, (filename, contents))`` parts in the form ``requests`` accepts."""
        parts: List[Tuple[str, Tuple[Optional[str], Any]]] = [
            (key, (None, value)) for key, value in self.form_params().items()
        ]
        parts.extend((name, (filename, stream)) for name, (filename, stream) in self.files.items())
        parts.extend(
            (attachment.name, (attachment.filename, attachment.contents))
            for attachment in self.attachments
        )
        return parts

    def options(self) -> Dict[str, Any]:
        """Body options for the transport: multipart when any file is present."""
        if self.has_files:
            return {"files": self.multipart()}
        return {"data": self.form_params()}

    # ------------------------------------------------------------------
    #  Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close every stream this request opened itself."""
        owned, self._owned = self._owned, []
        for stream in owned:
            try:
                stream.close()
            except OSError as exc:
                _logger.debug("Failed to close upload stream", extra={"api_endpoint": self.endpoint, "error": str(exc)})

    def __repr__(self) -> str:
        return f"TelegramRequest(endpoint={self.endpoint!r}, is_async={self.is_async}, files={sorted(self.files)})"
