"""TelegramBotClient -- service layer wrapping the Telegram Bot API endpoints.

Every public endpoint method validates what it can locally, builds a
:class:`~telegram_sdk.request.TelegramRequest`, hands it to the transport,
wraps the outcome in a :class:`~telegram_sdk.response.TelegramResponse`, and
hydrates the ``result`` into the Pydantic models of :mod:`telegram_sdk.models`.

Calls are synchronous by default.  In asynchronous mode (per client via
``is_async`` / :meth:`TelegramBotClient.set_async_request`, or per call with
``_async=True``) an endpoint returns a :class:`~telegram_sdk.response.PendingResult`
right away; the client keeps every such response until :meth:`async_wait`
drains them.

Reserved parameter keys override client settings for one call and are never
sent to Telegram: ``_access_token``, ``_async``, ``_timeout`` and
``_connect_timeout``.

Usage::

    with TelegramBotClient("123:abc") as bot:
        me = bot.get_me()
        bot.send_message(chat_id, f"Hi, I am {me.first_name}")
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import AnyUrl, TypeAdapter, ValidationError

from config import BASE_BOT_URL, BOT_TOKEN_ENV_NAME, DEFAULT_CONNECT_TIMEOUT, DEFAULT_TIMEOUT, get_env_token
from telegram_sdk.exceptions import TelegramValidationError
from telegram_sdk.http_client import HttpClientInterface, RequestsHttpClient
from telegram_sdk.models import (
    OBJECT_TYPES,
    BotCommand,
    Chat,
    ChatMember,
    File,
    GameHighScore,
    InputMedia,
    Message,
    MessageId,
    Poll,
    StickerSet,
    UnknownObject,
    Update,
    User,
    UserProfilePhotos,
    WebhookInfo,
    hydrate,
)
from telegram_sdk.request import TelegramRequest
from telegram_sdk.response import PendingResult, ResponseHook, TelegramResponse

_logger = logging.getLogger("telegram_sdk.client")

_ANY_URL = TypeAdapter(AnyUrl)

ChatId = Union[int, str]
SendingHook = Callable[[TelegramRequest], Any]


def _studly(name: str) -> str:
    """``chat_member`` / ``chatMember`` -> ``ChatMember``."""
    return "".join(part[:1].upper() + part[1:] for part in name.split("_"))


class TelegramBotClient:
    """Client-side service layer for the Telegram Bot API.

    Each public method corresponds to a Bot API endpoint; required
    parameters are explicit arguments and everything else is passed through
    ``**params`` using the Bot API's own parameter names.

    Args:
        token: Bot token.  Falls back to the environment variable named by
            *token_env_name* (``TELEGRAM_BOT_TOKEN`` by default).
        is_async: Start in asynchronous mode.
        http_client: Transport to use; a :class:`RequestsHttpClient` owned
            by this client is created when omitted.
        base_url: Bot API base URL, the token is appended to it.
        timeout: Default overall request timeout in seconds.
        connect_timeout: Default connection timeout in seconds.
        on_sending: Hook called with each request just before it is sent.
        on_fulfilled: Hook called as ``hook(response, elapsed)`` on success.
        on_rejected: Hook called as ``hook(response, elapsed)`` on failure.

    Raises:
        TelegramValidationError: No token was supplied or found, or the
            token is not a string.
    """

    VALID_CHAT_ACTIONS: tuple = (
        "typing",
        "upload_photo",
        "record_video",
        "upload_video",
        "record_audio",
        "upload_audio",
        "upload_document",
        "find_location",
        "record_video_note",
        "upload_video_note",
    )

    def __init__(
        self,
        token: Optional[str] = None,
        is_async: bool = False,
        http_client: Optional[HttpClientInterface] = None,
        base_url: str = BASE_BOT_URL,
        timeout: float = DEFAULT_TIMEOUT,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        token_env_name: str = BOT_TOKEN_ENV_NAME,
        on_sending: Optional[SendingHook] = None,
        on_fulfilled: Optional[ResponseHook] = None,
        on_rejected: Optional[ResponseHook] = None,
    ) -> None:
        if token is None:
            token = get_env_token(token_env_name)
        if not token:
            raise TelegramValidationError(
                'Required "token" not supplied in config and could not find '
                f'fallback environment variable "{token_env_name}"'
            )
        self.access_token = token

        self._owns_http_client = http_client is None
        self._http_client: HttpClientInterface = http_client or RequestsHttpClient()
        self._base_url = base_url
        self._is_async = bool(is_async)
        self.timeout = timeout
        self.connect_timeout = connect_timeout

        self.on_sending = on_sending
        self.on_fulfilled = on_fulfilled
        self.on_rejected = on_rejected

        self.last_response: Optional[TelegramResponse] = None
        self._pending: List[TelegramResponse] = []

    # ------------------------------------------------------------------
    #  Configuration
    # ------------------------------------------------------------------

    @property
    def access_token(self) -> str:
        return self._access_token

    @access_token.setter
    def access_token(self, token: str) -> None:
        if not isinstance(token, str):
            raise TelegramValidationError('The Telegram bot access token must be of type "string"')
        self._access_token = token

    @property
    def http_client(self) -> HttpClientInterface:
        return self._http_client

    @property
    def is_async_request(self) -> bool:
        return self._is_async

    def set_async_request(self, is_async: bool) -> "TelegramBotClient":
        """Switch asynchronous mode; switching it off drains pending responses."""
        self._is_async = bool(is_async)
        if not self._is_async:
            self.async_wait()
        return self

    @property
    def pending(self) -> List[TelegramResponse]:
        """Responses of asynchronous calls not yet drained by :meth:`async_wait`."""
        return list(self._pending)

    def async_wait(self) -> List[TelegramResponse]:
        """Wait for every pending asynchronous response and forget them.

        Errors raised while waiting are logged and swallowed; each returned
        response (and any :class:`PendingResult` the caller still holds)
        keeps its own exception.
        """
        waiting, self._pending = self._pending, []
        for response in waiting:
            try:
                response.wait()
            except Exception as exc:
                _logger.debug(
                    "Error while draining pending response",
                    extra={"api_endpoint": response.request.endpoint, "error": str(exc)},
                )
        return waiting

    def close(self) -> None:
        """Drain pending responses and release the transport if this client created it."""
        self.async_wait()
        if self._owns_http_client and isinstance(self._http_client, RequestsHttpClient):
            self._http_client.close()

    def __enter__(self) -> "TelegramBotClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    #  Internal helpers
    # ------------------------------------------------------------------

    def _post(
        self,
        endpoint: str,
        params: Optional[Mapping[str, Any]] = None,
        file_fields: Iterable[str] = (),
        media_fields: Iterable[str] = (),
    ) -> TelegramResponse:
        """Build and send one request, honouring the reserved override keys."""
        params = dict(params or {})
        token = params.pop("_access_token", self._access_token)
        is_async = bool(params.pop("_async", self._is_async))
        timeout = params.pop("_timeout", self.timeout)
        connect_timeout = params.pop("_connect_timeout", self.connect_timeout)

        if not isinstance(token, str):
            raise TelegramValidationError('The Telegram bot access token must be of type "string"')

        request = TelegramRequest(
            token,
            endpoint,
            params,
            file_fields=file_fields,
            media_fields=media_fields,
            is_async=is_async,
            timeout=timeout,
            connect_timeout=connect_timeout,
            base_url=self._base_url,
        )
        return self._send(request)

    def _send(self, request: TelegramRequest) -> TelegramResponse:
        try:
            if self.on_sending is not None:
                self.on_sending(request)
            _logger.debug(
                "Sending request",
                extra={"api_endpoint": request.endpoint, "is_async": request.is_async, "multipart": request.has_files},
            )
            started_at = time.monotonic()
            future = self._http_client.send(
                request.url,
                request.headers,
                request.options(),
                request.timeout,
                request.is_async,
                request.connect_timeout,
            )
        except Exception:
            request.close()
            raise
        future.add_done_callback(lambda _future: request.close())

        response = TelegramResponse(request, future, self.on_fulfilled, self.on_rejected, started_at)
        self.last_response = response
        return response

    def _prepare(self, response: TelegramResponse, convert: Callable[[TelegramResponse], Any]) -> Any:
        """Return the converted result now, or a :class:`PendingResult` in async mode."""
        if response.request.is_async:
            self._pending.append(response)
            return PendingResult(response, convert)
        response.throw_exception()
        return convert(response)

    def _call(
        self,
        endpoint: str,
        params: Mapping[str, Any],
        result_type: Optional[type] = None,
        file_fields: Iterable[str] = (),
        media_fields: Iterable[str] = (),
    ) -> Any:
        response = self._post(endpoint, params, file_fields, media_fields)
        if result_type is None:
            return self._prepare(response, lambda r: r.result())
        return self._prepare(response, lambda r: hydrate(result_type, r.result()))

    # ------------------------------------------------------------------
    #  Generic access
    # ------------------------------------------------------------------

    def call(self, method: str, params: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Any:
        """Call any Bot API *method*, including ones this client does not model.

        ``get<Type>`` methods whose ``<Type>`` is a known model hydrate into
        it; anything else hydrates into :class:`UnknownObject` (scalars are
        returned as they are).
        """
        result_type = UnknownObject
        if method.startswith("get"):
            result_type = OBJECT_TYPES.get(_studly(method[3:].lstrip("_")), UnknownObject)
        return self._call(method, {**(params or {}), **kwargs}, result_type)

    def get_webhook_update(self, body: Union[str, bytes, Mapping[str, Any], None]) -> Update:
        """Decode the raw body of an incoming webhook request into an :class:`Update`."""
        if isinstance(body, (str, bytes, bytearray)):
            try:
                body = json.loads(body)
            except ValueError as exc:
                _logger.warning("Webhook body is not valid JSON", extra={"error": str(exc)})
                body = {}
        return Update.model_validate(body if isinstance(body, Mapping) else {})

    def file_url(self, file: Union[str, File]) -> str:
        """Download URL of a file returned by :meth:`get_file`."""
        file_path = file.file_path if isinstance(file, File) else file
        root = self._base_url[: -len("/bot")] if self._base_url.endswith("/bot") else self._base_url.rstrip("/")
        return f"{root}/file/bot{self._access_token}/{file_path}"

    # ------------------------------------------------------------------
    #  Getting updates
    # ------------------------------------------------------------------

    def get_updates(self, **params: Any) -> List[Update]:
        """Receive incoming updates using long polling."""
        return self._call("getUpdates", params, Update)

    def set_webhook(self, url: str, **params: Any) -> bool:
        """Specify an HTTPS url to receive incoming updates via an outgoing webhook.

        Raises:
            TelegramValidationError: *url* is not a URL, or not an HTTPS one.
        """
        try:
            parsed = _ANY_URL.validate_python(url)
        except ValidationError as exc:
            raise TelegramValidationError("Invalid URL Provided") from exc
        if parsed.scheme != "https":
            raise TelegramValidationError("Invalid URL, should be a HTTPS url.")
        return self._call("setWebhook", {"url": url, **params}, file_fields=("certificate",))

    def delete_webhook(self, **params: Any) -> bool:
        """Remove webhook integration to switch back to :meth:`get_updates`."""
        return self._call("deleteWebhook", params)

    def get_webhook_info(self) -> WebhookInfo:
        return self._call("getWebhookInfo", {}, WebhookInfo)

    # ------------------------------------------------------------------
    #  Bot & messages
    # ------------------------------------------------------------------

    def get_me(self, **params: Any) -> User:
        """Basic information about the bot; a cheap way to test the token."""
        return self._call("getMe", params, User)

    def send_message(self, chat_id: ChatId, text: str, **params: Any) -> Message:
        """Send a text message."""
        return self._call("sendMessage", {"chat_id": chat_id, "text": text, **params}, Message)

    def forward_message(self, chat_id: ChatId, from_chat_id: ChatId, message_id: int, **params: Any) -> Message:
        return self._call(
            "forwardMessage",
            {"chat_id": chat_id, "from_chat_id": from_chat_id, "message_id": message_id, **params},
            Message,
        )

    def copy_message(self, chat_id: ChatId, from_chat_id: ChatId, message_id: int, **params: Any) -> MessageId:
        """Copy a message without a link to the original; returns the new message id."""
        return self._call(
            "copyMessage",
            {"chat_id": chat_id, "from_chat_id": from_chat_id, "message_id": message_id, **params},
            MessageId,
        )

    def send_photo(self, chat_id: ChatId, photo: Any, **params: Any) -> Message:
        """Send a photo given as a file id, an HTTP URL, a local path or a stream."""
        return self._call("sendPhoto", {"chat_id": chat_id, "photo": photo, **params}, Message, ("photo",))

    def send_audio(self, chat_id: ChatId, audio: Any, **params: Any) -> Message:
        return self._call("sendAudio", {"chat_id": chat_id, "audio": audio, **params}, Message, ("audio", "thumb"))

    def send_document(self, chat_id: ChatId, document: Any, **params: Any) -> Message:
        return self._call(
            "sendDocument", {"chat_id": chat_id, "document": document, **params}, Message, ("document", "thumb")
        )

    def send_video(self, chat_id: ChatId, video: Any, **params: Any) -> Message:
        return self._call("sendVideo", {"chat_id": chat_id, "video": video, **params}, Message, ("video", "thumb"))

    def send_animation(self, chat_id: ChatId, animation: Any, **params: Any) -> Message:
        return self._call(
            "sendAnimation", {"chat_id": chat_id, "animation": animation, **params}, Message, ("animation", "thumb")
        )

    def send_voice(self, chat_id: ChatId, voice: Any, **params: Any) -> Message:
        return self._call("sendVoice", {"chat_id": chat_id, "voice": voice, **params}, Message, ("voice",))

    def send_video_note(self, chat_id: ChatId, video_note: Any, **params: Any) -> Message:
        return self._call(
            "sendVideoNote", {"chat_id": chat_id, "video_note": video_note, **params}, Message, ("video_note", "thumb")
        )

    def send_media_group(
        self, chat_id: ChatId, media: Union[str, List[Union[InputMedia, Mapping[str, Any]]]], **params: Any
    ) -> List[Message]:
        """Send 2-10 photos or videos as an album.

        Files carried by the descriptors travel as separate multipart
        attachments referenced via ``attach://``.  A pre-serialized JSON
        string is sent as it is.
        """
        if isinstance(media, (list, tuple)):
            media = list(media)
        return self._call(
            "sendMediaGroup", {"chat_id": chat_id, "media": media, **params}, Message, media_fields=("media",)
        )

    def send_location(self, chat_id: ChatId, latitude: float, longitude: float, **params: Any) -> Message:
        return self._call(
            "sendLocation", {"chat_id": chat_id, "latitude": latitude, "longitude": longitude, **params}, Message
        )

    def edit_message_live_location(self, latitude: float, longitude: float, **params: Any) -> Union[Message, bool]:
        """Edit a live location; returns ``True`` for inline messages."""
        return self._call("editMessageLiveLocation", {"latitude": latitude, "longitude": longitude, **params}, Message)

    def stop_message_live_location(self, **params: Any) -> Union[Message, bool]:
        return self._call("stopMessageLiveLocation", params, Message)

    def send_venue(self, chat_id: ChatId, latitude: float, longitude: float, title: str, address: str, **params: Any) -> Message:
        return self._call(
            "sendVenue",
            {"chat_id": chat_id, "latitude": latitude, "longitude": longitude, "title": title, "address": address, **params},
            Message,
        )

    def send_contact(self, chat_id: ChatId, phone_number: str, first_name: str, **params: Any) -> Message:
        return self._call(
            "sendContact", {"chat_id": chat_id, "phone_number": phone_number, "first_name": first_name, **params}, Message
        )

    def send_poll(self, chat_id: ChatId, question: str, options: List[str], **params: Any) -> Message:
        return self._call("sendPoll", {"chat_id": chat_id, "question": question, "options": options, **params}, Message)

    def stop_poll(self, chat_id: ChatId, message_id: int, **params: Any) -> Poll:
        return self._call("stopPoll", {"chat_id": chat_id, "message_id": message_id, **params}, Poll)

    def send_dice(self, chat_id: ChatId, **params: Any) -> Message:
        return self._call("sendDice", {"chat_id": chat_id, **params}, Message)

    def send_chat_action(self, chat_id: ChatId, action: str, **params: Any) -> bool:
        """Tell the user something is happening on the bot's side.

        Raises:
            TelegramValidationError: *action* is not one of :attr:`VALID_CHAT_ACTIONS`.
        """
        if action not in self.VALID_CHAT_ACTIONS:
            raise TelegramValidationError("Invalid Action! Accepted value: " + ", ".join(self.VALID_CHAT_ACTIONS))
        return self._call("sendChatAction", {"chat_id": chat_id, "action": action, **params})

    def get_user_profile_photos(self, user_id: int, **params: Any) -> UserProfilePhotos:
        return self._call("getUserProfilePhotos", {"user_id": user_id, **params}, UserProfilePhotos)

    def get_file(self, file_id: str, **params: Any) -> File:
        """Basic info about a file; download it from :meth:`file_url`."""
        return self._call("getFile", {"file_id": file_id, **params}, File)

    # ------------------------------------------------------------------
    #  Chat administration
    # ------------------------------------------------------------------

    def kick_chat_member(self, chat_id: ChatId, user_id: int, **params: Any) -> bool:
        return self._call("kickChatMember", {"chat_id": chat_id, "user_id": user_id, **params})

    def unban_chat_member(self, chat_id: ChatId, user_id: int, **params: Any) -> bool:
        return self._call("unbanChatMember", {"chat_id": chat_id, "user_id": user_id, **params})

    def restrict_chat_member(self, chat_id: ChatId, user_id: int, permissions: Any, **params: Any) -> bool:
        return self._call(
            "restrictChatMember", {"chat_id": chat_id, "user_id": user_id, "permissions": permissions, **params}
        )

    def promote_chat_member(self, chat_id: ChatId, user_id: int, **params: Any) -> bool:
        return self._call("promoteChatMember", {"chat_id": chat_id, "user_id": user_id, **params})

    def leave_chat(self, chat_id: ChatId, **params: Any) -> bool:
        return self._call("leaveChat", {"chat_id": chat_id, **params})

    def export_chat_invite_link(self, chat_id: ChatId, **params: Any) -> str:
        return self._call("exportChatInviteLink", {"chat_id": chat_id, **params})

    def set_chat_photo(self, chat_id: ChatId, photo: Any, **params: Any) -> bool:
        return self._call("setChatPhoto", {"chat_id": chat_id, "photo": photo, **params}, file_fields=("photo",))

    def delete_chat_photo(self, chat_id: ChatId, **params: Any) -> bool:
        return self._call("deleteChatPhoto", {"chat_id": chat_id, **params})

    def set_chat_title(self, chat_id: ChatId, title: str, **params: Any) -> bool:
        return self._call("setChatTitle", {"chat_id": chat_id, "title": title, **params})

    def set_chat_description(self, chat_id: ChatId, **params: Any) -> bool:
        return self._call("setChatDescription", {"chat_id": chat_id, **params})

    def pin_chat_message(self, chat_id: ChatId, message_id: int, **params: Any) -> bool:
        return self._call("pinChatMessage", {"chat_id": chat_id, "message_id": message_id, **params})

    def unpin_chat_message(self, chat_id: ChatId, **params: Any) -> bool:
        return self._call("unpinChatMessage", {"chat_id": chat_id, **params})

    def get_chat(self, chat_id: ChatId, **params: Any) -> Chat:
        return self._call("getChat", {"chat_id": chat_id, **params}, Chat)

    def get_chat_administrators(self, chat_id: ChatId, **params: Any) -> List[ChatMember]:
        return self._call("getChatAdministrators", {"chat_id": chat_id, **params}, ChatMember)

    def get_chat_members_count(self, chat_id: ChatId, **params: Any) -> int:
        return self._call("getChatMembersCount", {"chat_id": chat_id, **params})

    def get_chat_member(self, chat_id: ChatId, user_id: int, **params: Any) -> ChatMember:
        return self._call("getChatMember", {"chat_id": chat_id, "user_id": user_id, **params}, ChatMember)

    def set_chat_sticker_set(self, chat_id: ChatId, sticker_set_name: str, **params: Any) -> bool:
        return self._call("setChatStickerSet", {"chat_id": chat_id, "sticker_set_name": sticker_set_name, **params})

    def delete_chat_sticker_set(self, chat_id: ChatId, **params: Any) -> bool:
        return self._call("deleteChatStickerSet", {"chat_id": chat_id, **params})

    def answer_callback_query(self, callback_query_id: str, **params: Any) -> bool:
        """Acknowledge a callback query so the client stops showing a spinner."""
        return self._call("answerCallbackQuery", {"callback_query_id": callback_query_id, **params})

    def set_my_commands(self, commands: List[Any], **params: Any) -> bool:
        return self._call("setMyCommands", {"commands": commands, **params})

    def get_my_commands(self, **params: Any) -> List[BotCommand]:
        return self._call("getMyCommands", params, BotCommand)

    # ------------------------------------------------------------------
    #  Updating messages
    # ------------------------------------------------------------------

    def edit_message_text(self, text: str, **params: Any) -> Union[Message, bool]:
        """Edit a text message; returns ``True`` for inline messages."""
        return self._call("editMessageText", {"text": text, **params}, Message)

    def edit_message_caption(self, **params: Any) -> Union[Message, bool]:
        return self._call("editMessageCaption", params, Message)

    def edit_message_media(self, media: Union[InputMedia, Mapping[str, Any]], **params: Any) -> Union[Message, bool]:
        return self._call("editMessageMedia", {"media": media, **params}, Message, media_fields=("media",))

    def edit_message_reply_markup(self, **params: Any) -> Union[Message, bool]:
        return self._call("editMessageReplyMarkup", params, Message)

    def delete_message(self, chat_id: ChatId, message_id: int, **params: Any) -> bool:
        return self._call("deleteMessage", {"chat_id": chat_id, "message_id": message_id, **params})

    # ------------------------------------------------------------------
    #  Stickers
    # ------------------------------------------------------------------

    def send_sticker(self, chat_id: ChatId, sticker: Any, **params: Any) -> Message:
        return self._call("sendSticker", {"chat_id": chat_id, "sticker": sticker, **params}, Message, ("sticker",))

    def get_sticker_set(self, name: str, **params: Any) -> StickerSet:
        return self._call("getStickerSet", {"name": name, **params}, StickerSet)

    def upload_sticker_file(self, user_id: int, png_sticker: Any, **params: Any) -> File:
        return self._call(
            "uploadStickerFile", {"user_id": user_id, "png_sticker": png_sticker, **params}, File, ("png_sticker",)
        )

    def create_new_sticker_set(self, user_id: int, name: str, title: str, emojis: str, **params: Any) -> bool:
        return self._call(
            "createNewStickerSet",
            {"user_id": user_id, "name": name, "title": title, "emojis": emojis, **params},
            file_fields=("png_sticker", "tgs_sticker"),
        )

    def add_sticker_to_set(self, user_id: int, name: str, emojis: str, **params: Any) -> bool:
        return self._call(
            "addStickerToSet",
            {"user_id": user_id, "name": name, "emojis": emojis, **params},
            file_fields=("png_sticker", "tgs_sticker"),
        )

    def set_sticker_position_in_set(self, sticker: str, position: int, **params: Any) -> bool:
        return self._call("setStickerPositionInSet", {"sticker": sticker, "position": position, **params})

    def delete_sticker_from_set(self, sticker: str, **params: Any) -> bool:
        return self._call("deleteStickerFromSet", {"sticker": sticker, **params})

    # ------------------------------------------------------------------
    #  Inline mode, payments & games
    # ------------------------------------------------------------------

    def answer_inline_query(self, inline_query_id: str, results: List[Any], **params: Any) -> bool:
        return self._call("answerInlineQuery", {"inline_query_id": inline_query_id, "results": results, **params})

    def send_invoice(
        self,
        chat_id: ChatId,
        title: str,
        description: str,
        payload: str,
        provider_token: str,
        start_parameter: str,
        currency: str,
        prices: List[Any],
        **params: Any,
    ) -> Message:
        return self._call(
            "sendInvoice",
            {
                "chat_id": chat_id,
                "title": title,
                "description": description,
                "payload": payload,
                "provider_token": provider_token,
                "start_parameter": start_parameter,
                "currency": currency,
                "prices": prices,
                **params,
            },
            Message,
        )

    def answer_shipping_query(self, shipping_query_id: str, ok: bool, **params: Any) -> bool:
        return self._call("answerShippingQuery", {"shipping_query_id": shipping_query_id, "ok": ok, **params})

    def answer_pre_checkout_query(self, pre_checkout_query_id: str, ok: bool, **params: Any) -> bool:
        return self._call(
            "answerPreCheckoutQuery", {"pre_checkout_query_id": pre_checkout_query_id, "ok": ok, **params}
        )

    def send_game(self, chat_id: ChatId, game_short_name: str, **params: Any) -> Message:
        return self._call("sendGame", {"chat_id": chat_id, "game_short_name": game_short_name, **params}, Message)

    def set_game_score(self, user_id: int, score: int, **params: Any) -> Union[Message, bool]:
        """Set a user's game score; returns ``True`` unless the bot sent the message."""
        return self._call("setGameScore", {"user_id": user_id, "score": score, **params}, Message)

    def get_game_high_scores(self, user_id: int, **params: Any) -> List[GameHighScore]:
        return self._call("getGameHighScores", {"user_id": user_id, **params}, GameHighScore)
