"""Tests for TelegramBotClient against a stub transport."""

import io
import json
import os
import sys
from unittest.mock import MagicMock

import pytest
import requests

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, os.path.dirname(__file__))

from stubs import TOKEN, StubHttpClient, error_envelope, ok_envelope
from telegram_sdk.client import TelegramBotClient
from telegram_sdk.exceptions import (
    TelegramResponseException,
    TelegramSDKException,
    TelegramValidationError,
)
from telegram_sdk.models import Chat, ChatMember, InputMediaPhoto, Message, UnknownObject, Update, User
from telegram_sdk.request import USER_AGENT
from telegram_sdk.response import PendingResult, TelegramResponse


# ── Construction ─────────────────────────────────────────────────────────────


class TestClientInit:
    """Token resolution and default settings."""

    def test_explicit_token(self, transport: StubHttpClient) -> None:
        assert TelegramBotClient("abc", http_client=transport).access_token == "abc"

    def test_env_fallback(self, monkeypatch, transport: StubHttpClient) -> None:
        monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "from-env")
        assert TelegramBotClient(http_client=transport).access_token == "from-env"

    def test_custom_env_name(self, monkeypatch, transport: StubHttpClient) -> None:
        monkeypatch.setenv("MY_BOT_TOKEN", "custom")
        assert TelegramBotClient(http_client=transport, token_env_name="MY_BOT_TOKEN").access_token == "custom"

    def test_missing_token(self, monkeypatch, transport: StubHttpClient) -> None:
        monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)
        with pytest.raises(TelegramValidationError, match="TELEGRAM_BOT_TOKEN"):
            TelegramBotClient(http_client=transport)

    def test_non_string_token(self, transport: StubHttpClient) -> None:
        with pytest.raises(TelegramValidationError, match="string"):
            TelegramBotClient(12345, http_client=transport)

    def test_token_setter_validates(self, client: TelegramBotClient) -> None:
        with pytest.raises(TelegramValidationError):
            client.access_token = None

    def test_defaults(self, client: TelegramBotClient) -> None:
        assert client.timeout == 60
        assert client.connect_timeout == 10
        assert not client.is_async_request
        assert client.last_response is None


# ── End-to-end ───────────────────────────────────────────────────────────────


class TestSendMessage:
    """A full call: request on the wire, typed result back."""

    def test_success(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        transport.queue(ok_envelope({"chat": {"id": 987654321}, "text": "Test message"}))

        msg = client.send_message(987654321, "Test message")

        assert isinstance(msg, Message)
        assert isinstance(msg.chat, Chat)
        assert msg.chat.id == 987654321
        assert msg.text == "Test message"

    def test_wire_request(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        client.send_message(987654321, "Test message", disable_notification=True)

        call = transport.last_call
        assert call["url"] == f"https://api.telegram.org/bot{TOKEN}/sendMessage"
        assert call["headers"]["User-Agent"] == USER_AGENT
        assert call["options"] == {
            "data": {"chat_id": "987654321", "text": "Test message", "disable_notification": "true"}
        }
        assert call["timeout"] == 60
        assert call["connect_timeout"] == 10
        assert call["is_async"] is False

    def test_api_error(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        transport.queue(error_envelope(400, "Too Many Requests. Retry after 1000", {"retry_after": 1000}))

        with pytest.raises(TelegramResponseException) as info:
            client.send_message(987654321, "Test message")

        assert info.value.code == 400
        assert info.value.description == "Too Many Requests. Retry after 1000"
        assert info.value.retry_after == 1000

    def test_transport_error(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        transport.queue(requests.Timeout("read timed out"))
        with pytest.raises(TelegramSDKException) as info:
            client.send_message(1, "x")
        assert not isinstance(info.value, TelegramResponseException)
        assert isinstance(info.value.__cause__, requests.Timeout)

    def test_non_requests_transport_error(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        rejected = MagicMock()
        client.on_rejected = rejected
        transport.queue(ValueError("I/O operation on closed file."))

        with pytest.raises(TelegramSDKException) as info:
            client.send_message(1, "x")

        assert not isinstance(info.value, TelegramResponseException)
        assert isinstance(info.value.__cause__, ValueError)
        rejected.assert_called_once()

    def test_last_response(self, client: TelegramBotClient) -> None:
        client.get_me()
        assert isinstance(client.last_response, TelegramResponse)
        assert client.last_response.request.endpoint == "getMe"


# ── Result shapes ────────────────────────────────────────────────────────────


class TestResultShapes:
    """Endpoints hydrate into their declared types."""

    def test_get_me(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        transport.queue(ok_envelope({"id": 1, "is_bot": True, "first_name": "Bot", "username": "a_bot"}))
        me = client.get_me()
        assert isinstance(me, User)
        assert me.username == "a_bot"

    def test_get_updates_list(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        transport.queue(ok_envelope([{"update_id": 1, "message": {"message_id": 1}}, {"update_id": 2}]))
        updates = client.get_updates(offset=1, timeout=30)
        assert [u.update_id for u in updates] == [1, 2]
        assert all(isinstance(u, Update) for u in updates)
        assert transport.form() == {"offset": "1", "timeout": "30"}

    def test_empty_list_result(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        transport.queue(ok_envelope([]))
        assert client.get_updates() == []

    def test_chat_administrators(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        transport.queue(ok_envelope([{"user": {"id": 1}, "status": "creator"}]))
        admins = client.get_chat_administrators(-100)
        assert isinstance(admins[0], ChatMember)
        assert isinstance(admins[0].user, User)

    def test_boolean_result(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        transport.queue(ok_envelope(True))
        assert client.delete_message(1, 2) is True

    def test_scalar_result(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        transport.queue(ok_envelope(42))
        assert client.get_chat_members_count(1) == 42

    def test_message_or_true(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        transport.queue(ok_envelope(True), ok_envelope({"message_id": 9}))
        assert client.set_game_score(1, 100, inline_message_id="abc") is True
        assert client.set_game_score(1, 100, chat_id=1, message_id=9).message_id == 9


# ── Validation before network ────────────────────────────────────────────────


class TestValidation:
    """Bad input is rejected before anything reaches the transport."""

    def test_webhook_requires_https(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        with pytest.raises(TelegramValidationError, match="HTTPS"):
            client.set_webhook("http://example.com/hook")
        assert transport.calls == []

    def test_webhook_requires_url(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        with pytest.raises(TelegramValidationError, match="Invalid URL Provided"):
            client.set_webhook("not a url")
        assert transport.calls == []

    def test_webhook_https_accepted(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        assert client.set_webhook("https://example.com/hook", max_connections=10) is True
        assert transport.form() == {"url": "https://example.com/hook", "max_connections": "10"}

    def test_invalid_chat_action(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        with pytest.raises(TelegramValidationError, match="Invalid Action"):
            client.send_chat_action(1, "dancing")
        assert transport.calls == []

    def test_invalid_chat_action_in_async_mode(self, async_client: TelegramBotClient, transport: StubHttpClient) -> None:
        with pytest.raises(TelegramValidationError):
            async_client.send_chat_action(1, "dancing")
        assert transport.calls == []

    def test_valid_chat_action(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        assert client.send_chat_action(1, "typing") is True
        assert transport.form()["action"] == "typing"

    def test_override_token_must_be_string(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        with pytest.raises(TelegramValidationError):
            client.get_me(_access_token=123)
        assert transport.calls == []


# ── Asynchronous mode ────────────────────────────────────────────────────────


class TestAsyncMode:
    """Calls return immediately and resolve on demand."""

    def test_returns_unresolved_handle(self, async_client: TelegramBotClient, transport: StubHttpClient) -> None:
        transport.queue(ok_envelope({"chat": {"id": 987654321}, "text": "Test message"}))

        pending = async_client.send_message(987654321, "Test message")

        assert isinstance(pending, PendingResult)
        assert not pending.done()
        assert transport.last_call["is_async"] is True

        transport.resolve_pending()
        msg = pending.result()
        assert isinstance(msg, Message)
        assert msg.chat.id == 987654321
        assert msg.text == "Test message"

    def test_pending_set_and_drain(self, async_client: TelegramBotClient, transport: StubHttpClient) -> None:
        async_client.get_me()
        async_client.get_me()
        assert len(async_client.pending) == 2

        transport.resolve_pending()
        drained = async_client.async_wait()

        assert len(drained) == 2
        assert all(response.ready() for response in drained)
        assert async_client.pending == []

    def test_error_deferred_until_forced(self, async_client: TelegramBotClient, transport: StubHttpClient) -> None:
        transport.queue(error_envelope(403, "Forbidden: bot was kicked from the group chat"))

        pending = async_client.send_message(1, "x")
        transport.resolve_pending()

        drained = async_client.async_wait()
        assert drained[0].is_error()
        with pytest.raises(TelegramResponseException) as info:
            pending.result()
        assert info.value.code == 403

    def test_switching_off_drains(self, async_client: TelegramBotClient, transport: StubHttpClient) -> None:
        async_client.get_me()
        transport.resolve_pending()
        async_client.set_async_request(False)
        assert async_client.pending == []
        assert not async_client.is_async_request

    def test_context_manager_drains(self, transport: StubHttpClient) -> None:
        with TelegramBotClient(TOKEN, is_async=True, http_client=transport) as bot:
            bot.get_me()
            transport.resolve_pending()
        assert bot.pending == []

    def test_per_call_async(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        pending = client.get_me(_async=True)
        assert isinstance(pending, PendingResult)
        assert "_async" not in transport.form()
        transport.resolve_pending()
        assert pending.result() is True


# ── Per-call overrides ───────────────────────────────────────────────────────


class TestOverrides:
    """Reserved keys change one call and never reach Telegram."""

    def test_access_token_override(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        client.send_message(1, "hi", _access_token="999:OTHER")
        assert transport.last_call["url"].endswith("/bot999:OTHER/sendMessage")
        assert "_access_token" not in transport.form()
        assert client.access_token == TOKEN

    def test_timeout_override(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        client.get_me(_timeout=5, _connect_timeout=1)
        assert transport.last_call["timeout"] == 5
        assert transport.last_call["connect_timeout"] == 1
        assert transport.form() == {}

    def test_client_timeouts(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        client.timeout = 30
        client.connect_timeout = 3
        client.get_me()
        assert (transport.last_call["timeout"], transport.last_call["connect_timeout"]) == (30, 3)


# ── Hooks ────────────────────────────────────────────────────────────────────


class TestHooks:
    """Instrumentation hooks around each call."""

    def test_sending_then_fulfilled(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        events = []
        client.on_sending = lambda request: events.append(("sending", request.endpoint, len(transport.calls)))
        client.on_fulfilled = lambda response, elapsed: events.append(("fulfilled", response.request.endpoint, elapsed >= 0))

        client.get_me()

        assert events == [("sending", "getMe", 0), ("fulfilled", "getMe", True)]

    def test_rejected(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        rejected = MagicMock()
        client.on_rejected = rejected
        transport.queue(error_envelope(400, "Bad Request: chat not found"))

        with pytest.raises(TelegramResponseException):
            client.get_chat(1)

        rejected.assert_called_once()
        assert rejected.call_args.args[0].is_error()

    def test_async_hooks_fire_on_resolution(self, async_client: TelegramBotClient, transport: StubHttpClient) -> None:
        fulfilled = MagicMock()
        async_client.on_fulfilled = fulfilled
        pending = async_client.get_me()
        transport.resolve_pending()
        fulfilled.assert_not_called()

        pending.result()
        pending.result()
        async_client.async_wait()
        fulfilled.assert_called_once()


# ── Files ────────────────────────────────────────────────────────────────────


class TestUploads:
    """File parameters travel as multipart and owned streams get closed."""

    def test_send_photo_from_path(self, client: TelegramBotClient, transport: StubHttpClient, tmp_path) -> None:
        path = tmp_path / "cat.jpg"
        path.write_bytes(b"meow")

        client.send_photo(1, str(path), caption="cat")

        parts = transport.file_parts()
        filename, stream = parts["photo"]
        assert filename == "cat.jpg"
        assert stream.closed
        assert transport.form() == {"chat_id": "1", "caption": "cat"}

    def test_send_photo_by_file_id(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        client.send_photo(1, "AgADBAADq6cxG")
        assert transport.last_call["options"] == {"data": {"chat_id": "1", "photo": "AgADBAADq6cxG"}}

    def test_send_media_group(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        transport.queue(ok_envelope([{"message_id": 1}, {"message_id": 2}]))
        media = [InputMediaPhoto(media=io.BytesIO(b"one")), InputMediaPhoto(media="file-2")]

        messages = client.send_media_group(5, media)

        assert [m.message_id for m in messages] == [1, 2]
        encoded = json.loads(transport.form()["media"])
        assert encoded[0]["media"] == "attach://__ATTACHED_FILE__0"
        assert encoded[1]["media"] == "file-2"
        assert "__ATTACHED_FILE__0" in transport.file_parts()

    def test_send_media_group_serialized_string(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        serialized = json.dumps([{"type": "photo", "media": "id1"}, {"type": "photo", "media": "id2"}])

        client.send_media_group(5, serialized)

        assert transport.form()["media"] == serialized
        assert transport.file_parts() == {}

    def test_stream_closed_when_transport_raises(self, tmp_path) -> None:
        path = tmp_path / "a.bin"
        path.write_bytes(b"x")
        opened = []

        class Exploding(StubHttpClient):
            def send(self, url, headers, options, timeout, is_async, connect_timeout):
                opened.extend(stream for _, (_, stream) in options["files"] if hasattr(stream, "read"))
                raise RuntimeError("boom")

        bot = TelegramBotClient(TOKEN, http_client=Exploding())
        with pytest.raises(RuntimeError):
            bot.send_document(1, str(path))
        assert opened and all(stream.closed for stream in opened)


# ── Generic access ───────────────────────────────────────────────────────────


class TestGenericCall:
    """``call`` reaches endpoints the client does not model."""

    def test_known_get_type(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        transport.queue(ok_envelope({"id": 5, "type": "private"}))
        chat = client.call("getChat", {"chat_id": 5})
        assert isinstance(chat, Chat)
        assert transport.last_call["url"].endswith("/getChat")

    def test_unknown_method(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        transport.queue(ok_envelope({"some": "thing"}))
        result = client.call("getBusinessConnection", business_connection_id="x")
        assert isinstance(result, UnknownObject)
        assert result.get("some") == "thing"
        assert transport.form() == {"business_connection_id": "x"}

    def test_unknown_scalar(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        transport.queue(ok_envelope(True))
        assert client.call("setMessageReaction", {"chat_id": 1}) is True

    def test_unknown_list(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        transport.queue(ok_envelope([{"a": 1}]))
        result = client.call("getForumTopicIconStickers")
        assert isinstance(result[0], UnknownObject)

    def test_errors_raise(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        transport.queue(error_envelope(404, "Not Found"))
        with pytest.raises(TelegramResponseException):
            client.call("doesNotExist")


# ── Webhook updates & file URLs ──────────────────────────────────────────────


class TestWebhookUpdate:
    """Decoding an incoming webhook body is local only."""

    def test_from_string(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        body = json.dumps({"update_id": 7, "message": {"message_id": 1, "text": "hi", "chat": {"id": 3}}})
        update = client.get_webhook_update(body)
        assert isinstance(update, Update)
        assert update.message.text == "hi"
        assert transport.calls == []

    def test_from_bytes(self, client: TelegramBotClient) -> None:
        assert client.get_webhook_update(b'{"update_id": 8}').update_id == 8

    def test_invalid_json(self, client: TelegramBotClient) -> None:
        update = client.get_webhook_update("not json")
        assert update.update_id is None

    def test_from_mapping(self, client: TelegramBotClient) -> None:
        assert client.get_webhook_update({"update_id": 9}).update_id == 9


class TestFileUrl:
    def test_path(self, client: TelegramBotClient) -> None:
        assert client.file_url("photos/file_1.jpg") == f"https://api.telegram.org/file/bot{TOKEN}/photos/file_1.jpg"

    def test_file_object(self, client: TelegramBotClient, transport: StubHttpClient) -> None:
        transport.queue(ok_envelope({"file_id": "x", "file_path": "docs/a.pdf"}))
        file = client.get_file("x")
        assert client.file_url(file).endswith("/docs/a.pdf")
