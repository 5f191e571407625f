"""Best-effort classification of Bot API failures.

Each predicate inspects the ``description`` of a
:class:`~telegram_sdk.exceptions.TelegramResponseException`.  Telegram does
not publish these strings as a stable contract, so the matches are English
substrings observed in practice and may stop matching if the wording
changes.  Prefer ``exc.code`` and ``exc.parameters`` where they are enough.

Usage::

    try:
        client.send_message(chat_id, "hi")
    except TelegramResponseException as exc:
        if causes.bot_was_blocked_or_kicked(exc):
            unsubscribe(chat_id)
"""

from typing import Iterable, Union

from telegram_sdk.exceptions import TelegramResponseException


def _description_contains(exc: BaseException, needles: Union[str, Iterable[str]]) -> bool:
    """True when *exc* is a response exception whose description holds any needle."""
    if not isinstance(exc, TelegramResponseException):
        return False
    if isinstance(needles, str):
        needles = (needles,)
    description = exc.description or ""
    return any(needle in description for needle in needles)


def user_blocked(exc: BaseException) -> bool:
    """The user blocked the bot or deleted their account."""
    return _description_contains(exc, ("blocked", "User is deactivated"))


def bot_was_kicked(exc: BaseException) -> bool:
    return _description_contains(exc, "bot was kicked")


def bot_was_blocked_or_kicked(exc: BaseException) -> bool:
    return user_blocked(exc) or bot_was_kicked(exc)


def invalid_chat(exc: BaseException) -> bool:
    return _description_contains(exc, "Bad Request: chat not found")


def invalid_file_id(exc: BaseException) -> bool:
    return _description_contains(exc, "Wrong file identifier")


def message_not_modified(exc: BaseException) -> bool:
    """Editing was a no-op because content and markup are unchanged."""
    return _description_contains(exc, "message is not modified")


def too_many_requests(exc: BaseException) -> bool:
    """Flood control kicked in; see ``exc.retry_after`` for the wait."""
    return _description_contains(exc, "Too Many Requests")
