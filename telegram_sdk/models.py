"""Pydantic value objects for the Telegram Bot API.

Every class mirrors an object from https://core.telegram.org/bots/api.  All
fields are optional: the Bot API adds fields over time and omits empty ones,
so hydration must never fail because something is missing or extra.

:class:`BaseObject` drives hydration.  A field whose annotation mentions
another ``BaseObject`` subclass is a *relation*; raw JSON arriving at that key
is turned into instances of the target type: a list becomes a list of
instances (recursively, so ``List[List[PhotoSize]]`` works), a mapping becomes
a single instance.  Anything that does not fit its declared type is kept as
the raw value instead of raising, and unknown keys survive as extras.

Nested relations are hydrated by recursion on the Python stack, so the depth
of a self-nesting chain (``reply_to_message`` inside ``reply_to_message``, …)
is bounded by the interpreter recursion limit: a few hundred levels with the
default limit, far beyond anything the Bot API sends.
"""

from __future__ import annotations

import html
import re
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Optional, Tuple, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from telegram_sdk.file_upload import (
    Attachment,
    InputFile,
    InputFileInterface,
    is_local_file,
    is_stream,
    stream_filename,
)


_RELATIONS: Dict[type, Dict[str, type]] = {}
_FIELD_KEYS: Dict[type, Dict[str, str]] = {}
_MISSING = object()
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _relation_target(annotation: Any) -> Optional[type]:
    """Return the ``BaseObject`` subclass nested anywhere in *annotation*."""
    if get_origin(annotation) is None:
        if isinstance(annotation, type) and issubclass(annotation, BaseObject):
            return annotation
        return None
    for arg in get_args(annotation):
        target = _relation_target(arg)
        if target is not None:
            return target
    return None


def _field_keys(cls: type) -> Dict[str, str]:
    """Map every accepted key (field name or alias) of *cls* to its field name."""
    keys = _FIELD_KEYS.get(cls)
    if keys is None:
        keys = {}
        for name, field in cls.model_fields.items():
            keys[name] = name
            if field.alias:
                keys[field.alias] = name
        _FIELD_KEYS[cls] = keys
    return keys


def hydrate(target: type, value: Any) -> Any:
    """Turn raw decoded JSON *value* into *target* instances by shape.

    Lists (at any depth) keep their order and length, mappings become one
    instance, and everything else is returned unchanged.
    """
    if isinstance(value, BaseObject):
        return value
    if isinstance(value, (list, tuple)):
        return [hydrate(target, item) for item in value]
    if isinstance(value, Mapping):
        return target.model_validate(dict(value))
    return value


def _utf16_slice(text: str, start: int, length: Optional[int] = None) -> str:
    """Slice *text* by UTF-16 code units, the unit Telegram uses for entity offsets."""
    encoded = text.encode("utf-16-le")
    end = None if length is None else (start + length) * 2
    return encoded[max(start, 0) * 2:end].decode("utf-16-le", errors="ignore")


# ── Base ─────────────────────────────────────────────────────────────────────


class BaseObject(BaseModel):
    """Immutable typed view over one decoded Bot API object."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    @classmethod
    def relations(cls) -> Dict[str, type]:
        """Return ``{wire key: target type}`` for every relation field of *cls*."""
        relations = _RELATIONS.get(cls)
        if relations is None:
            relations = {}
            for name, field in cls.model_fields.items():
                target = _relation_target(field.annotation)
                if target is not None:
                    relations[field.alias or name] = target
            _RELATIONS[cls] = relations
        return relations

    @model_validator(mode="before")
    @classmethod
    def _map_relatives(cls, data: Any) -> Any:
        if isinstance(data, cls):
            return data
        if isinstance(data, BaseObject):
            data = data.to_dict()
        if not isinstance(data, Mapping):
            return {}

        relations = cls.relations()
        keys = _field_keys(cls)
        items = dict(data)
        for key, value in items.items():
            name = keys.get(key)
            if name is None:
                continue
            field = cls.model_fields[name]
            target = relations.get(field.alias or name)
            if target is not None:
                items[key] = hydrate(target, value)
        return items

    @field_validator("*", mode="wrap")
    @classmethod
    def _keep_raw_on_mismatch(cls, value: Any, handler: Callable[[Any], Any]) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return value

    # ------------------------------------------------------------------
    #  Property-bag access
    # ------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under *key*, or *default* when unset.

        *key* is the wire name (``"first_name"``, ``"from"``), the Python
        field name, or its camelCase spelling (``"firstName"``).
        """
        keys = _field_keys(type(self))
        extra = self.__pydantic_extra__ or {}
        if key not in keys and key not in extra:
            key = _CAMEL_BOUNDARY.sub("_", key).lower()
        name = keys.get(key)
        if name is not None:
            return getattr(self, name) if name in self.model_fields_set else default
        return extra.get(key, default)

    def keys(self) -> List[str]:
        """Wire keys present on this object, declared fields first."""
        cls = type(self)
        keys = [
            field.alias or name
            for name, field in cls.model_fields.items()
            if name in self.model_fields_set
        ]
        keys.extend((self.__pydantic_extra__ or {}).keys())
        return keys

    def has(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def to_dict(self) -> Dict[str, Any]:
        """Return the object as plain JSON-compatible data, keyed as on the wire."""
        return self.model_dump(by_alias=True, exclude_unset=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_unset=True)


class UnknownObject(BaseObject):
    """Untyped result of an endpoint the SDK does not model; every key is an extra."""


# ── Users & chats ────────────────────────────────────────────────────────────


class User(BaseObject):
    """This object represents a Telegram user or bot."""

    id: Optional[int] = None
    is_bot: Optional[bool] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    username: Optional[str] = None
    language_code: Optional[str] = None
    can_join_groups: Optional[bool] = None
    can_read_all_group_messages: Optional[bool] = None
    supports_inline_queries: Optional[bool] = None


class ChatPhoto(BaseObject):
    small_file_id: Optional[str] = None
    small_file_unique_id: Optional[str] = None
    big_file_id: Optional[str] = None
    big_file_unique_id: Optional[str] = None


class ChatPermissions(BaseObject):
    """Actions that a non-administrator user is allowed to take in a chat."""

    can_send_messages: Optional[bool] = None
    can_send_media_messages: Optional[bool] = None
    can_send_polls: Optional[bool] = None
    can_send_other_messages: Optional[bool] = None
    can_add_web_page_previews: Optional[bool] = None
    can_change_info: Optional[bool] = None
    can_invite_users: Optional[bool] = None
    can_pin_messages: Optional[bool] = None


class ChatLocation(BaseObject):
    location: Optional["Location"] = None
    address: Optional[str] = None


class Chat(BaseObject):
    """This object represents a chat."""

    id: Optional[int] = None
    type: Optional[str] = None
    title: Optional[str] = None
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    photo: Optional["ChatPhoto"] = None
    bio: Optional[str] = None
    description: Optional[str] = None
    invite_link: Optional[str] = None
    pinned_message: Optional["Message"] = None
    permissions: Optional["ChatPermissions"] = None
    slow_mode_delay: Optional[int] = None
    sticker_set_name: Optional[str] = None
    can_set_sticker_set: Optional[bool] = None
    linked_chat_id: Optional[int] = None
    location: Optional["ChatLocation"] = None


class ChatMember(BaseObject):
    """Information about one member of a chat."""

    user: Optional["User"] = None
    status: Optional[str] = None
    custom_title: Optional[str] = None
    is_anonymous: Optional[bool] = None
    can_be_edited: Optional[bool] = None
    can_post_messages: Optional[bool] = None
    can_edit_messages: Optional[bool] = None
    can_delete_messages: Optional[bool] = None
    can_restrict_members: Optional[bool] = None
    can_promote_members: Optional[bool] = None
    can_change_info: Optional[bool] = None
    can_invite_users: Optional[bool] = None
    can_pin_messages: Optional[bool] = None
    is_member: Optional[bool] = None
    can_send_messages: Optional[bool] = None
    can_send_media_messages: Optional[bool] = None
    can_send_polls: Optional[bool] = None
    can_send_other_messages: Optional[bool] = None
    can_add_web_page_previews: Optional[bool] = None
    until_date: Optional[int] = None


class BotCommand(BaseObject):
    command: Optional[str] = None
    description: Optional[str] = None


class ResponseParameters(BaseObject):
    """Contains information about why a request was unsuccessful."""

    migrate_to_chat_id: Optional[int] = None
    retry_after: Optional[int] = None


# ── Media ────────────────────────────────────────────────────────────────────


class PhotoSize(BaseObject):
    """One size of a photo or a file / sticker thumbnail."""

    file_id: Optional[str] = None
    file_unique_id: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    file_size: Optional[int] = None


class Animation(BaseObject):
    file_id: Optional[str] = None
    file_unique_id: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[int] = None
    thumb: Optional["PhotoSize"] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None


class Audio(BaseObject):
    file_id: Optional[str] = None
    file_unique_id: Optional[str] = None
    duration: Optional[int] = None
    performer: Optional[str] = None
    title: Optional[str] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None
    thumb: Optional["PhotoSize"] = None


class Document(BaseObject):
    file_id: Optional[str] = None
    file_unique_id: Optional[str] = None
    thumb: Optional["PhotoSize"] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None


class Video(BaseObject):
    file_id: Optional[str] = None
    file_unique_id: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[int] = None
    thumb: Optional["PhotoSize"] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None


class VideoNote(BaseObject):
    file_id: Optional[str] = None
    file_unique_id: Optional[str] = None
    length: Optional[int] = None
    duration: Optional[int] = None
    thumb: Optional["PhotoSize"] = None
    file_size: Optional[int] = None


class Voice(BaseObject):
    file_id: Optional[str] = None
    file_unique_id: Optional[str] = None
    duration: Optional[int] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None


class File(BaseObject):
    """A file ready to be downloaded via :meth:`TelegramBotClient.file_url`."""

    file_id: Optional[str] = None
    file_unique_id: Optional[str] = None
    file_size: Optional[int] = None
    file_path: Optional[str] = None


class UserProfilePhotos(BaseObject):
    total_count: Optional[int] = None
    photos: Optional[List[List["PhotoSize"]]] = None


class MaskPosition(BaseObject):
    point: Optional[str] = None
    x_shift: Optional[float] = None
    y_shift: Optional[float] = None
    scale: Optional[float] = None


class Sticker(BaseObject):
    file_id: Optional[str] = None
    file_unique_id: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    is_animated: Optional[bool] = None
    thumb: Optional["PhotoSize"] = None
    emoji: Optional[str] = None
    set_name: Optional[str] = None
    mask_position: Optional["MaskPosition"] = None
    file_size: Optional[int] = None


class StickerSet(BaseObject):
    name: Optional[str] = None
    title: Optional[str] = None
    is_animated: Optional[bool] = None
    contains_masks: Optional[bool] = None
    stickers: Optional[List["Sticker"]] = None
    thumb: Optional["PhotoSize"] = None


# ── Message content ──────────────────────────────────────────────────────────


class MessageEntity(BaseObject):
    """One special entity in a text message: hashtag, username, URL, etc."""

    HTML_TYPES: ClassVar[Tuple[str, ...]] = ("bold", "italic", "code", "pre", "text_link", "text_mention")

    type: Optional[str] = None
    offset: Optional[int] = None
    length: Optional[int] = None
    url: Optional[str] = None
    user: Optional["User"] = None
    language: Optional[str] = None

    def is_html_entity(self) -> bool:
        """True when :attr:`Message.html` renders this entity as markup."""
        return self.type in self.HTML_TYPES


class MessageId(BaseObject):
    message_id: Optional[int] = None


class Contact(BaseObject):
    phone_number: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    user_id: Optional[int] = None
    vcard: Optional[str] = None


class Dice(BaseObject):
    emoji: Optional[str] = None
    value: Optional[int] = None


class Location(BaseObject):
    longitude: Optional[float] = None
    latitude: Optional[float] = None
    horizontal_accuracy: Optional[float] = None
    live_period: Optional[int] = None
    heading: Optional[int] = None
    proximity_alert_radius: Optional[int] = None


class Venue(BaseObject):
    location: Optional["Location"] = None
    title: Optional[str] = None
    address: Optional[str] = None
    foursquare_id: Optional[str] = None
    foursquare_type: Optional[str] = None
    google_place_id: Optional[str] = None
    google_place_type: Optional[str] = None


class PollOption(BaseObject):
    text: Optional[str] = None
    voter_count: Optional[int] = None


class PollAnswer(BaseObject):
    poll_id: Optional[str] = None
    user: Optional["User"] = None
    option_ids: Optional[List[int]] = None


class Poll(BaseObject):
    """This object contains information about a poll."""

    id: Optional[str] = None
    question: Optional[str] = None
    options: Optional[List["PollOption"]] = None
    total_voter_count: Optional[int] = None
    is_closed: Optional[bool] = None
    is_anonymous: Optional[bool] = None
    type: Optional[str] = None
    allows_multiple_answers: Optional[bool] = None
    correct_option_id: Optional[int] = None
    explanation: Optional[str] = None
    explanation_entities: Optional[List["MessageEntity"]] = None
    open_period: Optional[int] = None
    close_date: Optional[int] = None


class Game(BaseObject):
    title: Optional[str] = None
    description: Optional[str] = None
    photo: Optional[List["PhotoSize"]] = None
    text: Optional[str] = None
    text_entities: Optional[List["MessageEntity"]] = None
    animation: Optional["Animation"] = None


class GameHighScore(BaseObject):
    position: Optional[int] = None
    user: Optional["User"] = None
    score: Optional[int] = None


# ── Keyboards ────────────────────────────────────────────────────────────────


class LoginUrl(BaseObject):
    url: Optional[str] = None
    forward_text: Optional[str] = None
    bot_username: Optional[str] = None
    request_write_access: Optional[bool] = None


class InlineKeyboardButton(BaseObject):
    """One button of an inline keyboard. Exactly one optional field must be used."""

    text: Optional[str] = None
    url: Optional[str] = None
    login_url: Optional["LoginUrl"] = None
    callback_data: Optional[str] = None
    switch_inline_query: Optional[str] = None
    switch_inline_query_current_chat: Optional[str] = None
    pay: Optional[bool] = None


class InlineKeyboardMarkup(BaseObject):
    inline_keyboard: Optional[List[List["InlineKeyboardButton"]]] = None


class KeyboardButton(BaseObject):
    text: Optional[str] = None
    request_contact: Optional[bool] = None
    request_location: Optional[bool] = None


class ReplyKeyboardMarkup(BaseObject):
    keyboard: Optional[List[List["KeyboardButton"]]] = None
    resize_keyboard: Optional[bool] = None
    one_time_keyboard: Optional[bool] = None
    selective: Optional[bool] = None


class ReplyKeyboardRemove(BaseObject):
    remove_keyboard: Optional[bool] = True
    selective: Optional[bool] = None


class ForceReply(BaseObject):
    force_reply: Optional[bool] = True
    selective: Optional[bool] = None


# ── Payments ─────────────────────────────────────────────────────────────────


class LabeledPrice(BaseObject):
    label: Optional[str] = None
    amount: Optional[int] = None


class Invoice(BaseObject):
    title: Optional[str] = None
    description: Optional[str] = None
    start_parameter: Optional[str] = None
    currency: Optional[str] = None
    total_amount: Optional[int] = None


class ShippingAddress(BaseObject):
    country_code: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    street_line1: Optional[str] = None
    street_line2: Optional[str] = None
    post_code: Optional[str] = None


class OrderInfo(BaseObject):
    name: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    shipping_address: Optional["ShippingAddress"] = None


class ShippingOption(BaseObject):
    id: Optional[str] = None
    title: Optional[str] = None
    prices: Optional[List["LabeledPrice"]] = None


class SuccessfulPayment(BaseObject):
    currency: Optional[str] = None
    total_amount: Optional[int] = None
    invoice_payload: Optional[str] = None
    shipping_option_id: Optional[str] = None
    order_info: Optional["OrderInfo"] = None
    telegram_payment_charge_id: Optional[str] = None
    provider_payment_charge_id: Optional[str] = None


class ShippingQuery(BaseObject):
    id: Optional[str] = None
    from_user: Optional["User"] = Field(None, alias="from")
    invoice_payload: Optional[str] = None
    shipping_address: Optional["ShippingAddress"] = None


class PreCheckoutQuery(BaseObject):
    id: Optional[str] = None
    from_user: Optional["User"] = Field(None, alias="from")
    currency: Optional[str] = None
    total_amount: Optional[int] = None
    invoice_payload: Optional[str] = None
    shipping_option_id: Optional[str] = None
    order_info: Optional["OrderInfo"] = None


# ── Message ──────────────────────────────────────────────────────────────────


class Message(BaseObject):
    """This object represents a message.

    Besides the raw fields, a message knows which kind of content it carries
    (:meth:`detect_type`), where its file lives (:attr:`file_id`), and how to
    render its text or caption entities back to Telegram-flavoured HTML
    (:attr:`html`, :attr:`caption_html`).  Entity offsets are counted in
    UTF-16 code units, as the Bot API does.
    """

    DETECTABLE_TYPES: ClassVar[Tuple[str, ...]] = (
        "text",
        "audio",
        "document",
        "photo",
        "sticker",
        "video",
        "voice",
        "video_note",
        "contact",
        "location",
        "venue",
        "poll",
        "dice",
        "game",
        "new_chat_members",
        "new_chat_member",
        "left_chat_member",
        "new_chat_title",
        "new_chat_photo",
        "delete_chat_photo",
        "group_chat_created",
        "supergroup_chat_created",
        "channel_chat_created",
        "migrate_to_chat_id",
        "migrate_from_chat_id",
        "pinned_message",
        "invoice",
        "successful_payment",
    )

    message_id: Optional[int] = None
    from_user: Optional["User"] = Field(None, alias="from")
    sender_chat: Optional["Chat"] = None
    date: Optional[int] = None
    chat: Optional["Chat"] = None
    forward_from: Optional["User"] = None
    forward_from_chat: Optional["Chat"] = None
    forward_from_message_id: Optional[int] = None
    forward_signature: Optional[str] = None
    forward_sender_name: Optional[str] = None
    forward_date: Optional[int] = None
    reply_to_message: Optional["Message"] = None
    via_bot: Optional["User"] = None
    edit_date: Optional[int] = None
    media_group_id: Optional[str] = None
    author_signature: Optional[str] = None
    text: Optional[str] = None
    entities: Optional[List["MessageEntity"]] = None
    animation: Optional["Animation"] = None
    audio: Optional["Audio"] = None
    document: Optional["Document"] = None
    photo: Optional[List["PhotoSize"]] = None
    sticker: Optional["Sticker"] = None
    video: Optional["Video"] = None
    video_note: Optional["VideoNote"] = None
    voice: Optional["Voice"] = None
    caption: Optional[str] = None
    caption_entities: Optional[List["MessageEntity"]] = None
    contact: Optional["Contact"] = None
    dice: Optional["Dice"] = None
    game: Optional["Game"] = None
    poll: Optional["Poll"] = None
    venue: Optional["Venue"] = None
    location: Optional["Location"] = None
    new_chat_members: Optional[List["User"]] = None
    new_chat_member: Optional["User"] = None
    left_chat_member: Optional["User"] = None
    new_chat_title: Optional[str] = None
    new_chat_photo: Optional[List["PhotoSize"]] = None
    delete_chat_photo: Optional[bool] = None
    group_chat_created: Optional[bool] = None
    supergroup_chat_created: Optional[bool] = None
    channel_chat_created: Optional[bool] = None
    migrate_to_chat_id: Optional[int] = None
    migrate_from_chat_id: Optional[int] = None
    pinned_message: Optional["Message"] = None
    invoice: Optional["Invoice"] = None
    successful_payment: Optional["SuccessfulPayment"] = None
    connected_website: Optional[str] = None
    reply_markup: Optional["InlineKeyboardMarkup"] = None

    def detect_type(self) -> Optional[str]:
        """Return the kind of content this message carries, e.g. ``"photo"``."""
        detected = None
        for key in self.keys():
            if key in self.DETECTABLE_TYPES:
                detected = key
        return detected

    def is_type(self, type_: str) -> bool:
        if self.has(type_.lower()):
            return True
        return self.detect_type() == type_

    @property
    def file_id(self) -> Optional[str]:
        """The ``file_id`` of the attached media, largest size for photos."""
        for single in (self.audio, self.document):
            if isinstance(single, BaseObject):
                return single.get("file_id")
        for sizes in (self.new_chat_photo, self.photo):
            if isinstance(sizes, list) and sizes and isinstance(sizes[-1], BaseObject):
                return sizes[-1].get("file_id")
        for single in (self.sticker, self.video, self.voice, self.video_note):
            if isinstance(single, BaseObject):
                return single.get("file_id")
        return None

    def entity_text(self, entity: "MessageEntity") -> str:
        return _utf16_slice(self.text or "", entity.offset or 0, entity.length or 0)

    def caption_entity_text(self, entity: "MessageEntity") -> str:
        return _utf16_slice(self.caption or "", entity.offset or 0, entity.length or 0)

    def has_html_entity(self) -> bool:
        return any(entity.is_html_entity() for entity in self._entities(self.entities))

    def has_html_caption(self) -> bool:
        return any(entity.is_html_entity() for entity in self._entities(self.caption_entities))

    @property
    def html(self) -> str:
        """The text with its entities rendered as Telegram HTML."""
        return self._render_html(self.text or "", self.entities)

    @property
    def caption_html(self) -> str:
        return self._render_html(self.caption or "", self.caption_entities)

    @staticmethod
    def _entities(entities: Any) -> List["MessageEntity"]:
        if not isinstance(entities, list):
            return []
        return [entity for entity in entities if isinstance(entity, MessageEntity)]

    @classmethod
    def _render_html(cls, text: str, entities: Any) -> str:
        parts: List[str] = []
        last_offset = 0
        for entity in cls._entities(entities):
            offset = entity.offset or 0
            length = entity.length or 0
            parts.append(html.escape(_utf16_slice(text, last_offset, offset - last_offset)))
            last_offset = offset + length

            inner = html.escape(_utf16_slice(text, offset, length))
            if entity.type == "bold":
                parts.append(f"<b>{inner}</b>")
            elif entity.type == "italic":
                parts.append(f"<i>{inner}</i>")
            elif entity.type == "code":
                parts.append(f"<code>{inner}</code>")
            elif entity.type == "pre":
                parts.append(f"<pre>{inner}</pre>")
            elif entity.type == "text_link":
                parts.append(f'<a href="{html.escape(entity.url or "")}">{inner}</a>')
            elif entity.type == "text_mention" and isinstance(entity.user, User):
                parts.append(f'<a href="tg://user?id={entity.user.id}">{inner}</a>')
            else:
                parts.append(inner)

        parts.append(html.escape(_utf16_slice(text, last_offset)))
        return "".join(parts)


# ── Inline mode & callbacks ──────────────────────────────────────────────────


class CallbackQuery(BaseObject):
    """An incoming callback query from a button of an inline keyboard."""

    id: Optional[str] = None
    from_user: Optional["User"] = Field(None, alias="from")
    message: Optional["Message"] = None
    inline_message_id: Optional[str] = None
    chat_instance: Optional[str] = None
    data: Optional[str] = None
    game_short_name: Optional[str] = None


class InlineQuery(BaseObject):
    id: Optional[str] = None
    from_user: Optional["User"] = Field(None, alias="from")
    location: Optional["Location"] = None
    query: Optional[str] = None
    offset: Optional[str] = None


class ChosenInlineResult(BaseObject):
    result_id: Optional[str] = None
    from_user: Optional["User"] = Field(None, alias="from")
    location: Optional["Location"] = None
    inline_message_id: Optional[str] = None
    query: Optional[str] = None


class InlineQueryResult(BaseObject):
    """One result of an inline query, built by the bot and sent with ``answerInlineQuery``."""

    model_config = ConfigDict(frozen=False)

    type: Optional[str] = None
    id: Optional[str] = None
    input_message_content: Optional[Dict[str, Any]] = None
    reply_markup: Optional["InlineKeyboardMarkup"] = None


class InlineQueryResultArticle(InlineQueryResult):
    type: Optional[str] = "article"
    title: Optional[str] = None
    url: Optional[str] = None
    hide_url: Optional[bool] = None
    description: Optional[str] = None
    thumb_url: Optional[str] = None


class InlineQueryResultLocation(InlineQueryResult):
    type: Optional[str] = "location"
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    title: Optional[str] = None
    live_period: Optional[int] = None
    thumb_url: Optional[str] = None


# ── Input media ──────────────────────────────────────────────────────────────


class InputMedia(BaseObject):
    """Content of a media message to be sent, e.g. one item of a media group.

    ``media`` may be a file id, an HTTP URL, a local path, an open binary
    stream, or any :class:`~telegram_sdk.file_upload.InputFileInterface`.
    Unlike received objects, input media stay mutable until they are
    serialized: :meth:`extract_attachment` rewrites ``media`` in place.
    """

    model_config = ConfigDict(frozen=False)

    type: Optional[str] = None
    media: Optional[Any] = None
    caption: Optional[str] = None
    parse_mode: Optional[str] = None
    caption_entities: Optional[List["MessageEntity"]] = None

    def extract_attachment(self, name: str) -> Optional[Attachment]:
        """Pull an uploadable file out of ``media`` as multipart part *name*.

        When ``media`` resolves to a stream, it is replaced by the reference
        ``attach://<name>`` and the stream is returned as an
        :class:`~telegram_sdk.file_upload.Attachment`.  File ids and URLs stay
        inline and ``None`` is returned.
        """
        media = self.media
        owned = False
        filename = None

        if isinstance(media, str) and is_local_file(media):
            media = InputFile(media)
        if isinstance(media, InputFileInterface):
            owned = not is_stream(getattr(media, "path", None))
            filename = media.filename
            media = media.open()

        if is_stream(media):
            self.media = f"attach://{name}"
            return Attachment(
                name=name,
                contents=media,
                filename=filename or stream_filename(media, name),
                owned=owned,
            )

        if media is not self.media:
            self.media = media
        return None


class InputMediaPhoto(InputMedia):
    type: Optional[str] = "photo"


class InputMediaVideo(InputMedia):
    type: Optional[str] = "video"
    thumb: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[int] = None
    supports_streaming: Optional[bool] = None


class InputMediaAnimation(InputMedia):
    type: Optional[str] = "animation"
    thumb: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[int] = None


class InputMediaAudio(InputMedia):
    type: Optional[str] = "audio"
    thumb: Optional[str] = None
    duration: Optional[int] = None
    performer: Optional[str] = None
    title: Optional[str] = None


class InputMediaDocument(InputMedia):
    type: Optional[str] = "document"
    thumb: Optional[str] = None
    disable_content_type_detection: Optional[bool] = None


# ── Webhooks & updates ───────────────────────────────────────────────────────


class WebhookInfo(BaseObject):
    """Contains information about the current status of a webhook."""

    url: Optional[str] = None
    has_custom_certificate: Optional[bool] = None
    pending_update_count: Optional[int] = None
    ip_address: Optional[str] = None
    last_error_date: Optional[int] = None
    last_error_message: Optional[str] = None
    max_connections: Optional[int] = None
    allowed_updates: Optional[List[str]] = None


class Update(BaseObject):
    """An incoming update. At most one of the optional payload fields is present."""

    UPDATE_TYPES: ClassVar[Tuple[str, ...]] = (
        "message",
        "edited_message",
        "channel_post",
        "edited_channel_post",
        "inline_query",
        "chosen_inline_result",
        "callback_query",
        "shipping_query",
        "pre_checkout_query",
        "poll",
        "poll_answer",
    )

    update_id: Optional[int] = None
    message: Optional["Message"] = None
    edited_message: Optional["Message"] = None
    channel_post: Optional["Message"] = None
    edited_channel_post: Optional["Message"] = None
    inline_query: Optional["InlineQuery"] = None
    chosen_inline_result: Optional["ChosenInlineResult"] = None
    callback_query: Optional["CallbackQuery"] = None
    shipping_query: Optional["ShippingQuery"] = None
    pre_checkout_query: Optional["PreCheckoutQuery"] = None
    poll: Optional["Poll"] = None
    poll_answer: Optional["PollAnswer"] = None

    def detect_type(self) -> Optional[str]:
        """Return which payload field this update carries, e.g. ``"callback_query"``."""
        detected = None
        for key in self.keys():
            if key in self.UPDATE_TYPES:
                detected = key
        return detected

    def is_type(self, type_: str) -> bool:
        if self.has(type_.lower()):
            return True
        return self.detect_type() == type_

    @property
    def related_message(self) -> Optional["Message"]:
        """The message this update is about, including a callback's source message."""
        for candidate in (self.message, self.edited_message, self.channel_post, self.edited_channel_post):
            if isinstance(candidate, Message):
                return candidate
        if isinstance(self.callback_query, CallbackQuery) and isinstance(self.callback_query.message, Message):
            return self.callback_query.message
        return None

    @property
    def chat(self) -> Optional["Chat"]:
        message = self.related_message
        if message is not None and isinstance(message.chat, Chat):
            return message.chat
        return None

    @property
    def from_user(self) -> Optional["User"]:
        """The user that triggered the update, whatever its kind."""
        for name in (
            "message",
            "edited_message",
            "channel_post",
            "edited_channel_post",
            "inline_query",
            "chosen_inline_result",
            "callback_query",
            "shipping_query",
            "pre_checkout_query",
        ):
            payload = getattr(self, name)
            if isinstance(payload, BaseObject):
                sender = payload.get("from")
                return sender if isinstance(sender, User) else None
        return None


# ── Registry ─────────────────────────────────────────────────────────────────

# Types that ``TelegramBotClient.call("get<Name>")`` may hydrate a result into.
OBJECT_TYPES: Dict[str, type] = {
    cls.__name__: cls
    for cls in (
        User,
        Chat,
        ChatPhoto,
        ChatPermissions,
        ChatLocation,
        ChatMember,
        BotCommand,
        ResponseParameters,
        PhotoSize,
        Animation,
        Audio,
        Document,
        Video,
        VideoNote,
        Voice,
        File,
        UserProfilePhotos,
        MaskPosition,
        Sticker,
        StickerSet,
        MessageEntity,
        MessageId,
        Contact,
        Dice,
        Location,
        Venue,
        PollOption,
        PollAnswer,
        Poll,
        Game,
        GameHighScore,
        Invoice,
        ShippingAddress,
        OrderInfo,
        SuccessfulPayment,
        ShippingQuery,
        PreCheckoutQuery,
        Message,
        CallbackQuery,
        InlineQuery,
        ChosenInlineResult,
        WebhookInfo,
        Update,
    )
}

ReplyMarkup = Union[InlineKeyboardMarkup, ReplyKeyboardMarkup, ReplyKeyboardRemove, ForceReply, Dict[str, Any], str]


def _rebuild_all(root: type) -> None:
    for sub in root.__subclasses__():
        sub.model_rebuild()
        _rebuild_all(sub)


_rebuild_all(BaseObject)
