from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

import msgspec

from ..logging import get_logger
from .api_models import Message, Update
from .types import TelegramEvent, UpdateKind

logger = get_logger(__name__)
T = TypeVar("T")

__all__ = [
    "MEMBERSHIP_FIELDS",
    "SERVICE_EVENT_FIELDS",
    "attachment_reference",
    "classify_message",
    "classify_update",
    "coerce_payload",
    "decode_update",
    "entity_id",
    "matching_event",
    "parse_message",
]

# Service fields reported as events, in lookup order.
SERVICE_EVENT_FIELDS = (
    "new_chat_title",
    "new_chat_photo",
    "group_chat_created",
    "supergroup_chat_created",
    "channel_chat_created",
)

MEMBERSHIP_FIELDS = ("new_chat_members", "left_chat_member")


def decode_update(body: bytes | str | Mapping[str, Any] | None) -> dict[str, Any]:
    """Decode a webhook body into a plain mapping.

    Bodies that are empty, not JSON, or not a JSON object decode to ``{}``.
    """
    if body is None:
        return {}
    if isinstance(body, Mapping):
        return dict(body)
    if not body:
        return {}
    try:
        decoded = msgspec.json.decode(body)
    except msgspec.DecodeError as exc:
        logger.debug("telegram.update.undecodable", error=str(exc))
        return {}
    if not isinstance(decoded, dict):
        logger.debug("telegram.update.not_an_object", kind=type(decoded).__name__)
        return {}
    return decoded


def coerce_payload(payload: Any | None, kind: type[T]) -> T | None:
    if payload is None:
        return None
    if isinstance(payload, kind):
        return payload
    if isinstance(payload, dict):
        try:
            return msgspec.convert(payload, type=kind, strict=False)
        except msgspec.ValidationError:
            return None
    return None


def parse_message(raw: Mapping[str, Any]) -> Message | None:
    update = coerce_payload(dict(raw), Update)
    if update is None:
        return None
    return coerce_payload(update.message, Message)


def entity_id(value: Any) -> int | str | None:
    """Return the ``id`` of a ``from``/``chat`` object, if it has a usable one."""
    if not isinstance(value, dict):
        return None
    ident = value.get("id")
    if isinstance(ident, bool) or not isinstance(ident, (int, str)):
        return None
    return ident


def _file_reference(value: Any) -> dict[str, Any] | None:
    if not isinstance(value, dict):
        return None
    file_id = value.get("file_id")
    if not isinstance(file_id, str) or not file_id:
        return None
    return value


def _is_coordinate(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _has_location(value: Any) -> bool:
    return (
        isinstance(value, dict)
        and _is_coordinate(value.get("latitude"))
        and _is_coordinate(value.get("longitude"))
    )


def _is_set(value: Any) -> bool:
    return value is not None and value is not False and value != "" and value != []


def classify_message(msg: Message | None) -> UpdateKind:
    if msg is None:
        return UpdateKind.UNKNOWN
    if _file_reference(msg.audio) is not None:
        return UpdateKind.AUDIO
    if _file_reference(msg.voice) is not None:
        return UpdateKind.VOICE
    if _file_reference(msg.document) is not None:
        return UpdateKind.DOCUMENT
    if _file_reference(msg.video) is not None:
        return UpdateKind.VIDEO
    if isinstance(msg.photo, list) and any(
        _file_reference(item) is not None for item in msg.photo
    ):
        return UpdateKind.PHOTO
    if _has_location(msg.location):
        return UpdateKind.LOCATION
    if any(_is_set(getattr(msg, name)) for name in MEMBERSHIP_FIELDS):
        return UpdateKind.MEMBERSHIP_CHANGE
    if matching_event(msg) is not None:
        return UpdateKind.SERVICE
    if isinstance(msg.text, str):
        return UpdateKind.TEXT
    if msg.new_chat_member is not None:
        return UpdateKind.MEMBERSHIP_CHANGE
    return UpdateKind.UNKNOWN


def classify_update(raw: Mapping[str, Any]) -> UpdateKind:
    return classify_message(parse_message(raw))


def matching_event(msg: Message | None) -> TelegramEvent | None:
    """Return the first service event on ``msg``.

    Membership changes are not events for this driver.
    """
    if msg is None:
        return None
    for name in SERVICE_EVENT_FIELDS:
        value = getattr(msg, name)
        if _is_set(value):
            return TelegramEvent(name=name, payload=value)
    return None


def attachment_reference(
    raw: Mapping[str, Any], kind: UpdateKind
) -> dict[str, Any] | None:
    """Return the raw attachment mapping for ``kind`` exactly as received."""
    message = raw.get("message")
    if not isinstance(message, dict):
        return None
    return _file_reference(message.get(kind.value))
