from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class UpdateKind(enum.Enum):
    TEXT = "text"
    AUDIO = "audio"
    VOICE = "voice"
    DOCUMENT = "document"
    PHOTO = "photo"
    VIDEO = "video"
    LOCATION = "location"
    MEMBERSHIP_CHANGE = "membership_change"
    SERVICE = "service"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class TelegramEvent:
    name: str
    payload: Any


@dataclass(frozen=True, slots=True)
class TelegramUser:
    id: int | str
    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None
