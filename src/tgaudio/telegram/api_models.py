from __future__ import annotations

from typing import Any

import msgspec

__all__ = [
    "File",
    "Message",
    "Update",
    "User",
]

ChatId = int | str


class User(msgspec.Struct, forbid_unknown_fields=False):
    id: ChatId
    is_bot: bool | None = None
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None


# Message fields stay untyped: one off-type field must not hide the rest of
# the update. Classification checks the shapes it needs itself.
class Message(msgspec.Struct, forbid_unknown_fields=False):
    message_id: Any = None
    from_: Any = msgspec.field(default=None, name="from")
    chat: Any = None
    date: Any = None
    text: Any = None
    caption: Any = None
    audio: Any = None
    voice: Any = None
    document: Any = None
    video: Any = None
    photo: Any = None
    location: Any = None
    new_chat_member: Any = None
    new_chat_members: Any = None
    left_chat_member: Any = None
    new_chat_title: Any = None
    new_chat_photo: Any = None
    group_chat_created: Any = None
    supergroup_chat_created: Any = None
    channel_chat_created: Any = None


class Update(msgspec.Struct, forbid_unknown_fields=False):
    update_id: Any = None
    message: Any = None


class File(msgspec.Struct, forbid_unknown_fields=False):
    file_path: str
    file_id: str | None = None
    file_size: int | None = None
