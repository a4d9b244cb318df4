from __future__ import annotations

from typing import Any

import msgspec

__all__ = [
    "Keyboard",
    "KeyboardButton",
    "build_reply_payload",
]


class KeyboardButton:
    def __init__(self, text: str) -> None:
        self._fields: dict[str, Any] = {"text": text}

    @classmethod
    def create(cls, text: str) -> KeyboardButton:
        return cls(text)

    def url(self, url: str) -> KeyboardButton:
        self._fields["url"] = url
        return self

    def callback_data(self, data: str) -> KeyboardButton:
        self._fields["callback_data"] = data
        return self

    def request_contact(self, active: bool = True) -> KeyboardButton:
        self._fields["request_contact"] = active
        return self

    def request_location(self, active: bool = True) -> KeyboardButton:
        self._fields["request_location"] = active
        return self

    def switch_inline_query(self, query: str = "") -> KeyboardButton:
        self._fields["switch_inline_query"] = query
        return self

    def switch_inline_query_current_chat(self, query: str = "") -> KeyboardButton:
        self._fields["switch_inline_query_current_chat"] = query
        return self

    def to_dict(self) -> dict[str, Any]:
        # Inline query switches are meaningful even when empty.
        return {
            key: value
            for key, value in self._fields.items()
            if value or key.startswith("switch_inline_query")
        }

    def __repr__(self) -> str:
        return f"KeyboardButton({self._fields!r})"


class Keyboard:
    """Rows of buttons rendered into Telegram's ``reply_markup`` field."""

    TYPE_INLINE = "inline_keyboard"
    TYPE_KEYBOARD = "keyboard"

    def __init__(self, type: str = TYPE_INLINE) -> None:
        self._type = type
        self._rows: list[list[KeyboardButton]] = []
        self._one_time_keyboard = False
        self._resize_keyboard = False

    @classmethod
    def create(cls, type: str = TYPE_INLINE) -> Keyboard:
        return cls(type)

    def type(self, type: str) -> Keyboard:
        self._type = type
        return self

    def one_time_keyboard(self, active: bool = True) -> Keyboard:
        self._one_time_keyboard = active
        return self

    def resize_keyboard(self, active: bool = True) -> Keyboard:
        self._resize_keyboard = active
        return self

    def add_row(self, *buttons: KeyboardButton) -> Keyboard:
        self._rows.append(list(buttons))
        return self

    @property
    def rows(self) -> list[list[KeyboardButton]]:
        return [list(row) for row in self._rows]

    def markup(self) -> dict[str, Any]:
        markup: dict[str, Any] = {
            self._type: [[button.to_dict() for button in row] for row in self._rows]
        }
        if self._one_time_keyboard:
            markup["one_time_keyboard"] = True
        if self._resize_keyboard:
            markup["resize_keyboard"] = True
        return markup

    def to_dict(self) -> dict[str, str]:
        return {"reply_markup": msgspec.json.encode(self.markup()).decode()}


def build_reply_payload(
    chat_id: int | str,
    text: str,
    keyboard: Keyboard | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build ``sendMessage`` parameters, merging in the keyboard markup."""
    params: dict[str, Any] = {"chat_id": chat_id, "text": text}
    params.update({key: value for key, value in extra.items() if value is not None})
    if keyboard is not None:
        params.update(keyboard.to_dict())
    return params
