"""Telegram webhook driver and reply markup helpers."""

from .driver import TelegramAudioDriver
from .files import TelegramFileResolver
from .keyboard import Keyboard, KeyboardButton, build_reply_payload
from .parsing import classify_update, decode_update
from .types import TelegramEvent, TelegramUser, UpdateKind

__all__ = [
    "Keyboard",
    "KeyboardButton",
    "TelegramAudioDriver",
    "TelegramEvent",
    "TelegramFileResolver",
    "TelegramUser",
    "UpdateKind",
    "build_reply_payload",
    "classify_update",
    "decode_update",
]
