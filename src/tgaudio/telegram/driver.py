from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from ..config import TelegramDriverConfig
from ..logging import get_logger
from ..messages import AUDIO_PATTERN, AudioAttachment, IncomingMessage
from .api_models import Message, User
from .files import TelegramFileResolver
from .parsing import (
    attachment_reference,
    classify_message,
    coerce_payload,
    decode_update,
    entity_id,
    matching_event,
    parse_message,
)
from .types import TelegramEvent, TelegramUser, UpdateKind

logger = get_logger(__name__)

__all__ = ["TelegramAudioDriver"]

_AUDIO_KINDS = frozenset({UpdateKind.AUDIO, UpdateKind.VOICE})


class TelegramAudioDriver:
    """Receives Telegram updates that carry audio or voice attachments.

    A driver wraps a single inbound update. It is built per request and
    thrown away afterwards; the only state it keeps is the decoded update and
    the memoized message list. An owned HTTP client is only created once a
    file lookup is needed.
    """

    DRIVER_NAME = "TelegramAudio"

    def __init__(
        self,
        update: bytes | str | Mapping[str, Any] | None,
        config: TelegramDriverConfig | None = None,
        *,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._config = config or TelegramDriverConfig()
        self._update = decode_update(update)
        self._message: Message | None = parse_message(self._update)
        self._kind = classify_message(self._message)
        self._client = http_client
        self._owns_client = http_client is None
        self._messages: list[IncomingMessage] | None = None

    def __enter__(self) -> TelegramAudioDriver:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

    def _http(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self._config.timeout_s)
        return self._client

    def get_name(self) -> str:
        return self.DRIVER_NAME

    def is_configured(self) -> bool:
        return bool(self._config.bot_token)

    @property
    def update(self) -> dict[str, Any]:
        return self._update

    @property
    def kind(self) -> UpdateKind:
        return self._kind

    def matches_request(self) -> bool:
        return self._kind in _AUDIO_KINDS

    def matching_event(self) -> TelegramEvent | None:
        return matching_event(self._message)

    def has_matching_event(self) -> bool:
        return self.matching_event() is not None

    def get_user(self) -> TelegramUser | None:
        if self._message is None:
            return None
        sender = coerce_payload(self._message.from_, User)
        if sender is None:
            return None
        return TelegramUser(
            id=sender.id,
            first_name=sender.first_name,
            last_name=sender.last_name,
            username=sender.username,
        )

    def get_messages(self) -> list[IncomingMessage]:
        if self._messages is None:
            self._messages = self._load_messages()
        return self._messages

    def _load_messages(self) -> list[IncomingMessage]:
        msg = self._message
        if not self.matches_request() or msg is None:
            return []
        reference = attachment_reference(self._update, self._kind)
        if reference is None:
            return []
        resolver = TelegramFileResolver(
            self._http(),
            token=self._config.bot_token,
            api_base=self._config.api_base,
        )
        attachment = AudioAttachment.from_resolution(
            resolver.resolve(reference["file_id"]), reference
        )
        if not attachment.ok:
            logger.info(
                "telegram.audio.unresolved",
                kind=self._kind.value,
                error=attachment.exception,
            )
        sender = entity_id(msg.from_)
        recipient = entity_id(msg.chat)
        return [
            IncomingMessage(
                text=AUDIO_PATTERN,
                sender=sender if sender is not None else "",
                recipient=recipient if recipient is not None else "",
                payload=self._update["message"],
                attachments=[attachment],
            )
        ]
