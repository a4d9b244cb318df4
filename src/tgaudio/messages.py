"""Framework-facing message and attachment objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "AUDIO_PATTERN",
    "AudioAttachment",
    "FileResolution",
    "FileResolutionError",
    "IncomingMessage",
    "ResolvedFile",
]

# Display text for messages that carry an audio attachment instead of text.
AUDIO_PATTERN = "%%%_AUDIO_%%%"


@dataclass(frozen=True, slots=True)
class ResolvedFile:
    url: str
    file_path: str


@dataclass(frozen=True, slots=True)
class FileResolutionError:
    description: str
    status: int | None = None
    error_code: int | None = None


FileResolution = ResolvedFile | FileResolutionError


@dataclass(frozen=True, slots=True)
class AudioAttachment:
    payload: dict[str, Any]
    url: str | None = None
    exception: str | None = None

    def __post_init__(self) -> None:
        if self.url is not None and self.exception is not None:
            raise ValueError("attachment cannot carry both a url and an exception")

    @classmethod
    def from_resolution(
        cls, resolution: FileResolution, payload: dict[str, Any]
    ) -> AudioAttachment:
        match resolution:
            case ResolvedFile(url=url):
                return cls(payload=payload, url=url)
            case FileResolutionError(description=description):
                return cls(payload=payload, exception=description)
        raise TypeError(f"unexpected resolution {resolution!r}")

    @property
    def ok(self) -> bool:
        return self.url is not None


@dataclass(frozen=True, slots=True)
class IncomingMessage:
    text: str
    sender: int | str
    recipient: int | str
    payload: dict[str, Any] | None = None
    attachments: list[AudioAttachment] = field(default_factory=list)

    @property
    def audio(self) -> list[AudioAttachment]:
        return self.attachments
