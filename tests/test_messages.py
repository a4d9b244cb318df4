import pytest

from tgaudio.messages import (
    AudioAttachment,
    FileResolutionError,
    IncomingMessage,
    ResolvedFile,
)

PAYLOAD = {"mime_type": "audio/ogg", "file_id": "abc"}


def test_attachment_from_resolved_file() -> None:
    attachment = AudioAttachment.from_resolution(
        ResolvedFile(url="https://example.com/f", file_path="f"), PAYLOAD
    )
    assert attachment.url == "https://example.com/f"
    assert attachment.exception is None
    assert attachment.payload is PAYLOAD
    assert attachment.ok is True


def test_attachment_from_error() -> None:
    attachment = AudioAttachment.from_resolution(
        FileResolutionError(description="Bad Request: file is too big"), PAYLOAD
    )
    assert attachment.url is None
    assert attachment.exception == "Bad Request: file is too big"
    assert attachment.ok is False


def test_attachment_rejects_url_and_exception() -> None:
    with pytest.raises(ValueError):
        AudioAttachment(payload=PAYLOAD, url="https://example.com/f", exception="nope")


def test_message_audio_aliases_attachments() -> None:
    attachment = AudioAttachment(payload=PAYLOAD, url="https://example.com/f")
    message = IncomingMessage(
        text="x", sender=1, recipient=2, attachments=[attachment]
    )
    assert message.audio == [attachment]
