from __future__ import annotations

from typing import Any

import httpx
import msgspec

from ..logging import get_logger
from ..messages import FileResolution, FileResolutionError, ResolvedFile
from .api_models import File

logger = get_logger(__name__)

__all__ = [
    "INVALID_RESPONSE_DESCRIPTION",
    "TelegramFileResolver",
]

INVALID_RESPONSE_DESCRIPTION = "Telegram getFile returned an invalid response"


def _description(payload: Any, default: str) -> str:
    if isinstance(payload, dict):
        description = payload.get("description")
        if isinstance(description, str) and description:
            return description
    return default


def _error_code(payload: Any) -> int | None:
    if isinstance(payload, dict):
        code = payload.get("error_code")
        if isinstance(code, int) and not isinstance(code, bool):
            return code
    return None


class TelegramFileResolver:
    """Exchanges a ``file_id`` for a downloadable file URL via ``getFile``.

    Every failure mode is returned as a :class:`FileResolutionError`; nothing
    here raises for a rejected or broken lookup.
    """

    def __init__(self, client: httpx.Client, *, token: str, api_base: str) -> None:
        self._client = client
        self._token = token
        self._api_base = api_base.rstrip("/")

    @property
    def get_file_url(self) -> str:
        return f"{self._api_base}/bot{self._token}/getFile"

    def file_url(self, file_path: str) -> str:
        return f"{self._api_base}/file/bot{self._token}/{file_path}"

    def resolve(self, file_id: str) -> FileResolution:
        url = self.get_file_url
        logger.debug("telegram.get_file.request", url=url, file_id=file_id)
        try:
            resp = self._client.get(url, params={"file_id": file_id})
        except httpx.HTTPError as e:
            logger.error(
                "telegram.get_file.network_error",
                url=url,
                error=str(e),
                error_type=e.__class__.__name__,
            )
            return FileResolutionError(description=str(e) or e.__class__.__name__)

        try:
            payload = msgspec.json.decode(resp.content)
        except msgspec.DecodeError as e:
            logger.error(
                "telegram.get_file.bad_response",
                url=url,
                status=resp.status_code,
                error=str(e),
                body=resp.text,
            )
            return FileResolutionError(
                description=INVALID_RESPONSE_DESCRIPTION, status=resp.status_code
            )

        if resp.status_code != 200 or (
            isinstance(payload, dict) and payload.get("ok") is False
        ):
            logger.error(
                "telegram.get_file.api_error",
                url=url,
                status=resp.status_code,
                payload=payload,
            )
            return FileResolutionError(
                description=_description(
                    payload, f"Telegram getFile failed with HTTP {resp.status_code}"
                ),
                status=resp.status_code,
                error_code=_error_code(payload),
            )

        result = payload.get("result") if isinstance(payload, dict) else None
        try:
            info = msgspec.convert(result, type=File)
        except msgspec.ValidationError as e:
            logger.error(
                "telegram.get_file.invalid_payload",
                url=url,
                error=str(e),
                payload=payload,
            )
            return FileResolutionError(
                description=_description(payload, INVALID_RESPONSE_DESCRIPTION),
                status=resp.status_code,
            )

        file_url = self.file_url(info.file_path)
        logger.debug("telegram.get_file.resolved", file_id=file_id, url=file_url)
        return ResolvedFile(url=file_url, file_path=info.file_path)
