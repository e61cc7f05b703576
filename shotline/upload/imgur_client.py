"""Imgur API client."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import AsyncIterator, Callable

import httpx

from ..config import DEFAULT_IMGUR_BASE_URL
from ..errors import SourceReadError, UploadHTTPError, UploadParseError
from .base import UploadProgressListener
from .types import UploadResult

logger = logging.getLogger(__name__)

IMAGE_FIELD = "image"
IMAGE_FILENAME = "image.png"
IMAGE_MIMETYPE = "image/png"


class _ProgressBody:
    """Request body that reports cumulative bytes as the transport reads it."""

    def __init__(
        self,
        body: bytes,
        chunk_size: int,
        on_progress: Callable[[int, int], None],
    ) -> None:
        self._body = body
        self._chunk_size = chunk_size
        self._on_progress: Callable[[int, int], None] | None = on_progress

    @property
    def total(self) -> int:
        return len(self._body)

    async def __aiter__(self) -> AsyncIterator[bytes]:
        sent = 0
        for start in range(0, len(self._body), self._chunk_size):
            chunk = self._body[start:start + self._chunk_size]
            yield chunk
            sent += len(chunk)
            if self._on_progress is not None:
                self._on_progress(sent, self.total)

    def close(self) -> None:
        self._on_progress = None


class ImgurUploader:
    """Anonymous image upload to Imgur using a fixed client id."""

    def __init__(
        self,
        *,
        client_id: str,
        base_url: str = DEFAULT_IMGUR_BASE_URL,
        timeout: float = 60.0,
        chunk_size: int = 64 * 1024,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.client_id = client_id
        self.base_url = base_url
        self.timeout = timeout
        self.chunk_size = chunk_size
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url.rstrip('/')}/image"

    async def upload(self, source: Path, listener: UploadProgressListener) -> UploadResult:
        try:
            contents = await asyncio.to_thread(Path(source).read_bytes)
        except OSError as exc:
            logger.warning("error loading file %s: %s", source, exc)
            raise SourceReadError(f"error loading file: {exc}") from exc

        prepared = self._build_request(contents)
        body = _ProgressBody(prepared.read(), self.chunk_size, listener.on_progress)
        listener.on_started(body.total)

        request = httpx.Request(
            "POST", prepared.url, headers=prepared.headers, content=body
        )
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.send(request)
        except httpx.HTTPError as exc:
            logger.warning("Imgur upload transport error: %s", exc)
            raise UploadHTTPError(0, str(exc) or type(exc).__name__) from exc
        finally:
            body.close()

        return _parse_response(response)

    def _build_request(self, contents: bytes) -> httpx.Request:
        return httpx.Request(
            "POST",
            self.endpoint,
            files={IMAGE_FIELD: (IMAGE_FILENAME, contents, IMAGE_MIMETYPE)},
            headers={"Authorization": f"Client-ID {self.client_id}"},
        )


def _parse_response(response: httpx.Response) -> UploadResult:
    raw_body = response.text
    if response.status_code == 200:
        try:
            data = response.json()["data"]
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning(
                "Imgur upload returned an unreadable body: status=%s data=%s",
                response.status_code,
                raw_body,
            )
            raise UploadParseError(f"failed to parse upload response: {raw_body}") from exc
        if not isinstance(data, dict):
            logger.warning(
                "Imgur upload returned an unexpected payload: status=%s data=%s",
                response.status_code,
                raw_body,
            )
            raise UploadParseError(f"failed to parse upload response: {raw_body}")
        link = data.get("link")
        return UploadResult(link=link if isinstance(link, str) else None, data=data)

    logger.warning(
        "Imgur upload failed: status=%s data=%s", response.status_code, raw_body
    )
    raise UploadHTTPError(response.status_code, _extract_error(response), raw_body)


def _extract_error(response: httpx.Response) -> str:
    try:
        error = response.json()["data"]["error"]
    except (ValueError, KeyError, TypeError) as exc:
        logger.debug("failed to parse error message %s data=%s", exc, response.text)
        return response.text
    if isinstance(error, dict):
        error = error.get("message", error)
    return str(error)
