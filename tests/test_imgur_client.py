"""Tests for the Imgur upload client."""

import asyncio
import json

import httpx
import pytest

from shotline.errors import SourceReadError, UploadHTTPError, UploadParseError
from shotline.upload import ImgurUploader
from shotline.upload.imgur_client import _ProgressBody


class RecordingListener:
    def __init__(self) -> None:
        self.total = None
        self.progress = []

    def on_started(self, total: int) -> None:
        self.total = total

    def on_progress(self, sent: int, total: int) -> None:
        self.progress.append((sent, total))


def make_uploader(handler, chunk_size: int = 64) -> ImgurUploader:
    return ImgurUploader(
        client_id="client-123",
        base_url="https://api.example/3/",
        chunk_size=chunk_size,
        transport=httpx.MockTransport(handler),
    )


def test_upload_posts_multipart_png(image_path) -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, json={"data": {"link": "https://x/y.png", "id": "y"}})

    listener = RecordingListener()
    result = asyncio.run(make_uploader(handler).upload(image_path, listener))

    request = seen["request"]
    assert request.method == "POST"
    assert str(request.url) == "https://api.example/3/image"
    assert request.headers["Authorization"] == "Client-ID client-123"
    assert request.headers["Content-Type"].startswith("multipart/form-data; boundary=")
    body = request.content
    assert b'name="image"; filename="image.png"' in body
    assert b"Content-Type: image/png" in body
    assert image_path.read_bytes() in body
    assert listener.total == len(body)
    assert result.link == "https://x/y.png"
    assert result.data["id"] == "y"


def test_upload_reports_progress_in_chunks(image_path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": {"link": "https://x/y.png"}})

    listener = RecordingListener()
    asyncio.run(make_uploader(handler, chunk_size=16).upload(image_path, listener))

    sent_values = [sent for sent, _ in listener.progress]
    assert len(sent_values) > 1
    assert sent_values == sorted(sent_values)
    assert all(total == listener.total for _, total in listener.progress)
    assert sent_values[-1] == listener.total


def test_progress_counts_only_chunks_taken_by_the_transport() -> None:
    reports = []
    body = _ProgressBody(b"x" * 40, 16, lambda sent, total: reports.append((sent, total)))

    async def scenario() -> None:
        chunks = body.__aiter__()
        assert len(await chunks.__anext__()) == 16
        assert reports == []
        await chunks.__anext__()
        assert reports == [(16, 40)]
        body.close()
        await chunks.__anext__()
        await chunks.aclose()

    asyncio.run(scenario())

    assert reports == [(16, 40)]


def test_error_message_is_parsed_from_body(image_path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"data": {"error": "rate limited"}})

    with pytest.raises(UploadHTTPError) as excinfo:
        asyncio.run(make_uploader(handler).upload(image_path, RecordingListener()))

    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "rate limited"
    assert str(excinfo.value) == "HTTP 400 - rate limited"


def test_structured_error_message(image_path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        payload = {"data": {"error": {"code": 1003, "message": "File type invalid"}}}
        return httpx.Response(400, json=payload)

    with pytest.raises(UploadHTTPError) as excinfo:
        asyncio.run(make_uploader(handler).upload(image_path, RecordingListener()))

    assert excinfo.value.message == "File type invalid"


def test_unparseable_error_body_falls_back_to_raw_text(image_path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="oops")

    with pytest.raises(UploadHTTPError) as excinfo:
        asyncio.run(make_uploader(handler).upload(image_path, RecordingListener()))

    assert excinfo.value.status_code == 500
    assert excinfo.value.message == "oops"
    assert excinfo.value.body == "oops"


def test_malformed_success_body_is_a_parse_error(image_path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>not json</html>")

    with pytest.raises(UploadParseError):
        asyncio.run(make_uploader(handler).upload(image_path, RecordingListener()))


def test_success_body_without_data_is_a_parse_error(image_path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=json.dumps({"data": ["x"]}).encode())

    with pytest.raises(UploadParseError):
        asyncio.run(make_uploader(handler).upload(image_path, RecordingListener()))


def test_missing_source_is_not_uploaded(tmp_path) -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"data": {}})

    listener = RecordingListener()
    with pytest.raises(SourceReadError):
        asyncio.run(make_uploader(handler).upload(tmp_path / "missing.png", listener))

    assert calls == []
    assert listener.total is None


def test_transport_error_is_classified(image_path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UploadHTTPError) as excinfo:
        asyncio.run(make_uploader(handler).upload(image_path, RecordingListener()))

    assert excinfo.value.status_code == 0
    assert "connection refused" in excinfo.value.message
