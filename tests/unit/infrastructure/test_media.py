"""Tests for the hosted media client."""

import hashlib

import httpx
import pytest

from app.core.exceptions import MediaUploadError
from app.infrastructure.http_client import HTTPClient
from app.infrastructure.media import MediaAsset, MediaClient, build_transformation


def make_client(handler, chunk_size: int = 6_000_000) -> MediaClient:
    http_client = HTTPClient(transport=httpx.MockTransport(handler))
    return MediaClient(
        http_client,
        cloud_name="seagulls",
        api_key="key",
        api_secret="secret",
        api_base="https://media.test/v1_1/",
        chunk_size=chunk_size,
    )


@pytest.mark.unit
class TestHelpers:
    def test_build_transformation(self):
        assert build_transformation({"width": 300, "crop": "scale"}) == "w_300,c_scale"
        assert build_transformation(None) is None

    def test_build_transformation_unknown_key(self):
        with pytest.raises(ValueError, match="Unsupported transformation option"):
            build_transformation({"rotate": 90})

    def test_as_media(self):
        asset = MediaAsset("id", "https://x", "image", width=32, height=32)
        assert asset.as_media() == {"public_id": "id", "url": "https://x", "resource_type": "image"}
        assert asset.as_media(with_dimensions=True)["width"] == 32

    def test_signature_skips_unsigned_and_empty(self):
        client = make_client(lambda request: httpx.Response(200))
        expected = hashlib.sha1(b"folder=news&timestamp=100secret").hexdigest()

        signature = client.sign(
            {"folder": "news", "timestamp": 100, "api_key": "key", "file": "x", "empty": ""}
        )

        assert signature == expected

    def test_audio_goes_to_video_endpoint(self):
        client = make_client(lambda request: httpx.Response(200))
        assert client.endpoint("audio", "upload") == "https://media.test/v1_1/seagulls/video/upload"
        assert client.endpoint("image", "destroy").endswith("/seagulls/image/destroy")


@pytest.mark.unit
class TestUpload:
    @pytest.mark.asyncio
    async def test_upload_returns_asset(self, tmp_path):
        path = tmp_path / "cover.png"
        path.write_bytes(b"png-bytes")
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = request.content
            return httpx.Response(
                200,
                json={
                    "public_id": "seagulls/news/abc",
                    "secure_url": "https://cdn.test/abc.png",
                    "url": "http://cdn.test/abc.png",
                    "width": 800,
                    "height": 600,
                },
            )

        client = make_client(handler)
        asset = await client.upload(
            path, folder="seagulls/news", transformation={"width": 800, "crop": "scale"}
        )

        assert asset.public_id == "seagulls/news/abc"
        assert asset.url == "https://cdn.test/abc.png"
        assert asset.width == 800
        assert seen["url"].endswith("/seagulls/image/upload")
        assert b"w_800,c_scale" in seen["body"]
        assert b"png-bytes" in seen["body"]

    @pytest.mark.asyncio
    async def test_large_file_sent_in_chunks(self, tmp_path):
        path = tmp_path / "song.mp3"
        path.write_bytes(b"a" * 12)
        ranges = []

        def handler(request: httpx.Request) -> httpx.Response:
            ranges.append(request.headers["Content-Range"])
            return httpx.Response(200, json={"public_id": "song", "secure_url": "https://s"})

        client = make_client(handler, chunk_size=5)
        asset = await client.upload(path, folder="tracks", resource_type="audio")

        assert ranges == ["bytes 0-4/12", "bytes 5-9/12", "bytes 10-11/12"]
        assert asset.resource_type == "audio"

    @pytest.mark.asyncio
    async def test_host_error_raises(self, tmp_path):
        path = tmp_path / "cover.png"
        path.write_bytes(b"x")

        client = make_client(
            lambda request: httpx.Response(400, json={"error": {"message": "Invalid image file"}})
        )

        with pytest.raises(MediaUploadError) as exc_info:
            await client.upload(path, folder="news")
        assert exc_info.value.message == "Invalid image file"
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_unreachable_host_raises(self, tmp_path):
        path = tmp_path / "cover.png"
        path.write_bytes(b"x")

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(MediaUploadError, match="unreachable"):
            await make_client(handler).upload(path, folder="news")


@pytest.mark.unit
class TestDestroy:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("result", ["ok", "not found"])
    async def test_destroy_accepts(self, result):
        client = make_client(lambda request: httpx.Response(200, json={"result": result}))
        await client.destroy("seagulls/news/abc")

    @pytest.mark.asyncio
    async def test_destroy_quietly_reports_failure(self):
        client = make_client(lambda request: httpx.Response(500, text="oops"))

        outcome = await client.destroy_quietly("seagulls/news/abc")

        assert outcome.ok is False
        assert outcome.error

    @pytest.mark.asyncio
    async def test_destroy_all_continues_after_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if b"broken" in request.content:
                return httpx.Response(200, json={"result": "error"})
            return httpx.Response(200, json={"result": "ok"})

        outcomes = await make_client(handler).destroy_all(
            [("broken-asset", "image"), ("kept-asset", "video")]
        )

        assert [o.ok for o in outcomes] == [False, True]
