"""Tests for multipart upload staging."""

import io

import pytest
from starlette.datastructures import Headers, UploadFile

from app.api.uploads import FileKind, stage_upload
from app.core.exceptions import InputValidationError


def upload(content: bytes, filename: str, content_type: str) -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


@pytest.mark.unit
class TestFileKind:
    def test_media_accepts_audio_and_video(self):
        assert "audio/mpeg" in FileKind.MEDIA.allowed_types
        assert "video/mp4" in FileKind.MEDIA.allowed_types
        assert "image/png" not in FileKind.MEDIA.allowed_types

    def test_size_caps(self, config):
        assert FileKind.IMAGE.max_size(config) == 1024
        assert FileKind.MEDIA.max_size(config) == 4096


@pytest.mark.unit
class TestStageUpload:
    @pytest.mark.asyncio
    async def test_missing_file(self, config):
        async with stage_upload(None, "image", FileKind.IMAGE, config) as staged:
            assert staged is None

    @pytest.mark.asyncio
    async def test_empty_filename_is_missing(self, config):
        file = upload(b"", "", "image/png")
        async with stage_upload(file, "image", FileKind.IMAGE, config) as staged:
            assert staged is None

    @pytest.mark.asyncio
    async def test_staged_then_removed(self, config):
        file = upload(b"\x89PNG-data", "Cover.PNG", "image/png")

        async with stage_upload(file, "image", FileKind.IMAGE, config) as staged:
            assert staged.path.exists()
            assert staged.path.read_bytes() == b"\x89PNG-data"
            assert staged.path.suffix == ".png"
            assert staged.filename == "Cover.PNG"
            assert staged.size == 9
            path = staged.path

        assert not path.exists()

    @pytest.mark.asyncio
    async def test_removed_when_block_fails(self, config):
        file = upload(b"ID3", "song.mp3", "audio/mpeg")

        with pytest.raises(RuntimeError):
            async with stage_upload(file, "songFile", FileKind.MEDIA, config) as staged:
                path = staged.path
                raise RuntimeError("upload failed")

        assert not path.exists()

    @pytest.mark.asyncio
    async def test_rejects_type(self, config):
        file = upload(b"%PDF", "notes.pdf", "application/pdf")

        with pytest.raises(InputValidationError) as exc_info:
            async with stage_upload(file, "image", FileKind.IMAGE, config):
                pass

        assert exc_info.value.message == (
            "File type application/pdf is not allowed! Only image files are allowed"
        )
        assert exc_info.value.field == "image"

    @pytest.mark.asyncio
    async def test_rejects_oversized(self, config, tmp_path):
        file = upload(b"\x00" * 5000, "clip.mp4", "video/mp4")

        with pytest.raises(InputValidationError, match="File too large"):
            async with stage_upload(file, "songFile", FileKind.MEDIA, config):
                pass

        assert list((tmp_path / "uploads").iterdir()) == []
