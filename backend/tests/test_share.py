"""Tests for the R2 share target and share detection."""

from unittest.mock import AsyncMock, MagicMock

from backend.config import Settings
from backend.services.share import R2ShareTarget, SharedFile, detect_share_target


def make_target(max_bytes: int = 1024) -> R2ShareTarget:
    return R2ShareTarget(
        endpoint="https://r2.example.com",
        access_key="key",
        secret_key="secret",
        bucket="techpack-shares",
        public_url="https://share.example.com/",
        max_bytes=max_bytes,
    )


def pdf_file(data: bytes = b"%PDF-1.4 test") -> SharedFile:
    return SharedFile(name="Techpack.pdf", data=data, content_type="application/pdf")


class TestCanShareFiles:
    def test_accepts_pdf(self):
        assert make_target().can_share_files([pdf_file()]) is True

    def test_rejects_nothing(self):
        assert make_target().can_share_files([]) is False

    def test_rejects_other_types(self):
        png = SharedFile(name="x.png", data=b"\x89PNG", content_type="image/png")
        assert make_target().can_share_files([png]) is False

    def test_rejects_oversized(self):
        assert make_target(max_bytes=4).can_share_files([pdf_file()]) is False


class TestShare:
    async def test_uploads_and_returns_public_url(self):
        target = make_target()
        s3 = AsyncMock()
        target.session = MagicMock()
        target.session.client.return_value.__aenter__.return_value = s3

        url = await target.share([pdf_file()], title="Fashion Techpack", text="hello")

        s3.put_object.assert_awaited_once()
        kwargs = s3.put_object.await_args.kwargs
        assert kwargs["Bucket"] == "techpack-shares"
        assert kwargs["Key"].startswith("shares/")
        assert kwargs["Key"].endswith("/Techpack.pdf")
        assert kwargs["ContentType"] == "application/pdf"
        assert kwargs["Metadata"] == {"title": "Fashion Techpack", "text": "hello"}
        assert url == f"https://share.example.com/{kwargs['Key']}"


class TestDetectShareTarget:
    def test_none_when_not_configured(self):
        config = Settings()
        config.R2_ENDPOINT = ""
        assert detect_share_target(config) is None

    def test_target_when_configured(self):
        config = Settings()
        config.R2_ENDPOINT = "https://r2.example.com"
        config.R2_ACCESS_KEY = "key"
        config.R2_SECRET_KEY = "secret"
        config.R2_PUBLIC_URL = "https://share.example.com"

        target = detect_share_target(config)

        assert isinstance(target, R2ShareTarget)
        assert target.public_url == "https://share.example.com"
