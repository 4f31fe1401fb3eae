"""Share target for exported techpacks: Cloudflare R2 with public links."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Protocol

import aioboto3

from backend.config import Settings

logger = logging.getLogger(__name__)

SHAREABLE_CONTENT_TYPES = {"application/pdf"}


@dataclass(frozen=True)
class SharedFile:
    """A binary attachment handed to the share target."""

    name: str
    data: bytes
    content_type: str


class ShareTarget(Protocol):
    """Something that can take files and hand back a link to them."""

    def can_share_files(self, files: list[SharedFile]) -> bool: ...

    async def share(self, files: list[SharedFile], title: str, text: str) -> str: ...


class R2ShareTarget:
    """Uploads shared files to a public R2 bucket using the S3-compatible API."""

    def __init__(
        self,
        endpoint: str,
        access_key: str,
        secret_key: str,
        bucket: str,
        public_url: str,
        max_bytes: int,
    ) -> None:
        self.session = aioboto3.Session()
        self.endpoint = endpoint
        self.access_key = access_key
        self.secret_key = secret_key
        self.bucket = bucket
        self.public_url = public_url.rstrip("/")
        self.max_bytes = max_bytes

    def can_share_files(self, files: list[SharedFile]) -> bool:
        if not files:
            return False
        return all(f.content_type in SHAREABLE_CONTENT_TYPES and 0 < len(f.data) <= self.max_bytes for f in files)

    async def share(self, files: list[SharedFile], title: str, text: str) -> str:
        """
        Upload the files under one share prefix.

        Args:
            files: Attachments to share (the first one is what the link points at)
            title: Share title, stored as object metadata
            text: Share message, stored as object metadata

        Returns:
            Public URL of the first file
        """
        prefix = f"shares/{uuid.uuid4().hex}"
        keys: list[str] = []

        async with self.session.client(
            "s3",
            endpoint_url=self.endpoint,
            aws_access_key_id=self.access_key,
            aws_secret_access_key=self.secret_key,
        ) as s3:
            for f in files:
                key = f"{prefix}/{f.name}"
                await s3.put_object(
                    Bucket=self.bucket,
                    Key=key,
                    Body=f.data,
                    ContentType=f.content_type,
                    ContentDisposition=f'attachment; filename="{f.name}"',
                    Metadata={"title": title, "text": text},
                )
                keys.append(key)

        logger.info("share: uploaded %d file(s) to %s", len(keys), prefix)
        return f"{self.public_url}/{keys[0]}"


def detect_share_target(config: Settings) -> ShareTarget | None:
    """Return the share target when storage is configured, else None."""
    if not config.share_configured:
        logger.info("share: storage not configured, share action disabled")
        return None
    return R2ShareTarget(
        endpoint=config.R2_ENDPOINT,
        access_key=config.R2_ACCESS_KEY,
        secret_key=config.R2_SECRET_KEY,
        bucket=config.R2_SHARE_BUCKET,
        public_url=config.R2_PUBLIC_URL,
        max_bytes=config.SHARE_MAX_BYTES,
    )
