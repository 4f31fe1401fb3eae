"""Upload validation and data-URL encoding for user images."""

import base64
from io import BytesIO

from PIL import Image, UnidentifiedImageError


class InvalidImageError(ValueError):
    """Upload is empty, too large, or not a decodable image."""


def sniff_image(data: bytes, max_bytes: int) -> str:
    """
    Validate uploaded bytes as an image.

    Args:
        data: Raw upload bytes
        max_bytes: Upper bound on the upload size

    Returns:
        MIME type derived from the decoded format (e.g. "image/png")

    Raises:
        InvalidImageError: If the data is empty, oversized, or not an image
    """
    if not data:
        raise InvalidImageError("empty upload")
    if len(data) > max_bytes:
        raise InvalidImageError(f"upload exceeds {max_bytes} bytes")

    try:
        with Image.open(BytesIO(data)) as img:
            img.verify()
            fmt = img.format
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise InvalidImageError("not a readable image") from e

    mime = Image.MIME.get(fmt or "")
    if not mime or not mime.startswith("image/"):
        raise InvalidImageError(f"unsupported image format: {fmt}")
    return mime


def to_data_url(data: bytes, mime_type: str) -> str:
    """Encode bytes as a `data:` URL so pages embed images without fetching."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"
