"""AI provider abstraction for image editing (Gemini and OpenAI)."""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from io import BytesIO

import openai
from google import genai
from google.genai import types
from PIL import Image

from backend.config import settings

logger = logging.getLogger(__name__)


class ImageEditError(Exception):
    """The provider answered but returned no usable image."""


@dataclass(frozen=True)
class SourceImage:
    """An image picked by the user for editing."""

    data: bytes
    mime_type: str
    filename: str = "image.png"

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{base64.b64encode(self.data).decode('ascii')}"


@dataclass(frozen=True)
class EditedImage:
    """An image returned by the provider."""

    data: bytes
    mime_type: str = "image/png"

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{base64.b64encode(self.data).decode('ascii')}"


def to_png(data: bytes) -> bytes:
    """Re-encode provider output as PNG (providers may answer with JPEG or WebP)."""
    try:
        with Image.open(BytesIO(data)) as img:
            img.load()
            if img.format == "PNG":
                return data
            out = BytesIO()
            img.save(out, format="PNG")
            return out.getvalue()
    except OSError as e:
        raise ImageEditError(f"provider returned an unreadable image: {e}") from e


class AIProvider:
    """Unified interface for image-editing providers (Gemini, OpenAI)."""

    def __init__(self, provider: str | None = None) -> None:
        """Clients are created on first use so the app starts without keys."""
        self.provider = provider or settings.IMAGE_EDIT_PROVIDER
        self._gemini_client: genai.Client | None = None
        self._openai_client: openai.AsyncOpenAI | None = None

    @property
    def gemini_client(self) -> genai.Client:
        if self._gemini_client is None:
            self._gemini_client = genai.Client(api_key=settings.GEMINI_API_KEY)
        return self._gemini_client

    @property
    def openai_client(self) -> openai.AsyncOpenAI:
        if self._openai_client is None:
            self._openai_client = openai.AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
        return self._openai_client

    async def edit_image(self, image: SourceImage, prompt: str) -> EditedImage:
        """
        Edit `image` according to `prompt` with the configured provider.

        Raises:
            ImageEditError: If the provider returns no image
            ValueError: If the configured provider is unknown
        """
        if self.provider == "gemini":
            return await self.edit_image_gemini(image, prompt)
        if self.provider == "openai":
            return await self.edit_image_openai(image, prompt)
        raise ValueError(f"Unknown image edit provider: {self.provider}")

    async def edit_image_gemini(self, image: SourceImage, prompt: str) -> EditedImage:
        """
        Edit with Gemini: one request carrying the image and the instruction.

        Returns the first inline image part of the first candidate.
        """
        config = types.GenerateContentConfig(
            response_modalities=[types.Modality.TEXT, types.Modality.IMAGE],
        )
        response = await self.gemini_client.aio.models.generate_content(
            model=settings.GEMINI_IMAGE_MODEL,
            contents=[
                types.Part.from_bytes(data=image.data, mime_type=image.mime_type),
                prompt,
            ],
            config=config,
        )

        candidates = response.candidates or []
        parts = (candidates[0].content.parts or []) if candidates and candidates[0].content else []
        for part in parts:
            if part.inline_data and part.inline_data.data:
                logger.info("ai_provider: gemini returned %s", part.inline_data.mime_type)
                return EditedImage(data=to_png(part.inline_data.data))

        raise ImageEditError("Gemini response contained no image")

    async def edit_image_openai(self, image: SourceImage, prompt: str) -> EditedImage:
        """Edit with the OpenAI images API; the result comes back base64-encoded."""
        response = await self.openai_client.images.edit(
            model=settings.OPENAI_IMAGE_MODEL,
            image=(image.filename, image.data, image.mime_type),
            prompt=prompt,
        )

        if not response.data or not response.data[0].b64_json:
            raise ImageEditError("OpenAI response contained no image")

        logger.info("ai_provider: openai returned an image")
        return EditedImage(data=to_png(base64.b64decode(response.data[0].b64_json)))


# Singleton instance
ai_provider = AIProvider()
