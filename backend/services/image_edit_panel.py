"""
Image-edit panel: a standalone tool next to the techpack editor.

Holds one selected image, a prompt, and the last edited result. Nothing
here touches the techpack document.
"""

from __future__ import annotations

import logging
from typing import Protocol

from backend.services.ai_provider import EditedImage, SourceImage

logger = logging.getLogger(__name__)

MISSING_INPUT_MESSAGE = "Please upload an image and enter a prompt."
EDIT_FAILED_MESSAGE = "Failed to edit image. Please try again."
RESULT_FILENAME = "edited-image.png"

EXAMPLE_PROMPTS = (
    "Add a retro filter",
    "Make the background blurry",
    "Change the color to blue",
    "Add sunglasses to the person",
)


class ImageEditor(Protocol):
    async def edit_image(self, image: SourceImage, prompt: str) -> EditedImage: ...


class ImageEditInProgressError(Exception):
    """Raised when a submit arrives while a previous one is still running."""


class ImageEditPanel:
    """State and submission flow of the image-edit panel."""

    def __init__(self, editor: ImageEditor) -> None:
        self.editor = editor
        self.image: SourceImage | None = None
        self.prompt = ""
        self.result: EditedImage | None = None
        self.loading = False
        self.error: str | None = None

    def select_image(self, image: SourceImage) -> None:
        """Replace the selected image; the previous result and error go away."""
        self.image = image
        self.result = None
        self.error = None

    def set_prompt(self, text: str) -> None:
        self.prompt = text

    async def submit(self, prompt: str | None = None) -> None:
        """
        Send the selected image and prompt to the editor.

        `prompt` replaces the current prompt, but only once the submit is
        accepted; a refused submit leaves the panel untouched.
        Missing input sets the precondition message without calling out.
        Editor failures are logged and replaced by a generic message.
        """
        if self.loading:
            raise ImageEditInProgressError("an image edit is already running")

        if prompt is not None:
            self.set_prompt(prompt)

        if self.image is None or not self.prompt.strip():
            self.error = MISSING_INPUT_MESSAGE
            return

        self.result = None
        self.error = None
        self.loading = True
        try:
            self.result = await self.editor.edit_image(self.image, self.prompt)
            logger.info("image_edit: edit completed (%d bytes)", len(self.result.data))
        except Exception:
            logger.exception("image_edit: edit failed")
            self.error = EDIT_FAILED_MESSAGE
        finally:
            self.loading = False

    @property
    def result_data_url(self) -> str | None:
        return self.result.to_data_url() if self.result else None

    def download(self) -> tuple[str, bytes]:
        if self.result is None:
            raise LookupError("no edited image to download")
        return RESULT_FILENAME, self.result.data

    def state(self) -> dict:
        """Snapshot for the API."""
        return {
            "has_image": self.image is not None,
            "image_filename": self.image.filename if self.image else None,
            "image": self.image.to_data_url() if self.image else None,
            "prompt": self.prompt,
            "loading": self.loading,
            "error": self.error,
            "result": self.result_data_url,
            "example_prompts": list(EXAMPLE_PROMPTS),
        }
