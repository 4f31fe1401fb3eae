"""Image-edit panel API models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SubmitEditRequest(BaseModel):
    """What the client sends to POST /api/image-edit/submit."""

    model_config = {"extra": "forbid"}

    prompt: str = Field(default="", max_length=2000)


class ImageEditState(BaseModel):
    """Panel state as seen by the client."""

    has_image: bool
    image_filename: str | None = None
    image: str | None = None  # data URL preview of the selected image
    prompt: str
    loading: bool
    error: str | None = None
    result: str | None = None  # data URL of the edited image
    example_prompts: list[str]
