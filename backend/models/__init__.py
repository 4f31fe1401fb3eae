"""
Pydantic models for Techpack Studio.

All API data shapes defined here. No imports from routes or services.
"""

from backend.models.export import ExportCapabilities, ShareResponse
from backend.models.image_edit import ImageEditState, SubmitEditRequest
from backend.models.techpack import (
    ActionRequest,
    ActionResponse,
    SetColorCodeRequest,
    SetFieldRequest,
    SetRowFieldRequest,
    SetRowSizeRequest,
    TechpackResponse,
    to_action,
)

__all__ = [
    # Techpack models
    "ActionRequest",
    "SetFieldRequest",
    "SetRowFieldRequest",
    "SetRowSizeRequest",
    "SetColorCodeRequest",
    "ActionResponse",
    "TechpackResponse",
    "to_action",
    # Export models
    "ExportCapabilities",
    "ShareResponse",
    # Image edit models
    "ImageEditState",
    "SubmitEditRequest",
]
