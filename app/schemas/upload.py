"""Request/response schemas for the image upload endpoints."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ImageKind = Literal["fabric", "project", "pattern"]


class UploadResponse(BaseModel):
    """Response after storing an uploaded image."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = "File uploaded successfully"
    filename: str = Field(..., description="Stored file name (uuid + extension for the media type)")
    original_name: str = Field(..., alias="originalName")
    size: int = Field(..., ge=0, description="Size in bytes")
    url: str = Field(..., description="Public URL of the stored image")


class DeleteFileRequest(BaseModel):
    filename: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1, max_length=32)
