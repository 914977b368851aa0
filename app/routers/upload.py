# =============================================================================
# app/routers/upload.py - Image Upload Endpoints
# =============================================================================
# POST stores a photo for a master-data record and returns the imagePath to
# save on it. DELETE removes a stored photo by that imagePath.
# =============================================================================

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, File, Form, UploadFile, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.dependencies import ImageStoreDep
from core.services.image_service import VALID_CATEGORIES

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class UploadResponse(BaseModel):
    """Response when an image is stored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    image_path: str = Field(..., examples=["/images/beans/0f8c2e9b4a7d4c1e9f3b2a1d5e6c7b8a.png"])
    file_name: str = Field(..., examples=["0f8c2e9b4a7d4c1e9f3b2a1d5e6c7b8a.png"])


class DeleteResponse(BaseModel):
    success: bool = True


# =============================================================================
# Endpoints
# =============================================================================

@router.post("", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_image(
    store: ImageStoreDep,
    file: Annotated[UploadFile | None, File(description="Image file (jpeg, png, webp, gif)")] = None,
    category: Annotated[str | None, Form(description=f"One of: {', '.join(VALID_CATEGORIES)}")] = None,
):
    """
    Upload an image.

    This endpoint:
    1. Validates category, content type (jpeg/png/webp/gif) and size (5MB)
    2. Writes the file as <category>/<uuid><ext> under the upload root
    3. Returns the imagePath to store on the owning record
    """
    content = await file.read() if file is not None else b""
    content_type = file.content_type if file is not None else None

    logger.info(f"Processing image upload: category={category} type={content_type} size={len(content)}")

    stored = store.ingest(content, content_type, category)

    return UploadResponse(image_path=stored.image_path, file_name=stored.file_name)


@router.delete("", response_model=DeleteResponse)
def delete_image(
    store: ImageStoreDep,
    payload: Annotated[Any, Body(examples=[{"imagePath": "/images/beans/0f8c.png"}])],
):
    """Delete an uploaded image by its imagePath."""
    image_path = payload.get("imagePath") if isinstance(payload, dict) else None
    store.remove(image_path)
    return DeleteResponse()
