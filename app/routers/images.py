# =============================================================================
# app/routers/images.py - Image Delivery Endpoint
# =============================================================================
# Serves uploaded images. Any path containing ".." is rejected with 400
# before the upload directory is touched.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Path, Response

from app.dependencies import ImageStoreDep
from core.services.image_service import CACHE_CONTROL

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/{image_path:path}",
    response_class=Response,
    responses={
        200: {"content": {"image/*": {}}, "description": "Image bytes"},
        400: {"description": "Path traversal attempt"},
        404: {"description": "No such image"},
    },
)
def get_image(
    image_path: Annotated[str, Path(description="Path below the upload root, e.g. beans/abc.png")],
    store: ImageStoreDep,
):
    """
    Return an uploaded image.

    File names are unique once written, so responses are cacheable for a
    year and marked immutable.
    """
    image = store.serve(image_path)
    return Response(
        content=image.content,
        media_type=image.media_type,
        headers={"Cache-Control": CACHE_CONTROL},
    )
