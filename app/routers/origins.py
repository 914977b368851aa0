# =============================================================================
# app/routers/origins.py - Origin Master Endpoints
# =============================================================================
# CRUD for coffee origins. Names are unique: creating or renaming onto an
# existing name returns 400 DUPLICATE_NAME.
# =============================================================================

from typing import Annotated, Any

from fastapi import APIRouter, Body, Path, Response, status

from app.dependencies import OriginServiceDep
from core.models.master_data import OriginResponse
from core.validation import validate_origin_create, validate_origin_update

router = APIRouter()


@router.get("", response_model=list[OriginResponse])
def list_origins(service: OriginServiceDep):
    """List all origins, alphabetically."""
    return service.list()


@router.post("", response_model=OriginResponse, status_code=status.HTTP_201_CREATED)
def create_origin(
    service: OriginServiceDep,
    payload: Annotated[Any, Body(examples=[{"name": "Ethiopia", "notes": "Yirgacheffe region"}])],
):
    """
    Create an origin.

    The name is trimmed before the uniqueness check, so " Ethiopia " and
    "Ethiopia" are the same origin.
    """
    return service.create(validate_origin_create(payload))


@router.get("/{origin_id}", response_model=OriginResponse)
def get_origin(
    origin_id: Annotated[int, Path(description="Origin ID")],
    service: OriginServiceDep,
):
    return service.get(origin_id)


@router.put("/{origin_id}", response_model=OriginResponse)
def update_origin(
    origin_id: Annotated[int, Path(description="Origin ID")],
    service: OriginServiceDep,
    payload: Annotated[Any, Body()],
):
    """Update name and/or notes. Omitted fields are left unchanged."""
    return service.update(origin_id, validate_origin_update(payload))


@router.delete("/{origin_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_origin(
    origin_id: Annotated[int, Path(description="Origin ID")],
    service: OriginServiceDep,
):
    """Delete an origin. Bean masters pointing at it lose their originId."""
    service.delete(origin_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
