# =============================================================================
# app/routers/drippers.py - Dripper Endpoints
# =============================================================================
# CRUD for drippers. size is one of SIZE_01..SIZE_04 or OTHER. Listed in
# creation order with the number of tasting entries that used each one.
# =============================================================================

from typing import Annotated, Any

from fastapi import APIRouter, Body, Path, Response, status

from app.dependencies import DripperServiceDep
from core.models.master_data import DripperResponse
from core.validation import validate_dripper_create, validate_dripper_update

router = APIRouter()


@router.get("", response_model=list[DripperResponse])
def list_drippers(service: DripperServiceDep):
    return service.list()


@router.post("", response_model=DripperResponse, status_code=status.HTTP_201_CREATED)
def create_dripper(
    service: DripperServiceDep,
    payload: Annotated[Any, Body(examples=[{
        "name": "V60",
        "manufacturer": "Hario",
        "size": "SIZE_02",
        "imagePath": "/images/drippers/3f2a.png",
    }])],
):
    """
    Create a dripper.

    imagePath is the value returned by POST /api/upload with category
    "drippers".
    """
    return service.create(validate_dripper_create(payload))


@router.get("/{dripper_id}", response_model=DripperResponse)
def get_dripper(
    dripper_id: Annotated[int, Path(description="Dripper ID")],
    service: DripperServiceDep,
):
    return service.get(dripper_id)


@router.put("/{dripper_id}", response_model=DripperResponse)
def update_dripper(
    dripper_id: Annotated[int, Path(description="Dripper ID")],
    service: DripperServiceDep,
    payload: Annotated[Any, Body()],
):
    return service.update(dripper_id, validate_dripper_update(payload))


@router.delete("/{dripper_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_dripper(
    dripper_id: Annotated[int, Path(description="Dripper ID")],
    service: DripperServiceDep,
):
    """
    Delete a dripper.

    The client asks the user to confirm first. The dripper's image file is
    kept, and tasting entries that used it keep their other references.
    """
    service.delete(dripper_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
