# =============================================================================
# app/routers/bean_masters.py - Bean Master Endpoints
# =============================================================================
# CRUD for bean varieties. roastLevel and process are closed value sets;
# originId must point at an existing origin. A bean used by tasting entries
# cannot be deleted.
# =============================================================================

from typing import Annotated, Any

from fastapi import APIRouter, Body, Path, Response, status

from app.dependencies import BeanMasterServiceDep
from core.models.master_data import BeanMasterResponse
from core.validation import validate_bean_master_create, validate_bean_master_update

router = APIRouter()


@router.get("", response_model=list[BeanMasterResponse])
def list_bean_masters(service: BeanMasterServiceDep):
    """List all bean masters, alphabetically, with usage counts."""
    return service.list()


@router.post("", response_model=BeanMasterResponse, status_code=status.HTTP_201_CREATED)
def create_bean_master(
    service: BeanMasterServiceDep,
    payload: Annotated[Any, Body(examples=[{
        "name": "Yirgacheffe G1",
        "origin": "Ethiopia",
        "roastLevel": "LIGHT",
        "process": "WASHED",
    }])],
):
    """Create a bean master."""
    return service.create(validate_bean_master_create(payload))


@router.get("/{bean_master_id}", response_model=BeanMasterResponse)
def get_bean_master(
    bean_master_id: Annotated[int, Path(description="Bean master ID")],
    service: BeanMasterServiceDep,
):
    return service.get(bean_master_id)


@router.put("/{bean_master_id}", response_model=BeanMasterResponse)
def update_bean_master(
    bean_master_id: Annotated[int, Path(description="Bean master ID")],
    service: BeanMasterServiceDep,
    payload: Annotated[Any, Body()],
):
    return service.update(bean_master_id, validate_bean_master_update(payload))


@router.delete("/{bean_master_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_bean_master(
    bean_master_id: Annotated[int, Path(description="Bean master ID")],
    service: BeanMasterServiceDep,
):
    """Delete a bean master. Refused with 400 IN_USE while tasting entries use it."""
    service.delete(bean_master_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
