# =============================================================================
# app/routers/filters.py - Filter Endpoints
# =============================================================================
# CRUD for filters. type is PAPER, METAL or CLOTH; size shares the dripper
# size set. Listed in creation order with usage counts.
# =============================================================================

from typing import Annotated, Any

from fastapi import APIRouter, Body, Path, Response, status

from app.dependencies import FilterServiceDep
from core.models.master_data import FilterResponse
from core.validation import validate_filter_create, validate_filter_update

router = APIRouter()


@router.get("", response_model=list[FilterResponse])
def list_filters(service: FilterServiceDep):
    return service.list()


@router.post("", response_model=FilterResponse, status_code=status.HTTP_201_CREATED)
def create_filter(
    service: FilterServiceDep,
    payload: Annotated[Any, Body(examples=[{"name": "V60 Paper", "type": "PAPER"}])],
):
    return service.create(validate_filter_create(payload))


@router.get("/{filter_id}", response_model=FilterResponse)
def get_filter(
    filter_id: Annotated[int, Path(description="Filter ID")],
    service: FilterServiceDep,
):
    return service.get(filter_id)


@router.put("/{filter_id}", response_model=FilterResponse)
def update_filter(
    filter_id: Annotated[int, Path(description="Filter ID")],
    service: FilterServiceDep,
    payload: Annotated[Any, Body()],
):
    return service.update(filter_id, validate_filter_update(payload))


@router.delete("/{filter_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_filter(
    filter_id: Annotated[int, Path(description="Filter ID")],
    service: FilterServiceDep,
):
    service.delete(filter_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
