# =============================================================================
# app/routers/shops.py - Shop Endpoints
# =============================================================================
# CRUD for the shops beans are bought from. Listed in creation order.
# =============================================================================

from typing import Annotated, Any

from fastapi import APIRouter, Body, Path, Response, status

from app.dependencies import ShopServiceDep
from core.models.master_data import ShopResponse
from core.validation import validate_shop_create, validate_shop_update

router = APIRouter()


@router.get("", response_model=list[ShopResponse])
def list_shops(service: ShopServiceDep):
    return service.list()


@router.post("", response_model=ShopResponse, status_code=status.HTTP_201_CREATED)
def create_shop(
    service: ShopServiceDep,
    payload: Annotated[Any, Body(examples=[{"name": "Glitch Coffee", "address": "Tokyo"}])],
):
    return service.create(validate_shop_create(payload))


@router.get("/{shop_id}", response_model=ShopResponse)
def get_shop(
    shop_id: Annotated[int, Path(description="Shop ID")],
    service: ShopServiceDep,
):
    return service.get(shop_id)


@router.put("/{shop_id}", response_model=ShopResponse)
def update_shop(
    shop_id: Annotated[int, Path(description="Shop ID")],
    service: ShopServiceDep,
    payload: Annotated[Any, Body()],
):
    return service.update(shop_id, validate_shop_update(payload))


@router.delete("/{shop_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_shop(
    shop_id: Annotated[int, Path(description="Shop ID")],
    service: ShopServiceDep,
):
    service.delete(shop_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
