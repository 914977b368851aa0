# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# The Database and ImageStore are built once in the app lifespan and kept on
# app.state; these functions hand them (and the per-kind façades wrapping
# them) to route handlers. Tests replace them via app.dependency_overrides.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from core.services.image_service import ImageStore
from core.services.master_data_service import (
    BeanMasterService,
    DripperService,
    FilterService,
    OriginService,
    ShopService,
)
from lib.database import Database


def get_database(request: Request) -> Database:
    """Return the process-wide database handle."""
    return request.app.state.database


def get_image_store(request: Request) -> ImageStore:
    """Return the process-wide image store."""
    return request.app.state.image_store


# Type aliases for dependency injection
DatabaseDep = Annotated[Database, Depends(get_database)]
ImageStoreDep = Annotated[ImageStore, Depends(get_image_store)]


def get_origin_service(db: DatabaseDep) -> OriginService:
    return OriginService(db)


def get_bean_master_service(db: DatabaseDep) -> BeanMasterService:
    return BeanMasterService(db)


def get_shop_service(db: DatabaseDep) -> ShopService:
    return ShopService(db)


def get_dripper_service(db: DatabaseDep) -> DripperService:
    return DripperService(db)


def get_filter_service(db: DatabaseDep) -> FilterService:
    return FilterService(db)


OriginServiceDep = Annotated[OriginService, Depends(get_origin_service)]
BeanMasterServiceDep = Annotated[BeanMasterService, Depends(get_bean_master_service)]
ShopServiceDep = Annotated[ShopService, Depends(get_shop_service)]
DripperServiceDep = Annotated[DripperService, Depends(get_dripper_service)]
FilterServiceDep = Annotated[FilterService, Depends(get_filter_service)]
