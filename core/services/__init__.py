# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .master_data_service import (
    BeanMasterService,
    DripperService,
    FilterService,
    MasterDataService,
    OriginService,
    ShopService,
)
from .image_service import ImageStore

__all__ = [
    "MasterDataService",
    "OriginService",
    "BeanMasterService",
    "ShopService",
    "DripperService",
    "FilterService",
    "ImageStore",
]
