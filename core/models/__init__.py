# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for master data:
# - master_data.py: Enums, write-models and response models
#
# These models define the "contract" between API and clients.
# =============================================================================

from .master_data import (
    # Closed value sets
    EquipmentSize,
    FilterType,
    Process,
    RoastLevel,
    EQUIPMENT_SIZE_LABELS,
    FILTER_TYPE_LABELS,
    PROCESS_LABELS,
    ROAST_LEVEL_LABELS,
    # Write models
    BeanMasterCreate,
    BeanMasterUpdate,
    DripperCreate,
    DripperUpdate,
    FilterCreate,
    FilterUpdate,
    OriginCreate,
    OriginUpdate,
    ShopCreate,
    ShopUpdate,
    # Response models
    BeanMasterResponse,
    DripperResponse,
    FilterResponse,
    MasterResponse,
    OriginResponse,
    ShopResponse,
)

__all__ = [
    "EquipmentSize",
    "FilterType",
    "Process",
    "RoastLevel",
    "EQUIPMENT_SIZE_LABELS",
    "FILTER_TYPE_LABELS",
    "PROCESS_LABELS",
    "ROAST_LEVEL_LABELS",
    "BeanMasterCreate",
    "BeanMasterUpdate",
    "DripperCreate",
    "DripperUpdate",
    "FilterCreate",
    "FilterUpdate",
    "OriginCreate",
    "OriginUpdate",
    "ShopCreate",
    "ShopUpdate",
    "BeanMasterResponse",
    "DripperResponse",
    "FilterResponse",
    "MasterResponse",
    "OriginResponse",
    "ShopResponse",
]
