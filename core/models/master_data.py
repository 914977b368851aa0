# =============================================================================
# core/models/master_data.py - Master Data Schemas
# =============================================================================
# These models define the API contract for master data:
# - Closed value sets (roast level, process, equipment size, filter type)
# - *Create / *Update: normalized write-models produced by core.validation
# - *Response: rows returned to clients (camelCase JSON)
# =============================================================================

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# Closed Value Sets
# =============================================================================

class RoastLevel(str, Enum):
    """Roast degree of a bean, lightest first."""
    LIGHT = "LIGHT"
    CINNAMON = "CINNAMON"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CITY = "CITY"
    FULL_CITY = "FULL_CITY"
    FRENCH = "FRENCH"
    ITALIAN = "ITALIAN"


class Process(str, Enum):
    """Post-harvest processing method."""
    WASHED = "WASHED"
    NATURAL = "NATURAL"
    HONEY = "HONEY"
    PULPED_NATURAL = "PULPED_NATURAL"
    SEMI_WASHED = "SEMI_WASHED"


class EquipmentSize(str, Enum):
    """Dripper/filter size class (cups per brew)."""
    SIZE_01 = "SIZE_01"
    SIZE_02 = "SIZE_02"
    SIZE_03 = "SIZE_03"
    SIZE_04 = "SIZE_04"
    OTHER = "OTHER"


class FilterType(str, Enum):
    """Filter material."""
    PAPER = "PAPER"
    METAL = "METAL"
    CLOTH = "CLOTH"


ROAST_LEVEL_LABELS: dict[RoastLevel, str] = {
    RoastLevel.LIGHT: "ライトロースト（浅煎り）",
    RoastLevel.CINNAMON: "シナモンロースト（浅煎り）",
    RoastLevel.MEDIUM: "ミディアムロースト（中浅煎り）",
    RoastLevel.HIGH: "ハイロースト・ダークロースト（中煎り）",
    RoastLevel.CITY: "シティロースト（中煎り）",
    RoastLevel.FULL_CITY: "フルシティロースト（中深煎り）",
    RoastLevel.FRENCH: "フレンチロースト（深煎り）",
    RoastLevel.ITALIAN: "イタリアンロースト（深煎り）",
}

PROCESS_LABELS: dict[Process, str] = {
    Process.WASHED: "ウォッシュド",
    Process.NATURAL: "ナチュラル",
    Process.HONEY: "ハニー",
    Process.PULPED_NATURAL: "パルプドナチュラル",
    Process.SEMI_WASHED: "セミウォッシュド",
}

EQUIPMENT_SIZE_LABELS: dict[EquipmentSize, str] = {
    EquipmentSize.SIZE_01: "01（1-2杯用）",
    EquipmentSize.SIZE_02: "02（1-4杯用）",
    EquipmentSize.SIZE_03: "03（3-6杯用）",
    EquipmentSize.SIZE_04: "04（4-8杯用）",
    EquipmentSize.OTHER: "その他",
}

FILTER_TYPE_LABELS: dict[FilterType, str] = {
    FilterType.PAPER: "ペーパー",
    FilterType.METAL: "金属",
    FilterType.CLOTH: "布",
}


# =============================================================================
# Write Models
# =============================================================================
# Built only by core.validation, so values are already trimmed and empty
# optional strings are already None. Update models carry only the keys the
# client sent (see model_dump(exclude_unset=True)).

class OriginCreate(BaseModel):
    name: str
    notes: str | None = None


class OriginUpdate(BaseModel):
    name: str | None = None
    notes: str | None = None


class BeanMasterCreate(BaseModel):
    name: str
    origin: str | None = None
    origin_id: int | None = None
    roast_level: RoastLevel | None = None
    process: Process | None = None
    notes: str | None = None


class BeanMasterUpdate(BaseModel):
    name: str | None = None
    origin: str | None = None
    origin_id: int | None = None
    roast_level: RoastLevel | None = None
    process: Process | None = None
    notes: str | None = None


class ShopCreate(BaseModel):
    name: str
    address: str | None = None
    url: str | None = None
    notes: str | None = None


class ShopUpdate(BaseModel):
    name: str | None = None
    address: str | None = None
    url: str | None = None
    notes: str | None = None


class DripperCreate(BaseModel):
    name: str
    manufacturer: str | None = None
    size: EquipmentSize | None = None
    notes: str | None = None
    url: str | None = None
    image_path: str | None = None


class DripperUpdate(BaseModel):
    name: str | None = None
    manufacturer: str | None = None
    size: EquipmentSize | None = None
    notes: str | None = None
    url: str | None = None
    image_path: str | None = None


class FilterCreate(BaseModel):
    name: str
    type: FilterType | None = None
    size: EquipmentSize | None = None
    notes: str | None = None
    url: str | None = None
    image_path: str | None = None


class FilterUpdate(BaseModel):
    name: str | None = None
    type: FilterType | None = None
    size: EquipmentSize | None = None
    notes: str | None = None
    url: str | None = None
    image_path: str | None = None


# =============================================================================
# Response Models
# =============================================================================

class MasterResponse(BaseModel):
    """
    Fields every master-data row returns.

    Example:
        {"id": 1, "name": "Ethiopia", "notes": null, "createdAt": "2024-01-15T10:30:00"}
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int
    name: str
    notes: str | None = None
    created_at: datetime


class OriginResponse(MasterResponse):
    pass


class BeanMasterResponse(MasterResponse):
    origin: str | None = None
    origin_id: int | None = None
    roast_level: RoastLevel | None = None
    process: Process | None = None
    usage_count: int = Field(default=0, description="Tasting entries using this bean")


class ShopResponse(MasterResponse):
    address: str | None = None
    url: str | None = None


class DripperResponse(MasterResponse):
    manufacturer: str | None = None
    size: EquipmentSize | None = None
    url: str | None = None
    image_path: str | None = None
    usage_count: int = Field(default=0, description="Tasting entries using this dripper")


class FilterResponse(MasterResponse):
    type: FilterType | None = None
    size: EquipmentSize | None = None
    url: str | None = None
    image_path: str | None = None
    usage_count: int = Field(default=0, description="Tasting entries using this filter")
