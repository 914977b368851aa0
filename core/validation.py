# =============================================================================
# core/validation.py - Master Data Validation Rules
# =============================================================================
# Pure functions that gate every master-data write:
#   raw JSON payload -> normalized write-model, or ValidationError
#
# Rules:
# - Required strings must be strings that are non-empty after trimming
# - Enumerated fields must be members of their closed set when present;
#   null and absent are always accepted
# - Optional text is trimmed, and stored as None when empty or absent
#
# Every violation in a payload is collected before raising, so clients see
# all bad fields at once. Nothing here touches the database.
# =============================================================================

from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel

from app.exceptions import FieldViolation, ValidationError
from core.models.master_data import (
    BeanMasterCreate,
    BeanMasterUpdate,
    DripperCreate,
    DripperUpdate,
    EquipmentSize,
    FilterCreate,
    FilterType,
    FilterUpdate,
    OriginCreate,
    OriginUpdate,
    Process,
    RoastLevel,
    ShopCreate,
    ShopUpdate,
)

E = TypeVar("E", bound=Enum)
M = TypeVar("M", bound=BaseModel)

_MISSING = object()


# =============================================================================
# Field Rules
# =============================================================================

def trim_or_none(value: Any) -> str | None:
    """
    Normalize an optional text value.

    Example:
        trim_or_none("  Hario ") -> "Hario"
        trim_or_none("   ")      -> None
        trim_or_none(None)       -> None
    """
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


class _PayloadReader:
    """Collects normalized values and violations for one payload."""

    def __init__(self, payload: Any, partial: bool):
        self.partial = partial
        self.values: dict[str, Any] = {}
        self.violations: list[FieldViolation] = []

        if isinstance(payload, dict):
            self.payload = payload
        else:
            self.payload = {}
            self.violations.append(FieldViolation("body", "リクエストボディはJSONオブジェクトである必要があります"))

    def _get(self, key: str) -> Any:
        return self.payload.get(key, _MISSING)

    def required_text(self, key: str, attr: str, message: str) -> None:
        raw = self._get(key)
        if raw is _MISSING and self.partial:
            return
        if not isinstance(raw, str) or not raw.strip():
            self.violations.append(FieldViolation(key, message))
            return
        self.values[attr] = raw.strip()

    def optional_text(self, key: str, attr: str) -> None:
        raw = self._get(key)
        if raw is _MISSING:
            if not self.partial:
                self.values[attr] = None
            return
        if raw is not None and not isinstance(raw, str):
            self.violations.append(FieldViolation(key, f"{key} は文字列で指定してください"))
            return
        self.values[attr] = trim_or_none(raw)

    def enum_value(self, key: str, attr: str, enum_cls: type[E], label: str) -> None:
        raw = self._get(key)
        if raw is _MISSING:
            if not self.partial:
                self.values[attr] = None
            return
        if raw is None:
            self.values[attr] = None
            return
        allowed = [member.value for member in enum_cls]
        if not isinstance(raw, str) or raw not in allowed:
            self.violations.append(
                FieldViolation(key, f"{label}は {', '.join(allowed)} のいずれかを指定してください")
            )
            return
        self.values[attr] = enum_cls(raw)

    def optional_id(self, key: str, attr: str, message: str) -> None:
        raw = self._get(key)
        if raw is _MISSING:
            if not self.partial:
                self.values[attr] = None
            return
        if raw is None:
            self.values[attr] = None
            return
        # bool is an int subclass; true/false are not ids
        if isinstance(raw, bool) or not isinstance(raw, int) or raw < 1:
            self.violations.append(FieldViolation(key, message))
            return
        self.values[attr] = raw

    def build(self, model_cls: type[M]) -> M:
        if self.violations:
            raise ValidationError(self.violations)
        return model_cls(**self.values)


# =============================================================================
# Origin
# =============================================================================

def _read_origin(payload: Any, partial: bool) -> _PayloadReader:
    reader = _PayloadReader(payload, partial)
    if partial:
        reader.required_text("name", "name", "産地名を空にすることはできません")
    else:
        reader.required_text("name", "name", "産地名は必須です")
    reader.optional_text("notes", "notes")
    return reader


def validate_origin_create(payload: Any) -> OriginCreate:
    return _read_origin(payload, partial=False).build(OriginCreate)


def validate_origin_update(payload: Any) -> OriginUpdate:
    return _read_origin(payload, partial=True).build(OriginUpdate)


# =============================================================================
# Bean Master
# =============================================================================

def _read_bean_master(payload: Any, partial: bool) -> _PayloadReader:
    reader = _PayloadReader(payload, partial)
    reader.required_text("name", "name", "銘柄名は必須です")
    reader.optional_text("origin", "origin")
    reader.optional_id("originId", "origin_id", "産地IDが不正です")
    reader.enum_value("roastLevel", "roast_level", RoastLevel, "焙煎度")
    reader.enum_value("process", "process", Process, "精製方法")
    reader.optional_text("notes", "notes")
    return reader


def validate_bean_master_create(payload: Any) -> BeanMasterCreate:
    return _read_bean_master(payload, partial=False).build(BeanMasterCreate)


def validate_bean_master_update(payload: Any) -> BeanMasterUpdate:
    return _read_bean_master(payload, partial=True).build(BeanMasterUpdate)


# =============================================================================
# Shop
# =============================================================================

def _read_shop(payload: Any, partial: bool) -> _PayloadReader:
    reader = _PayloadReader(payload, partial)
    reader.required_text("name", "name", "店舗名は必須です")
    reader.optional_text("address", "address")
    reader.optional_text("url", "url")
    reader.optional_text("notes", "notes")
    return reader


def validate_shop_create(payload: Any) -> ShopCreate:
    return _read_shop(payload, partial=False).build(ShopCreate)


def validate_shop_update(payload: Any) -> ShopUpdate:
    return _read_shop(payload, partial=True).build(ShopUpdate)


# =============================================================================
# Dripper
# =============================================================================

def _read_dripper(payload: Any, partial: bool) -> _PayloadReader:
    reader = _PayloadReader(payload, partial)
    if partial:
        reader.required_text("name", "name", "ドリッパー名は空にできません")
    else:
        reader.required_text("name", "name", "ドリッパー名は必須です")
    reader.optional_text("manufacturer", "manufacturer")
    reader.enum_value("size", "size", EquipmentSize, "サイズ")
    reader.optional_text("notes", "notes")
    reader.optional_text("url", "url")
    reader.optional_text("imagePath", "image_path")
    return reader


def validate_dripper_create(payload: Any) -> DripperCreate:
    return _read_dripper(payload, partial=False).build(DripperCreate)


def validate_dripper_update(payload: Any) -> DripperUpdate:
    return _read_dripper(payload, partial=True).build(DripperUpdate)


# =============================================================================
# Filter
# =============================================================================

def _read_filter(payload: Any, partial: bool) -> _PayloadReader:
    reader = _PayloadReader(payload, partial)
    if partial:
        reader.required_text("name", "name", "フィルター名は空にできません")
    else:
        reader.required_text("name", "name", "フィルター名は必須です")
    reader.enum_value("type", "type", FilterType, "フィルター種類")
    reader.enum_value("size", "size", EquipmentSize, "サイズ")
    reader.optional_text("notes", "notes")
    reader.optional_text("url", "url")
    reader.optional_text("imagePath", "image_path")
    return reader


def validate_filter_create(payload: Any) -> FilterCreate:
    return _read_filter(payload, partial=False).build(FilterCreate)


def validate_filter_update(payload: Any) -> FilterUpdate:
    return _read_filter(payload, partial=True).build(FilterUpdate)
