# =============================================================================
# core/services/master_data_service.py - Master Data Façades
# =============================================================================
# One service per master-data kind (origin, bean master, shop, dripper,
# filter). Each wraps the shared Database handle with the kind's sort order,
# uniqueness rules and usage counts.
#
# Services take normalized write-models from core.validation and return
# response models from core.models.master_data.
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, ClassVar

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError, StoreError, ValidationError
from core.models.master_data import (
    BeanMasterCreate,
    BeanMasterResponse,
    BeanMasterUpdate,
    DripperResponse,
    FilterResponse,
    MasterResponse,
    OriginCreate,
    OriginResponse,
    OriginUpdate,
    ShopResponse,
)
from lib import tables
from lib.database import Database

logger = logging.getLogger(__name__)


class MasterDataService:
    """
    Base façade for one master-data table.

    Subclasses set the table, response model, ordering and the Japanese
    noun used in user-facing messages. Every public method opens its own
    session, so one service instance is safe to share across requests.
    """

    table: ClassVar[type[tables.MasterRecord]]
    response_model: ClassVar[type[MasterResponse]]
    label: ClassVar[str]
    order_by_name: ClassVar[bool] = False
    # TastingEntry column that references this table, if any
    usage_column: ClassVar[str | None] = None

    def __init__(self, db: Database):
        self.db = db

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _ordering(self) -> list[Any]:
        if self.order_by_name:
            return [self.table.name.asc(), self.table.id.asc()]
        return [self.table.created_at.asc(), self.table.id.asc()]

    def _not_found(self, record_id: int) -> NotFoundError:
        return NotFoundError(f"{self.label}が見つかりません", details={"id": record_id})

    def _store_error(self, action: str, error: Exception) -> StoreError:
        logger.error(f"Failed to {action} {self.table.__tablename__}: {error}")
        verb = {
            "list": "取得",
            "get": "取得",
            "create": "作成",
            "update": "更新",
            "delete": "削除",
        }[action]
        return StoreError(f"{self.label}の{verb}に失敗しました")

    def _fetch(self, session: Session, record_id: int) -> tables.MasterRecord:
        row = session.get(self.table, record_id)
        if row is None:
            raise self._not_found(record_id)
        return row

    def _count_usage(self, session: Session, record_ids: list[int] | None = None) -> dict[int, int]:
        if self.usage_column is None:
            return {}
        column = getattr(tables.TastingEntry, self.usage_column)
        query = select(column, func.count()).where(column.is_not(None)).group_by(column)
        if record_ids is not None:
            query = query.where(column.in_(record_ids))
        return {record_id: count for record_id, count in session.execute(query).all()}

    def _to_response(self, row: tables.MasterRecord, counts: dict[int, int]) -> MasterResponse:
        response = self.response_model.model_validate(row)
        if self.usage_column is not None:
            response.usage_count = counts.get(row.id, 0)
        return response

    def _check_create(self, session: Session, data: BaseModel) -> None:
        """Hook for kind-specific rules before insert."""

    def _check_update(self, session: Session, row: tables.MasterRecord, changes: dict[str, Any]) -> None:
        """Hook for kind-specific rules before update."""

    def _check_delete(self, session: Session, row: tables.MasterRecord) -> None:
        """Hook for kind-specific rules before delete."""

    def _integrity_conflict(self, error: IntegrityError) -> ConflictError | None:
        """Map a store-level constraint violation to a conflict, if it is one."""
        return None

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def list(self) -> list[MasterResponse]:
        """Return every row in this kind's sort order."""
        try:
            with self.db.session() as session:
                rows = session.scalars(select(self.table).order_by(*self._ordering())).all()
                counts = self._count_usage(session)
                logger.debug(f"Listed {len(rows)} rows from {self.table.__tablename__}")
                return [self._to_response(row, counts) for row in rows]
        except SQLAlchemyError as e:
            raise self._store_error("list", e)

    def get(self, record_id: int) -> MasterResponse:
        """Return one row or raise NotFoundError."""
        try:
            with self.db.session() as session:
                row = self._fetch(session, record_id)
                return self._to_response(row, self._count_usage(session, [row.id]))
        except SQLAlchemyError as e:
            raise self._store_error("get", e)

    def usage_count(self, record_id: int) -> int:
        """Number of tasting entries referencing the row."""
        try:
            with self.db.session() as session:
                self._fetch(session, record_id)
                return self._count_usage(session, [record_id]).get(record_id, 0)
        except SQLAlchemyError as e:
            raise self._store_error("get", e)

    def create(self, data: BaseModel) -> MasterResponse:
        """
        Insert a row from a validated write-model.

        Returns the stored row including its generated id and createdAt.
        """
        try:
            with self.db.session() as session:
                self._check_create(session, data)
                row = self.table(**data.model_dump(mode="json"))
                session.add(row)
                try:
                    session.commit()
                except IntegrityError as e:
                    session.rollback()
                    conflict = self._integrity_conflict(e)
                    if conflict is None:
                        raise
                    raise conflict
                session.refresh(row)
                logger.info(f"Created {self.table.__tablename__} row {row.id}")
                return self._to_response(row, {})
        except SQLAlchemyError as e:
            raise self._store_error("create", e)

    def update(self, record_id: int, data: BaseModel) -> MasterResponse:
        """Apply the fields the client sent; others stay as stored."""
        changes = data.model_dump(mode="json", exclude_unset=True)
        try:
            with self.db.session() as session:
                row = self._fetch(session, record_id)
                self._check_update(session, row, changes)
                for attr, value in changes.items():
                    setattr(row, attr, value)
                try:
                    session.commit()
                except IntegrityError as e:
                    session.rollback()
                    conflict = self._integrity_conflict(e)
                    if conflict is None:
                        raise
                    raise conflict
                session.refresh(row)
                logger.info(f"Updated {self.table.__tablename__} row {row.id}: {sorted(changes)}")
                return self._to_response(row, self._count_usage(session, [row.id]))
        except SQLAlchemyError as e:
            raise self._store_error("update", e)

    def delete(self, record_id: int) -> None:
        """
        Remove a row by id.

        No soft delete and no cascade to image files; callers confirm
        intent before calling this.
        """
        try:
            with self.db.session() as session:
                row = self._fetch(session, record_id)
                self._check_delete(session, row)
                session.delete(row)
                session.commit()
                logger.info(f"Deleted {self.table.__tablename__} row {record_id}")
        except SQLAlchemyError as e:
            raise self._store_error("delete", e)


# =============================================================================
# Origin
# =============================================================================

class OriginService(MasterDataService):
    """Origins are unique by trimmed name and listed alphabetically."""

    table = tables.OriginMaster
    response_model = OriginResponse
    label = "産地"
    order_by_name = True

    def _duplicate(self, name: str) -> ConflictError:
        return ConflictError("同じ名前の産地が既に存在します", details={"name": name})

    def find_by_name(self, session: Session, name: str) -> tables.OriginMaster | None:
        return session.scalars(
            select(tables.OriginMaster).where(tables.OriginMaster.name == name.strip())
        ).first()

    def _check_create(self, session: Session, data: OriginCreate) -> None:
        if self.find_by_name(session, data.name) is not None:
            logger.info(f"Rejected duplicate origin: {data.name}")
            raise self._duplicate(data.name)

    def _check_update(self, session: Session, row: tables.MasterRecord, changes: dict[str, Any]) -> None:
        name = changes.get("name")
        if name is None or name == row.name:
            return
        existing = self.find_by_name(session, name)
        if existing is not None and existing.id != row.id:
            raise self._duplicate(name)

    def _integrity_conflict(self, error: IntegrityError) -> ConflictError | None:
        # Another request inserted the same name between our check and insert
        logger.warning(f"Unique index rejected origin write: {error}")
        return ConflictError("同じ名前の産地が既に存在します")

    def create(self, data: OriginCreate) -> OriginResponse:
        return super().create(data)

    def update(self, record_id: int, data: OriginUpdate) -> OriginResponse:
        return super().update(record_id, data)


# =============================================================================
# Bean Master
# =============================================================================

class BeanMasterService(MasterDataService):
    """Bean varieties, alphabetical, optionally linked to an origin."""

    table = tables.BeanMaster
    response_model = BeanMasterResponse
    label = "銘柄"
    order_by_name = True
    usage_column = "bean_master_id"

    def _require_origin(self, session: Session, origin_id: int | None) -> None:
        if origin_id is not None and session.get(tables.OriginMaster, origin_id) is None:
            raise ValidationError.for_field("originId", "指定された産地が存在しません")

    def _check_create(self, session: Session, data: BeanMasterCreate) -> None:
        self._require_origin(session, data.origin_id)

    def _check_update(self, session: Session, row: tables.MasterRecord, changes: dict[str, Any]) -> None:
        self._require_origin(session, changes.get("origin_id"))

    def _check_delete(self, session: Session, row: tables.MasterRecord) -> None:
        in_use = self._count_usage(session, [row.id]).get(row.id, 0)
        if in_use:
            raise ConflictError(
                "この銘柄にはドリップ記録があるため削除できません",
                code="IN_USE",
                details={"id": row.id, "usage_count": in_use},
            )

    def update(self, record_id: int, data: BeanMasterUpdate) -> BeanMasterResponse:
        return super().update(record_id, data)


# =============================================================================
# Shop / Dripper / Filter
# =============================================================================

class ShopService(MasterDataService):
    table = tables.Shop
    response_model = ShopResponse
    label = "店舗"


class DripperService(MasterDataService):
    table = tables.Dripper
    response_model = DripperResponse
    label = "ドリッパー"
    usage_column = "dripper_id"


class FilterService(MasterDataService):
    table = tables.Filter
    response_model = FilterResponse
    label = "フィルター"
    usage_column = "filter_id"
