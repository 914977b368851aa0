# =============================================================================
# tests/test_master_data_service.py - Master Data Façade Tests
# =============================================================================
# Tests the per-kind services against a real SQLite database:
# - Sort orders (name for origins/beans, creation for the rest)
# - Origin name uniqueness, including the unique index
# - Usage counts from tasting entries
# - Update/delete semantics and store failures
#
# Run with: pytest tests/test_master_data_service.py -v
# =============================================================================

import pytest

from app.exceptions import ConflictError, NotFoundError, StoreError, ValidationError
from core.models import EquipmentSize, FilterType
from core.services import (
    BeanMasterService,
    DripperService,
    FilterService,
    OriginService,
    ShopService,
)
from core.validation import (
    validate_bean_master_create,
    validate_bean_master_update,
    validate_dripper_create,
    validate_filter_create,
    validate_origin_create,
    validate_origin_update,
    validate_shop_create,
    validate_shop_update,
)
from lib import tables
from lib.database import Database


# =============================================================================
# Origin
# =============================================================================

class TestOriginService:
    """Origins: unique trimmed names, alphabetical listing."""

    def test_create_returns_materialized_row(self, db):
        service = OriginService(db)

        origin = service.create(validate_origin_create({"name": " Ethiopia ", "notes": "Sidamo"}))

        assert origin.id > 0
        assert origin.name == "Ethiopia"
        assert origin.notes == "Sidamo"
        assert origin.created_at is not None

    def test_duplicate_normalized_name_rejected(self, db):
        service = OriginService(db)
        service.create(validate_origin_create({"name": " Ethiopia "}))

        with pytest.raises(ConflictError) as exc_info:
            service.create(validate_origin_create({"name": "Ethiopia"}))

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "同じ名前の産地が既に存在します"
        assert len(service.list()) == 1

    def test_unique_index_backs_the_check(self, db, monkeypatch):
        """A row slipping past the lookup still hits the unique index."""
        service = OriginService(db)
        service.create(validate_origin_create({"name": "Kenya"}))
        monkeypatch.setattr(OriginService, "find_by_name", lambda self, session, name: None)

        with pytest.raises(ConflictError):
            service.create(validate_origin_create({"name": "Kenya"}))

        assert [o.name for o in service.list()] == ["Kenya"]

    def test_list_is_name_ascending(self, db):
        service = OriginService(db)
        for name in ["Kenya", "Brazil", "Guatemala"]:
            service.create(validate_origin_create({"name": name}))

        assert [o.name for o in service.list()] == ["Brazil", "Guatemala", "Kenya"]

    def test_rename_onto_existing_name_rejected(self, db):
        service = OriginService(db)
        service.create(validate_origin_create({"name": "Brazil"}))
        kenya = service.create(validate_origin_create({"name": "Kenya"}))

        with pytest.raises(ConflictError):
            service.update(kenya.id, validate_origin_update({"name": "Brazil"}))

    def test_update_keeps_unsent_fields(self, db):
        service = OriginService(db)
        origin = service.create(validate_origin_create({"name": "Kenya", "notes": "Nyeri"}))

        updated = service.update(origin.id, validate_origin_update({"name": "Kenya AA"}))

        assert updated.name == "Kenya AA"
        assert updated.notes == "Nyeri"

    def test_get_missing_raises_not_found(self, db):
        with pytest.raises(NotFoundError) as exc_info:
            OriginService(db).get(999)
        assert exc_info.value.message == "産地が見つかりません"


# =============================================================================
# Bean Master
# =============================================================================

class TestBeanMasterService:
    """Bean masters: origin reference checks and delete protection."""

    def test_create_with_enums_and_origin(self, db):
        origin = OriginService(db).create(validate_origin_create({"name": "Ethiopia"}))
        service = BeanMasterService(db)

        bean = service.create(validate_bean_master_create({
            "name": "Guji",
            "originId": origin.id,
            "roastLevel": "LIGHT",
            "process": "NATURAL",
        }))

        assert bean.origin_id == origin.id
        assert bean.roast_level.value == "LIGHT"
        assert bean.process.value == "NATURAL"
        assert bean.usage_count == 0

    def test_unknown_origin_id_rejected(self, db):
        with pytest.raises(ValidationError) as exc_info:
            BeanMasterService(db).create(validate_bean_master_create({"name": "Guji", "originId": 42}))

        assert exc_info.value.fields == ["originId"]
        assert BeanMasterService(db).list() == []

    def test_update_checks_origin_reference(self, db):
        service = BeanMasterService(db)
        bean = service.create(validate_bean_master_create({"name": "Guji"}))

        with pytest.raises(ValidationError):
            service.update(bean.id, validate_bean_master_update({"originId": 7}))

    def test_delete_blocked_while_in_use(self, db, add_tasting):
        service = BeanMasterService(db)
        bean = service.create(validate_bean_master_create({"name": "Guji"}))
        add_tasting(bean_master_id=bean.id)

        with pytest.raises(ConflictError) as exc_info:
            service.delete(bean.id)

        assert exc_info.value.code == "IN_USE"
        assert service.get(bean.id).usage_count == 1

    def test_deleting_origin_unlinks_beans(self, db):
        origin_service = OriginService(db)
        origin = origin_service.create(validate_origin_create({"name": "Ethiopia"}))
        service = BeanMasterService(db)
        bean = service.create(validate_bean_master_create({"name": "Guji", "originId": origin.id}))

        origin_service.delete(origin.id)

        assert service.get(bean.id).origin_id is None


# =============================================================================
# Shop / Dripper / Filter
# =============================================================================

class TestCreationOrderedServices:
    """Shops, drippers and filters list in creation order."""

    def test_shops_keep_insertion_order(self, db):
        service = ShopService(db)
        for name in ["Zebra Roasters", "Alpha Coffee", "Mocha Stand"]:
            service.create(validate_shop_create({"name": name}))

        assert [s.name for s in service.list()] == ["Zebra Roasters", "Alpha Coffee", "Mocha Stand"]

    def test_shop_create_is_not_idempotent(self, db):
        service = ShopService(db)
        service.create(validate_shop_create({"name": "Same"}))
        service.create(validate_shop_create({"name": "Same"}))

        assert len(service.list()) == 2

    def test_shop_update_clears_with_null(self, db):
        service = ShopService(db)
        shop = service.create(validate_shop_create({"name": "Shop", "address": "Kyoto"}))

        updated = service.update(shop.id, validate_shop_update({"address": None}))

        assert updated.address is None
        assert updated.name == "Shop"

    def test_dripper_round_trip(self, db):
        service = DripperService(db)
        created = service.create(validate_dripper_create({
            "name": " V60 ",
            "manufacturer": "",
            "size": "SIZE_02",
            "imagePath": "/images/drippers/v60.png",
        }))

        [listed] = service.list()

        assert listed.id == created.id
        assert listed.name == "V60"
        assert listed.manufacturer is None
        assert listed.size is EquipmentSize.SIZE_02
        assert listed.image_path == "/images/drippers/v60.png"

    def test_usage_counts(self, db, add_tasting):
        drippers = DripperService(db)
        filters = FilterService(db)
        v60 = drippers.create(validate_dripper_create({"name": "V60"}))
        kalita = drippers.create(validate_dripper_create({"name": "Kalita"}))
        paper = filters.create(validate_filter_create({"name": "Paper", "type": "PAPER"}))

        add_tasting(dripper_id=v60.id, filter_id=paper.id)
        add_tasting(dripper_id=v60.id)

        counts = {d.name: d.usage_count for d in drippers.list()}
        assert counts == {"V60": 2, "Kalita": 0}
        assert drippers.usage_count(kalita.id) == 0
        assert filters.get(paper.id).usage_count == 1
        assert filters.get(paper.id).type is FilterType.PAPER

    def test_delete_dripper(self, db, add_tasting):
        service = DripperService(db)
        dripper = service.create(validate_dripper_create({"name": "V60"}))
        entry_id = add_tasting(dripper_id=dripper.id)

        service.delete(dripper.id)

        with pytest.raises(NotFoundError):
            service.get(dripper.id)
        with db.session() as session:
            assert session.get(tables.TastingEntry, entry_id).dripper_id is None

    def test_delete_missing_dripper(self, db):
        with pytest.raises(NotFoundError) as exc_info:
            DripperService(db).delete(123)
        assert exc_info.value.message == "ドリッパーが見つかりません"


# =============================================================================
# Store Failures
# =============================================================================

class TestStoreFailures:
    """Database errors surface as StoreError with a generic message."""

    def test_missing_tables_raise_store_error(self, tmp_path):
        bare = Database(f"sqlite:///{(tmp_path / 'empty.db').as_posix()}")
        try:
            with pytest.raises(StoreError) as exc_info:
                OriginService(bare).list()
        finally:
            bare.dispose()

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "産地の取得に失敗しました"
        assert "no such table" not in exc_info.value.message
