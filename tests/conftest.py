# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any app imports
# - Provides a SQLite Database and an ImageStore per test (under tmp_path)
# - Provides a TestClient wired to those through dependency overrides
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# app.config builds its settings at import time

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "false")

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_database, get_image_store
from app.main import app
from core.services.image_service import MAX_IMAGE_SIZE, ImageStore
from lib.database import Database
from lib.tables import TastingEntry

# 1x1 transparent PNG
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d4944415478da63fcffffff7f0009fb03fd2a86e38a"
    "0000000049454e44ae426082"
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def db(tmp_path):
    """A fresh SQLite database with all tables created."""
    database = Database(f"sqlite:///{(tmp_path / 'data' / 'test.db').as_posix()}")
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def image_store(tmp_path):
    """An image store rooted in a temporary directory."""
    return ImageStore(tmp_path / "images", MAX_IMAGE_SIZE)


@pytest.fixture
def client(db, image_store):
    """TestClient using the per-test database and image store."""
    app.dependency_overrides[get_database] = lambda: db
    app.dependency_overrides[get_image_store] = lambda: image_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def add_tasting(db):
    """Insert a tasting entry referencing master rows; returns its id."""

    def _add(dripper_id=None, filter_id=None, bean_master_id=None) -> int:
        with db.session() as session:
            entry = TastingEntry(
                dripper_id=dripper_id,
                filter_id=filter_id,
                bean_master_id=bean_master_id,
            )
            session.add(entry)
            session.commit()
            return entry.id

    return _add


@pytest.fixture
def png_bytes():
    return PNG_BYTES
