# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains the storage plumbing:
# - database.py: Database handle (SQLAlchemy engine + session factory)
# - tables.py: ORM table definitions
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.database import Database, DatabaseError

__all__ = [
    "Database",
    "DatabaseError",
]
