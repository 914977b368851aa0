# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - origins.py: Origin master CRUD
# - bean_masters.py: Bean master CRUD
# - shops.py: Shop CRUD
# - drippers.py: Dripper CRUD
# - filters.py: Filter CRUD
# - upload.py: Image upload and removal
# - images.py: Image delivery
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import origins
from . import bean_masters
from . import shops
from . import drippers
from . import filters
from . import upload
from . import images

__all__ = [
    "health",
    "origins",
    "bean_masters",
    "shops",
    "drippers",
    "filters",
    "upload",
    "images",
]
