# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the master-data business logic:
# - models/: Pydantic schemas and closed value sets
# - validation.py: Payload validation rules
# - services/: Master-data façades and the image store
#
# Only the error classes are shared with app/; nothing here imports routers.
# =============================================================================
