# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Drip Journal API:
# - test_validation.py: Payload validation rules
# - test_master_data_service.py: Master-data façades against SQLite
# - test_image_service.py: Image store ingest/serve/remove
# - test_api_master_data.py: HTTP tests for master-data routes
# - test_api_images.py: HTTP tests for upload and image delivery
# - test_config.py: Settings and database handle
#
# Run tests with: pytest
# =============================================================================
