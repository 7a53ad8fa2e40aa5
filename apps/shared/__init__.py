"""
Shared building blocks for the ticketing apps.

- Base classes (BaseModel, BaseAPIView)
- Exceptions and the DRF exception handler
- DAL error translation (handle_db_errors)
- Cache access (CacheManager, CacheKeys)
- Service container and pagination

Import from the submodules directly:
- from apps.shared.base.base_api_view import BaseAPIView
- from apps.shared.container import get_registration_issuer
"""

# Empty init to avoid circular imports
# All imports should be done directly from submodules
