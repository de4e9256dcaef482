"""Cache: Redis service and cache key utilities.

Used by OrganizationRepository when ORGANIZATION_CACHE_ENABLED is set.
"""

from geolab.infrastructure.cache.keys import (
    organization_affiliates_key,
    organization_key,
)
from geolab.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheService",
    "organization_affiliates_key",
    "organization_key",
]
