"""Cache key builders. Single place for key format (DRY).

Organization ids are integers, so components never contain CACHE_KEY_SEP.
"""

from geolab.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_ORGANIZATION,
    CACHE_SEGMENT_AFFILIATES,
    CACHE_SEGMENT_ID,
)


def organization_key(organization_id: int) -> str:
    """Cache key for an organization record by id."""
    return CACHE_KEY_SEP.join(
        (CACHE_PREFIX_ORGANIZATION, CACHE_SEGMENT_ID, str(int(organization_id)))
    )


def organization_affiliates_key(headquarters_id: int) -> str:
    """Cache key for the affiliate list of a headquarters."""
    return CACHE_KEY_SEP.join(
        (CACHE_PREFIX_ORGANIZATION, CACHE_SEGMENT_AFFILIATES, str(int(headquarters_id)))
    )
