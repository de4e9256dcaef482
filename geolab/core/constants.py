"""Core constants: cache key prefixes and shared literal values."""

# Cache key prefixes (organization records and affiliate lists)
CACHE_PREFIX_ORGANIZATION = "organization"
CACHE_SEGMENT_ID = "id"
CACHE_SEGMENT_AFFILIATES = "affiliates"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Default page size for list endpoints
DEFAULT_PAGE_LIMIT = 100
MAX_PAGE_LIMIT = 500
