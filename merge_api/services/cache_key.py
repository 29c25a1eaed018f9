"""
Cache key generation for cached endpoints.
"""
from typing import Any, Mapping, Optional

CACHE_KEY_PREFIX = 'cache_'


def make_cache_key(endpoint: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """
    Generate cache key: cache_{endpoint}[_{k1}={v1}&{k2}={v2}...].

    Parameters are sorted by name so the same parameter set always maps to
    the same key regardless of how the mapping was built. Values are
    rendered with str() and are not escaped; a value containing '&' or '='
    can collide with a different parameter set.

    Args:
        endpoint: Endpoint name (e.g. 'historial')
        params: Optional request parameters with scalar values

    Returns:
        Cache key string

    Example:
        >>> make_cache_key('historial', {'page': 1, 'limit': 10})
        'cache_historial_limit=10&page=1'
        >>> make_cache_key('historial')
        'cache_historial'
    """
    base_key = f'{CACHE_KEY_PREFIX}{endpoint}'

    if not params:
        return base_key

    sorted_params = '&'.join(
        f'{key}={params[key]}' for key in sorted(params)
    )
    return f'{base_key}_{sorted_params}'
