# shared/common/cache.py
"""
Cache helpers built on the Django cache framework (django-redis in production)
"""

import logging
import time
from typing import Any, Optional

from django.core.cache import cache
from django.core.cache.backends.base import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


def make_cache_key(*args, prefix: str = '') -> str:
    """Generate a cache key from arguments"""
    key = ':'.join(str(arg) for arg in args)
    if prefix:
        key = f"{prefix}:{key}"
    return key


class VersionedNamespace:
    """
    Groups cache entries under a version counter so a whole namespace
    (for example every cached day of one business) can be invalidated
    with a single write instead of a key scan.

    Every operation is best-effort: backend errors are logged and callers
    get a miss, so a cache outage only costs recomputation.

    Usage:
        ns = VersionedNamespace('availability')
        key = ns.key(business_id, offering_id, day)
        if key is not None:
            value = ns.get(key)
        ns.invalidate(business_id)
    """

    def __init__(self, prefix: str):
        self.prefix = prefix

    def _version_key(self, scope) -> str:
        return make_cache_key('version', scope, prefix=self.prefix)

    def version(self, scope) -> Optional[int]:
        """Current version of ``scope``, or None when the cache is unreachable"""
        try:
            return cache.get_or_set(self._version_key(scope), time.time_ns, timeout=None)
        except Exception as e:
            logger.warning(f"Cache version lookup failed for {self.prefix}:{scope}: {e}")
            return None

    def key(self, scope, *parts) -> Optional[str]:
        version = self.version(scope)
        if version is None:
            return None
        return make_cache_key(scope, f"v{version}", *parts, prefix=self.prefix)

    def get(self, key: str) -> Optional[Any]:
        try:
            return cache.get(key)
        except Exception as e:
            logger.warning(f"Cache get error for {key}: {e}")
            return None

    def set(self, key: str, value: Any, timeout=DEFAULT_TIMEOUT) -> bool:
        try:
            cache.set(key, value, timeout)
            return True
        except Exception as e:
            logger.warning(f"Cache set error for {key}: {e}")
            return False

    def invalidate(self, scope) -> None:
        version_key = self._version_key(scope)
        try:
            cache.incr(version_key)
        except ValueError:
            # Counter evicted or never written; restart from a fresh value
            if not self.set(version_key, time.time_ns(), timeout=None):
                return
        except Exception as e:
            logger.warning(f"Cache invalidation failed for {self.prefix}:{scope}: {e}")
            return
        logger.debug(f"Invalidated cache namespace {self.prefix}:{scope}")
