"""
Cache Infrastructure Package

Provides Redis cache abstraction for the ticketing application.
"""

from apps.shared.cache.cache_keys import CacheKeys
from apps.shared.cache.cache_manager import CacheManager

__all__ = ['CacheKeys', 'CacheManager']
