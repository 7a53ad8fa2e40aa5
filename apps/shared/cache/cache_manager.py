import json
import logging
from typing import Any

from django.core.cache import cache
from django.core.serializers.json import DjangoJSONEncoder

from apps.shared.cache.cache_keys import CacheKeys

logger = logging.getLogger(__name__)


class CacheManager:
    """
    Thin wrapper over the configured Django cache (django-redis in production).

    Cache failures never propagate: a broken cache degrades to a miss.
    """

    def __init__(self):
        self.cache = cache
        self.logger = logger
        self.keys = CacheKeys

    def get(self, key: str, default: Any = None) -> Any:
        try:
            if not self.keys.validate_key(key):
                self.logger.warning(f'Invalid cache key format: {key}')
                return default

            value = self.cache.get(key, default)
            if value is not default:
                self.logger.debug(f'Cache HIT: {key}')
            else:
                self.logger.debug(f'Cache MISS: {key}')
            return value

        except Exception as e:
            self.logger.exception(f'Cache GET error for key {key}: {e}')
            return default

    def set(self, key: str, value: Any, timeout: int | None = None) -> bool:
        try:
            if not self.keys.validate_key(key):
                self.logger.warning(f'Invalid cache key format: {key}')
                return False

            if isinstance(value, dict | list | str | int | float | bool):
                payload = value
            else:
                payload = json.loads(json.dumps(value, cls=DjangoJSONEncoder, default=str))

            success = self.cache.set(key, payload, timeout)
            self.logger.debug(f'Cache SET: {key} (timeout: {timeout})')
            # LocMem returns None from set(); treat that as success
            return success is not False

        except Exception as e:
            self.logger.exception(f'Cache SET error for key {key}: {e}')
            return False

    def delete(self, key: str) -> bool:
        try:
            success = self.cache.delete(key)
            self.logger.debug(f'Cache DELETE: {key} (success: {success})')
            return bool(success)

        except Exception as e:
            self.logger.exception(f'Cache DELETE error for key {key}: {e}')
            return False

    def invalidate_ticket_stats(self, event_id: int | None = None) -> None:
        """Drop the per-event counters and the global ones"""
        if event_id is not None:
            self.delete(self.keys.ticket_stats(event_id))
        self.delete(self.keys.ticket_stats())
