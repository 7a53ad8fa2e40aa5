"""
Cache Keys Management

Centralized cache key generation with namespace isolation and consistent formatting.
All cache keys follow the pattern: {namespace}:{id}:{type}
"""


class CacheKeys:
    """Centralized cache key generation for consistent namespace isolation"""

    TICKETS_PREFIX = 'tickets'

    ALL_EVENTS = 'all'

    @classmethod
    def ticket_stats(cls, event_id: int | None = None) -> str:
        """Cache key for registration counters

        Args:
            event_id: Event id, or None for counters across all events

        Returns:
            str: Cache key like 'tickets:12:stats' or 'tickets:all:stats'
        """
        scope = event_id if event_id is not None else cls.ALL_EVENTS
        return f'{cls.TICKETS_PREFIX}:{scope}:stats'

    @classmethod
    def validate_key(cls, key: str) -> bool:
        """Validate cache key format"""
        parts = key.split(':')
        if len(parts) < 3:
            return False
        return parts[0] == cls.TICKETS_PREFIX and all(parts)
