"""Redis implementation of KnowledgeStore.

Each entry is a hash at ``<prefix>:entry:<id>``; every tenant has a set
``<prefix>:tenant:<tenant_id>`` holding its entry ids.
"""

from datetime import datetime, timezone

import redis

from kb_retrieval.config import get_redis_client, settings
from kb_retrieval.entities import KnowledgeEntryEntity
from kb_retrieval.utils import get_logger

logger = get_logger(__name__)

# Only touches an existing hash, so a concurrent delete cannot leave a partial entry.
INCREMENT_USAGE_SCRIPT = """
if redis.call("EXISTS", KEYS[1]) == 0 then
    return 0
end
redis.call("HINCRBY", KEYS[1], "usage_count", 1)
redis.call("HSET", KEYS[1], "last_used", ARGV[1])
return 1
"""


def _to_hash(entry: KnowledgeEntryEntity) -> dict[str, str]:
    return {
        "id": entry.id,
        "tenant_id": entry.tenant_id,
        "question": entry.question,
        "answer": entry.answer,
        "category": entry.category or "",
        "keywords": entry.keywords or "",
        "language": entry.language,
        "priority": str(entry.priority or 0),
        "is_active": "1" if entry.is_active else "0",
        "usage_count": str(entry.usage_count or 0),
        "last_used": entry.last_used.isoformat() if entry.last_used else "",
    }


def _from_hash(data: dict[str, str]) -> KnowledgeEntryEntity:
    last_used = data.get("last_used") or None
    return KnowledgeEntryEntity(
        id=data["id"],
        tenant_id=data.get("tenant_id", ""),
        question=data.get("question", ""),
        answer=data.get("answer", ""),
        category=data.get("category", ""),
        keywords=data.get("keywords", ""),
        language=data.get("language", "en"),
        priority=int(data.get("priority") or 0),
        is_active=data.get("is_active", "1") == "1",
        usage_count=int(data.get("usage_count") or 0),
        last_used=datetime.fromisoformat(last_used) if last_used else None,
    )


class RedisKnowledgeRepository:
    """Redis implementation of the KnowledgeStore protocol.

    This class satisfies the protocol through structural typing - no
    explicit inheritance needed. The client must be created with
    ``decode_responses=True``.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
    ) -> None:
        """Initialize the Redis knowledge repository.

        Args:
            redis_client: Redis client instance. If None, creates default.
            key_prefix: Prefix for every key. Defaults to settings.
        """
        self._client = redis_client or get_redis_client()
        self._prefix = key_prefix or settings.kb_key_prefix
        self._increment_usage_script = self._client.register_script(INCREMENT_USAGE_SCRIPT)

    @classmethod
    def create(cls, key_prefix: str | None = None) -> "RedisKnowledgeRepository":
        """Factory method to create RedisKnowledgeRepository with defaults.

        Args:
            key_prefix: Key prefix. If None, uses settings.

        Returns:
            Configured RedisKnowledgeRepository
        """
        return cls(key_prefix=key_prefix)

    def _entry_key(self, entry_id: str) -> str:
        return f"{self._prefix}:entry:{entry_id}"

    def _tenant_key(self, tenant_id: str) -> str:
        return f"{self._prefix}:tenant:{tenant_id}"

    def fetch_active_entries(self, tenant_id: str, language: str) -> list[KnowledgeEntryEntity]:
        """Fetch a tenant's active entries in one language.

        Args:
            tenant_id: The owning tenant
            language: Language code to filter on

        Returns:
            Entries ordered by priority desc, then usage count desc
        """
        entry_ids = sorted(self._client.smembers(self._tenant_key(tenant_id)))
        if not entry_ids:
            return []

        pipe = self._client.pipeline()
        for entry_id in entry_ids:
            pipe.hgetall(self._entry_key(entry_id))
        rows = pipe.execute()

        entries = []
        for row in rows:
            # Set members can outlive their hash if a delete was interrupted
            if not row:
                continue
            entry = _from_hash(row)
            if entry.is_active and entry.language == language:
                entries.append(entry)

        entries.sort(key=lambda e: (-e.priority, -e.usage_count))
        return entries

    def increment_usage(self, entry_id: str) -> None:
        """Bump usage_count and set last_used on an existing entry.

        A missing entry is left alone rather than recreated as a partial hash.

        Args:
            entry_id: Id of the winning entry
        """
        updated = self._increment_usage_script(
            keys=[self._entry_key(entry_id)],
            args=[datetime.now(timezone.utc).isoformat()],
        )
        if not updated:
            logger.warning("usage update skipped, entry not found", extra={"entry_id": entry_id})

    def save(self, entry: KnowledgeEntryEntity) -> str:
        """Create or replace an entry.

        Args:
            entry: The entry to store

        Returns:
            The entry id
        """
        pipe = self._client.pipeline()
        pipe.hset(self._entry_key(entry.id), mapping=_to_hash(entry))
        pipe.sadd(self._tenant_key(entry.tenant_id), entry.id)
        pipe.execute()
        return entry.id

    def get(self, entry_id: str) -> KnowledgeEntryEntity | None:
        """Get an entry by id.

        Args:
            entry_id: The entry id

        Returns:
            The entry, or None if it does not exist
        """
        row = self._client.hgetall(self._entry_key(entry_id))
        return _from_hash(row) if row else None

    def delete(self, entry_id: str) -> bool:
        """Delete an entry and drop it from its tenant's index.

        Args:
            entry_id: The entry id

        Returns:
            True if deleted, False otherwise
        """
        key = self._entry_key(entry_id)
        tenant_id = self._client.hget(key, "tenant_id")
        if tenant_id is None:
            return False

        pipe = self._client.pipeline()
        pipe.delete(key)
        pipe.srem(self._tenant_key(tenant_id), entry_id)
        deleted, _ = pipe.execute()
        return deleted > 0

    def count_all(self, tenant_id: str) -> int:
        """Count a tenant's entries.

        Returns:
            Number of entries, active or not
        """
        return int(self._client.scard(self._tenant_key(tenant_id)))

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False

    def get_stats(self) -> dict:
        """Get repository statistics.

        Returns:
            Dictionary with stats
        """
        tenants = 0
        entries = 0
        for key in self._client.scan_iter(match=f"{self._prefix}:tenant:*"):
            tenants += 1
            entries += int(self._client.scard(key))
        return {
            "key_prefix": self._prefix,
            "total_tenants": tenants,
            "total_entries": entries,
        }

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
