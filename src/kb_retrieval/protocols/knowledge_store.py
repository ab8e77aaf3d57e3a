"""Knowledge store protocol.

Defines the interface for the record store holding tenants' knowledge-base
entries. The retrieval core only needs the first two operations; the rest
serve seeding, administration and health checks.

Implementations can include:
- Redis hashes (default)
- A relational database behind an ORM
- In-memory fakes for tests
"""

from typing import Protocol, runtime_checkable

from kb_retrieval.entities import KnowledgeEntryEntity


@runtime_checkable
class KnowledgeStore(Protocol):
    """Protocol for knowledge-base storage backends."""

    def fetch_active_entries(self, tenant_id: str, language: str) -> list[KnowledgeEntryEntity]:
        """Fetch every active entry of a tenant in one language.

        Ordered by priority desc, then usage count desc. The order is a
        tie-stability hint, not a correctness requirement.

        Args:
            tenant_id: The owning tenant
            language: Language code to filter on

        Returns:
            List of active entries
        """
        ...

    def increment_usage(self, entry_id: str) -> None:
        """Increment an entry's usage count and stamp its last-used time.

        Args:
            entry_id: Id of the entry that won a search
        """
        ...

    def save(self, entry: KnowledgeEntryEntity) -> str:
        """Create or replace an entry.

        Returns:
            The entry id
        """
        ...

    def get(self, entry_id: str) -> KnowledgeEntryEntity | None:
        """Get an entry by id, or None."""
        ...

    def delete(self, entry_id: str) -> bool:
        """Delete an entry by id.

        Returns:
            True if deleted, False if it did not exist
        """
        ...

    def count_all(self, tenant_id: str) -> int:
        """Count a tenant's entries, active or not."""
        ...

    def health_check(self) -> bool:
        """Check if the store is accessible."""
        ...

    def get_stats(self) -> dict:
        """Get store statistics (implementation-specific)."""
        ...
