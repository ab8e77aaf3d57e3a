"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .knowledge_entry import KnowledgeEntryEntity
from .match_candidate import LEXICAL, SEMANTIC, MatchCandidateEntity

__all__ = ["KnowledgeEntryEntity", "MatchCandidateEntity", "LEXICAL", "SEMANTIC"]
