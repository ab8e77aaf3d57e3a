"""Service layer for business logic.

This layer contains the retrieval algorithms and their orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .context_builder import format_business_context, format_matches_for_prompt
from .knowledge_search_service import KnowledgeSearchService
from .lexical_matcher import LexicalMatcher
from .semantic_matcher import SemanticMatcher, cosine_similarity

__all__ = [
    "KnowledgeSearchService",
    "LexicalMatcher",
    "SemanticMatcher",
    "cosine_similarity",
    "format_business_context",
    "format_matches_for_prompt",
]
