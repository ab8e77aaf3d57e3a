"""Keyword, substring and priority scoring of knowledge-base entries.

A crude, fast and explainable heuristic: every signal adds to one integer
score, nothing is normalized and there is no early exit.
"""

from collections.abc import Sequence

from kb_retrieval.entities import LEXICAL, KnowledgeEntryEntity, MatchCandidateEntity

EXACT_MATCH_POINTS = 100
QUESTION_CONTAINS_QUERY_POINTS = 50
KEYWORD_MATCH_POINTS = 30
KEYWORD_WORD_POINTS = 10
WORD_EXACT_POINTS = 5
WORD_PARTIAL_POINTS = 2
PRIORITY_WEIGHT = 5

DEFAULT_QUALITY_BAR = 30


def _related(a: str, b: str) -> bool:
    return a in b or b in a


def split_keywords(keywords: str | None) -> list[str]:
    """Split a comma-separated keyword string into trimmed, lower-cased terms.

    Empty fragments are dropped: an empty keyword is a substring of
    everything and would score every query.
    """
    if not keywords:
        return []
    return [k for k in (part.strip() for part in keywords.lower().split(",")) if k]


class LexicalMatcher:
    """Scores entries against a query without any external calls.

    Example:
        ```python
        matcher = LexicalMatcher()
        matches = matcher.match(entries, "what time is check in", limit=3)
        if matcher.is_insufficient(matches):
            ...  # fall back to semantic matching
        ```
    """

    def __init__(self, quality_bar: int | None = None) -> None:
        """Initialize the matcher.

        Args:
            quality_bar: Top score below which results count as insufficient.
        """
        self._quality_bar = DEFAULT_QUALITY_BAR if quality_bar is None else quality_bar

    @property
    def quality_bar(self) -> int:
        """Get the quality bar."""
        return self._quality_bar

    def score(self, entry: KnowledgeEntryEntity, query: str) -> int:
        """Score one entry against a query.

        Args:
            entry: The knowledge-base entry
            query: Raw guest question

        Returns:
            The additive relevance score
        """
        query = query.strip().lower()
        question = (entry.question or "").strip().lower()
        query_words = query.split()
        score = 0

        if query:
            if question == query:
                score += EXACT_MATCH_POINTS
            if query in question:
                score += QUESTION_CONTAINS_QUERY_POINTS

            for keyword in split_keywords(entry.keywords):
                if _related(keyword, query):
                    score += KEYWORD_MATCH_POINTS
                for word in query_words:
                    if _related(keyword, word):
                        score += KEYWORD_WORD_POINTS

            question_words = question.split()
            for query_word in query_words:
                for question_word in question_words:
                    if question_word == query_word:
                        score += WORD_EXACT_POINTS
                    elif _related(question_word, query_word):
                        score += WORD_PARTIAL_POINTS

        score += (entry.priority or 0) * PRIORITY_WEIGHT
        return score

    def match(
        self,
        entries: Sequence[KnowledgeEntryEntity],
        query: str,
        limit: int = 3,
    ) -> list[MatchCandidateEntity]:
        """Rank entries for a query.

        Args:
            entries: Active entries of one tenant and language
            query: Raw guest question
            limit: Maximum number of matches to return

        Returns:
            Matches with score > 0, best first
        """
        if not query or not query.strip():
            return []

        scored = []
        for entry in entries:
            score = self.score(entry, query)
            if score > 0:
                scored.append(
                    MatchCandidateEntity(
                        entry_id=entry.id,
                        question=entry.question,
                        answer=entry.answer,
                        category=entry.category or "",
                        score=score,
                        source=LEXICAL,
                    )
                )

        scored.sort(key=lambda m: m.score, reverse=True)
        return scored[:limit]

    def is_insufficient(self, matches: Sequence[MatchCandidateEntity]) -> bool:
        """Check whether lexical results are too weak to use on their own.

        Args:
            matches: Output of ``match``, best first

        Returns:
            True when there are no matches or the top score is below the quality bar
        """
        return not matches or matches[0].score < self._quality_bar
