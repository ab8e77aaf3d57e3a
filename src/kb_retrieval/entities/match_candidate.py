"""Match candidate domain entity."""

from dataclasses import dataclass

LEXICAL = "lexical"
SEMANTIC = "semantic"


@dataclass(frozen=True)
class MatchCandidateEntity:
    """A scored knowledge-base entry produced by one of the matchers.

    Scores are only comparable within one source: lexical scores are an
    unbounded additive integer, semantic scores are cosine similarity x 100.

    Attributes:
        entry_id: Id of the source KnowledgeEntryEntity
        question: The entry's question
        answer: The entry's answer
        category: The entry's category
        score: Relevance score on the source's own scale
        source: Which matcher produced it ("lexical" or "semantic")
    """

    entry_id: str
    question: str
    answer: str
    category: str
    score: int
    source: str = LEXICAL
