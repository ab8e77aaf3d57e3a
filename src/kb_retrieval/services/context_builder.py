"""Prompt text built from knowledge-base entries and search matches."""

from collections.abc import Sequence

from kb_retrieval.entities import KnowledgeEntryEntity, MatchCandidateEntity

DEFAULT_CONTEXT_MAX_ENTRIES = 50


def category_heading(category: str) -> str:
    """Turn a category label like "check_in" into "Check in"."""
    if not category:
        return "General"
    return category[:1].upper() + category[1:].replace("_", " ", 1)


def format_business_context(
    entries: Sequence[KnowledgeEntryEntity],
    max_entries: int = DEFAULT_CONTEXT_MAX_ENTRIES,
) -> str:
    """Format a tenant's whole knowledge base as prompt context.

    Entries are ordered by category then priority (highest first), capped
    at ``max_entries`` and grouped under one heading per category.

    Args:
        entries: Active entries of one tenant and language
        max_entries: Cap on the number of entries included

    Returns:
        The context block, or "" when there are no entries
    """
    ordered = sorted(entries, key=lambda e: (e.category or "", -(e.priority or 0)))[:max_entries]
    if not ordered:
        return ""

    grouped: dict[str, list[str]] = {}
    for entry in ordered:
        grouped.setdefault(entry.category or "", []).append(f"Q: {entry.question}\nA: {entry.answer}")

    sections = [
        f"## {category_heading(category)}\n" + "\n\n".join(qas) for category, qas in grouped.items()
    ]
    return "Business Knowledge Base:\n\n" + "\n\n".join(sections)


def format_matches_for_prompt(matches: Sequence[MatchCandidateEntity]) -> str:
    """Format search matches as the knowledge section of a system prompt.

    Returns:
        Numbered Q/A pairs, or "" when there are no matches
    """
    if not matches:
        return ""

    lines = ["Relevant knowledge base entries:"]
    for i, match in enumerate(matches, start=1):
        lines.append(f"{i}. Q: {match.question}\n   A: {match.answer}")
    return "\n".join(lines)
