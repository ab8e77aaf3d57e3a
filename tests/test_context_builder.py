"""
Tests for prompt text built from entries and matches.
"""

from conftest import make_entry
from kb_retrieval.entities import MatchCandidateEntity
from kb_retrieval.services import format_business_context, format_matches_for_prompt
from kb_retrieval.services.context_builder import category_heading


def test_category_heading():
    assert category_heading("check_in") == "Check in"
    assert category_heading("house_rules") == "House rules"
    assert category_heading("what_to_bring") == "What to_bring"
    assert category_heading("parking") == "Parking"
    assert category_heading("") == "General"


def test_business_context_groups_by_category():
    entries = [
        make_entry("Is parking available?", category="parking", answer="Valet is $35/day."),
        make_entry("Do you have EV chargers?", category="parking", priority=5, answer="Yes, two."),
        make_entry("What time is check-in?", category="check_in", answer="3:00 PM."),
    ]

    context = format_business_context(entries)

    assert context == (
        "Business Knowledge Base:\n\n"
        "## Check in\n"
        "Q: What time is check-in?\nA: 3:00 PM.\n\n"
        "## Parking\n"
        "Q: Do you have EV chargers?\nA: Yes, two.\n\n"
        "Q: Is parking available?\nA: Valet is $35/day."
    )


def test_business_context_caps_entries():
    entries = [make_entry(f"Question {i}?", category="faq", priority=i) for i in range(10)]

    context = format_business_context(entries, max_entries=3)

    assert context.count("Q: ") == 3
    assert "Q: Question 9?" in context
    assert "Q: Question 6?" not in context


def test_business_context_empty():
    assert format_business_context([]) == ""


def test_format_matches_for_prompt():
    matches = [
        MatchCandidateEntity("a", "What time is check-in?", "3:00 PM.", "check_in", 49),
        MatchCandidateEntity("b", "Is parking available?", "Yes.", "parking", 17),
    ]

    assert format_matches_for_prompt(matches) == (
        "Relevant knowledge base entries:\n"
        "1. Q: What time is check-in?\n   A: 3:00 PM.\n"
        "2. Q: Is parking available?\n   A: Yes."
    )


def test_format_matches_for_prompt_empty():
    assert format_matches_for_prompt([]) == ""
