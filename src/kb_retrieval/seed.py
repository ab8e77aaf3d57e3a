"""Starter knowledge bases offered to new tenants, by business type."""

import uuid

from kb_retrieval.entities import KnowledgeEntryEntity
from kb_retrieval.protocols import KnowledgeStore

# category -> (question, answer, keywords)
STARTER_KNOWLEDGE: dict[str, dict[str, tuple[str, str, str]]] = {
    "hotel": {
        "check_in": (
            "What time is check-in?",
            "Check-in time is 3:00 PM and check-out is 11:00 AM. "
            "Early check-in may be available upon request.",
            "check in, checkin, arrival, check-in time",
        ),
        "amenities": (
            "What amenities do you offer?",
            "We offer complimentary WiFi, outdoor pool, fitness center, and on-site restaurant. "
            "Room service is available from 6 AM to 10 PM.",
            "amenities, facilities, pool, gym, wifi, internet",
        ),
        "parking": (
            "Is parking available?",
            "We offer both self-parking ($25/day) and valet parking ($35/day). "
            "Electric vehicle charging stations are available.",
            "parking, car, valet",
        ),
        "location": (
            "Where are you located?",
            "We are located in the heart of Waikiki, just 2 blocks from the beach "
            "and walking distance to shopping and dining.",
            "location, address, directions, how to get",
        ),
        "breakfast": (
            "Is breakfast included?",
            "Continental breakfast is served from 6:30 AM to 10:30 AM in our Ocean View Restaurant. "
            "Room service is also available.",
            "breakfast, food, dining, restaurant",
        ),
    },
    "tour": {
        "availability": (
            "When do tours run?",
            "Tours run daily. Morning tours depart at 8:00 AM and afternoon tours at 1:00 PM. "
            "Advance booking is recommended.",
            "available, book, reserve, schedule",
        ),
        "duration": (
            "How long is the tour?",
            "Our standard tour lasts approximately 4 hours, including transportation and photo stops.",
            "how long, duration, time, hours",
        ),
        "pickup": (
            "Do you offer hotel pickup?",
            "We offer complimentary pickup from most Waikiki hotels. "
            "Pickup begins 30 minutes before tour departure.",
            "pickup, pick up, hotel, transport",
        ),
        "what_to_bring": (
            "What should I bring?",
            "Please bring sunscreen, comfortable walking shoes, camera, and water. "
            "We provide snacks and additional water.",
            "bring, need, required, wear",
        ),
        "cancellation": (
            "What is your cancellation policy?",
            "Free cancellation up to 24 hours before tour. "
            "Full refund for weather-related cancellations.",
            "cancel, refund, reschedule",
        ),
    },
    "rental": {
        "check_in": (
            "How do I check in?",
            "Self check-in available after 3:00 PM. "
            "Access code will be sent 24 hours before arrival.",
            "check in, arrival, key, access",
        ),
        "house_rules": (
            "What are the house rules?",
            "No smoking, no parties, no pets. Quiet hours 10 PM - 8 AM. "
            "Maximum occupancy must be observed.",
            "rules, policy, pets, smoking, parties",
        ),
        "amenities": (
            "What amenities are included?",
            "Full kitchen, washer/dryer, high-speed WiFi, beach gear, and dedicated parking spot included.",
            "amenities, kitchen, laundry, wifi",
        ),
        "beach": (
            "How far is the beach?",
            "The property is a 5-minute walk to the beach. Beach chairs, umbrella, and cooler provided.",
            "beach, ocean, distance, walk",
        ),
        "checkout": (
            "What time is checkout?",
            "Check-out is at 10:00 AM. Please start dishwasher, take out trash, "
            "and lock all doors upon departure.",
            "checkout, check out, departure, leaving",
        ),
    },
}


def build_starter_entries(
    tenant_id: str,
    business_type: str,
    language: str = "en",
) -> list[KnowledgeEntryEntity]:
    """Build the starter entries for a business type.

    Args:
        tenant_id: The tenant receiving the entries
        business_type: "hotel", "tour" or "rental"
        language: Language code stamped on the entries

    Returns:
        Fresh entities with new ids

    Raises:
        ValueError: If the business type has no starter set
    """
    try:
        topics = STARTER_KNOWLEDGE[business_type]
    except KeyError:
        raise ValueError(
            f"No starter knowledge for business type {business_type!r}, "
            f"expected one of {sorted(STARTER_KNOWLEDGE)}"
        ) from None

    return [
        KnowledgeEntryEntity(
            id=uuid.uuid4().hex,
            tenant_id=tenant_id,
            question=question,
            answer=answer,
            category=category,
            keywords=keywords,
            language=language,
        )
        for category, (question, answer, keywords) in topics.items()
    ]


def seed_starter_entries(
    repository: KnowledgeStore,
    tenant_id: str,
    business_type: str,
    language: str = "en",
) -> int:
    """Save the starter entries for a business type.

    Returns:
        Number of entries stored
    """
    entries = build_starter_entries(tenant_id, business_type, language)
    for entry in entries:
        repository.save(entry)
    return len(entries)
