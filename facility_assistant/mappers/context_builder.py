from facility_assistant.schemas.facility import CanonicalFacilityRecord

_ASSISTANT_INSTRUCTIONS = (
    "You should respond in a friendly, helpful manner and provide accurate "
    "information about the facility. Always encourage users to visit or contact "
    "the facility for bookings. If asked about something not covered in the "
    "information above, politely mention that you can help them get in touch "
    "with the facility directly.\n\n"
    "IMPORTANT: Always provide specific, accurate information from the context "
    "above. Don't make up pricing, timings, or other details not provided."
)


def _bullets(items: list[str]) -> str:
    return "\n".join(f"- {item}" for item in items) if items else "- None listed"


def _format_basic_info(record: CanonicalFacilityRecord) -> str:
    info = record.basic_info
    rows = [
        f"- Name: {info.name}",
        f"- Location: {info.locality}",
        f"- Address: {info.address}",
        f"- Phone: {info.phone}",
        f"- Rating: {info.rating:g}/5 ({info.review_count} reviews)",
        f"- Operating Hours: {info.hours}",
    ]
    if info.coordinates:
        rows.append(f"- Coordinates: {info.coordinates.lat}, {info.coordinates.lng}")
    return "BASIC INFORMATION:\n" + "\n".join(rows)


def _format_pricing(pricing: dict[str, str]) -> str:
    rows = [f"{sport.title()}: {price}" for sport, price in pricing.items()]
    return "PRICING:\n" + _bullets(rows)


def _format_coaching(record: CanonicalFacilityRecord) -> str:
    coaching = record.coaching
    return (
        "COACHING PROGRAMS:\n"
        f"- Available: {'Yes' if coaching.available else 'No'}\n"
        f"- Schedule: {', '.join(coaching.schedule) or 'Contact the facility'}\n"
        f"- Programs: {', '.join(coaching.programs) or 'Contact the facility'}"
    )


def _format_booking(record: CanonicalFacilityRecord) -> str:
    rows = [
        f"Book via {c.name}: {c.url}" if c.url else f"Book via {c.name} platform"
        for c in record.booking_channels
    ]
    rows.append(f"Direct booking: Call {record.basic_info.phone}")
    return "BOOKING INFORMATION:\n" + _bullets(rows)


def build_grounding_context(record: CanonicalFacilityRecord) -> str:
    """Render every field of the canonical record as a plain-text fact sheet."""
    sections = [
        f"You are an AI assistant for {record.basic_info.name}, a multi-sport "
        f"facility in {record.basic_info.locality}. Here's the comprehensive "
        "information about our facility:",
        _format_basic_info(record),
        "ABOUT:\n" + record.description,
        "SPORTS AVAILABLE:\n" + _bullets(record.sports),
        _format_pricing(record.pricing),
        "AMENITIES:\n" + _bullets(record.amenities),
        _format_coaching(record),
        _format_booking(record),
        "KEY FEATURES:\n" + _bullets(record.highlights),
    ]
    if record.images:
        sections.append("PHOTOS:\n" + _bullets(record.images))
    sections.append(
        f"Information last updated: {record.reconciled_at.strftime('%Y-%m-%d %H:%M UTC')}"
    )
    return "\n\n".join(sections)


def build_chat_prompt(context: str, user_message: str) -> tuple[str, str]:
    """Return (system_prompt, user_prompt) for a chat answer."""
    system_prompt = f"{context}\n\n{_ASSISTANT_INSTRUCTIONS}"
    user_prompt = (
        f"User Question: {user_message}\n\n"
        "Please provide a helpful and informative response. Include relevant "
        "details like pricing, timings, contact information, or booking "
        "instructions when appropriate. Keep your response conversational "
        "and encouraging."
    )
    return system_prompt, user_prompt


def build_summary_prompt(record: CanonicalFacilityRecord) -> str:
    info = record.basic_info
    return (
        f"Based on the following information about {info.name}, create a "
        "concise and engaging summary:\n\n"
        f"Facility: {info.name}\n"
        f"Location: {info.locality}\n"
        f"Sports: {', '.join(record.sports)}\n"
        f"Rating: {info.rating:g}/5\n"
        f"Hours: {info.hours}\n\n"
        "Create a 2-3 sentence summary that highlights the key features and "
        "appeal of this sports facility."
    )


def fallback_summary(record: CanonicalFacilityRecord) -> str:
    info = record.basic_info
    return (
        f"{info.name} is a premier multi-sport facility in {info.locality}, "
        f"offering {', '.join(record.sports)} with professional coaching and "
        "modern amenities."
    )
