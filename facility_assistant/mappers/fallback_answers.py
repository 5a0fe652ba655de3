from collections.abc import Callable

from facility_assistant.schemas.facility import CanonicalFacilityRecord


def _channel_names(record: CanonicalFacilityRecord) -> str:
    return " or ".join(c.name for c in record.booking_channels) or "our booking partners"


def _pricing_answer(text: str, record: CanonicalFacilityRecord) -> str:
    phone = record.basic_info.phone
    asked = {sport: price for sport, price in record.pricing.items() if sport in text}
    prices = asked or record.pricing
    if not prices:
        return (
            "I'm currently experiencing technical difficulties and don't have "
            f"pricing details at hand. Please contact us directly at {phone}."
        )
    lines = "\n".join(f"• {sport.title()}: {price}" for sport, price in prices.items())
    return (
        "I'm currently experiencing technical difficulties, but I can share our "
        f"court pricing:\n{lines}\n\nFor detailed pricing information, please "
        f"contact us directly at {phone} or visit our {_channel_names(record)} page."
    )


def _hours_answer(text: str, record: CanonicalFacilityRecord) -> str:
    info = record.basic_info
    return (
        f"I'm having some technical issues right now, but {info.name} is open "
        f"from {info.hours} daily. For current availability and bookings, "
        f"please call {info.phone}."
    )


def _address_answer(text: str, record: CanonicalFacilityRecord) -> str:
    info = record.basic_info
    return (
        "I'm experiencing connectivity issues, but here's our location: "
        f"{info.address}. You can also find us on Google Maps or contact us at "
        f"{info.phone} for directions."
    )


def _booking_answer(text: str, record: CanonicalFacilityRecord) -> str:
    info = record.basic_info
    channels = "\n".join(f"• {c.name} platform" for c in record.booking_channels)
    return (
        "I'm having technical difficulties right now, but you can book our "
        f"courts through:\n{channels}\n• Direct booking: {info.phone}\n\n"
        f"Our courts are available from {info.hours} daily."
    )


def _coaching_answer(text: str, record: CanonicalFacilityRecord) -> str:
    coaching = record.coaching
    phone = record.basic_info.phone
    if not coaching.available:
        return (
            "I'm experiencing some technical issues. We don't currently list "
            f"coaching programs, but please contact us at {phone} to ask."
        )
    programs = ", ".join(coaching.programs) or "several programs"
    schedule = "; ".join(coaching.schedule)
    answer = (
        "I'm experiencing some technical issues, but we do offer coaching "
        f"programs: {programs}."
    )
    if schedule:
        answer += f" Sessions run {schedule}."
    return answer + f" For details, please contact us at {phone}."


def _contact_card(text: str, record: CanonicalFacilityRecord) -> str:
    info = record.basic_info
    return (
        "I apologize, but I'm experiencing technical difficulties right now. "
        f"For immediate assistance with information about {info.name}, please "
        "contact us directly:\n\n"
        f"📞 Phone: {info.phone}\n"
        f"📍 Address: {info.address}\n"
        f"⏰ Hours: {info.hours}\n\n"
        f"You can also book courts through {_channel_names(record)}. "
        "Thank you for your patience!"
    )


Template = Callable[[str, CanonicalFacilityRecord], str]

# Checked in order; the first rule with a keyword in the question wins
FALLBACK_RULES: tuple[tuple[frozenset[str], Template], ...] = (
    (frozenset({"price", "cost", "fee"}), _pricing_answer),
    (frozenset({"timing", "hours", "open"}), _hours_answer),
    (frozenset({"location", "address", "direction"}), _address_answer),
    (frozenset({"book", "reserve", "availability"}), _booking_answer),
    (frozenset({"coach", "training", "class"}), _coaching_answer),
)


def fallback_answer(user_text: str, record: CanonicalFacilityRecord) -> str:
    """Deterministic answer used when the generator is unavailable."""
    text = (user_text or "").lower()
    for keywords, template in FALLBACK_RULES:
        if any(keyword in text for keyword in keywords):
            return template(text, record)
    return _contact_card(text, record)
