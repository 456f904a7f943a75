"""Client reference strings linking a checkout session back to its booking."""

from urllib.parse import unquote

from rental_checkout.schemas.booking_schema import BookingRequest

SEPARATOR = "|"


def _escape(value: str) -> str:
    # Only the escape character and the separator are encoded; the
    # reference stays readable and short (Stripe caps it at 200 characters).
    return value.replace("%", "%25").replace(SEPARATOR, "%7C")


def build_client_reference(booking: BookingRequest) -> str:
    """Join the booking fields as ``name|role|date|start|<n>h|phone``."""
    parts = [
        booking.name,
        booking.role,
        booking.date,
        booking.start_time,
        f"{booking.hours}h",
        booking.phone,
    ]
    return SEPARATOR.join(_escape(part) for part in parts)


def parse_client_reference(reference: str) -> list[str]:
    """Split a reference built by ``build_client_reference`` into its fields."""
    return [unquote(part) for part in reference.split(SEPARATOR)]
