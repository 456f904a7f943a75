"""
Hourly rental pricing.

Amounts are integer minor currency units (cents) throughout; only
``format_amount`` turns them into a display string.
"""

from dataclasses import dataclass
from decimal import Decimal

from rental_checkout.config import PricingConfig
from rental_checkout.schemas.booking_schema import DOCENT_ROLE

DOCENT_LABEL = "Docent"
LEERLING_LABEL = "Leerling"


@dataclass(frozen=True)
class Quote:
    """Price of one booking."""

    unit_amount: int
    quantity: int
    role_label: str

    @property
    def total_amount(self) -> int:
        return self.unit_amount * self.quantity

    @property
    def total_display(self) -> str:
        return format_amount(self.total_amount)


def unit_price(role: str, pricing: PricingConfig) -> int:
    """Hourly rate for a role: the docent rate for docents, the leerling rate otherwise."""
    if role == DOCENT_ROLE:
        return pricing.docent_rate_cents
    return pricing.leerling_rate_cents


def role_label(role: str) -> str:
    return DOCENT_LABEL if role == DOCENT_ROLE else LEERLING_LABEL


def format_amount(cents: int) -> str:
    """Format cents as a two-decimal string, e.g. 4500 -> "45.00"."""
    return f"{Decimal(cents) / 100:.2f}"


def quote(role: str, hours: int, pricing: PricingConfig) -> Quote:
    return Quote(
        unit_amount=unit_price(role, pricing),
        quantity=hours,
        role_label=role_label(role),
    )
