"""Checkout session data models sent to the payment gateway."""

from typing import Any

from pydantic import BaseModel, Field


class LineItem(BaseModel):
    """One priced entry: unit amount times quantity."""

    currency: str
    unit_amount: int = Field(gt=0)
    product_name: str
    description: str
    quantity: int = Field(gt=0)

    @property
    def total_amount(self) -> int:
        return self.unit_amount * self.quantity

    def to_stripe_params(self) -> dict[str, Any]:
        return {
            "price_data": {
                "currency": self.currency,
                "unit_amount": self.unit_amount,
                "product_data": {
                    "name": self.product_name,
                    "description": self.description,
                },
            },
            "quantity": self.quantity,
        }


class CheckoutSessionRequest(BaseModel):
    """Everything needed to open a hosted, one-off payment checkout."""

    payment_method_types: list[str]
    mode: str = "payment"
    customer_email: str
    client_reference_id: str
    metadata: dict[str, str] = Field(default_factory=dict)
    line_items: list[LineItem] = Field(min_length=1)
    success_url: str
    cancel_url: str

    def to_stripe_params(self) -> dict[str, Any]:
        """Render the request as ``checkout.sessions.create`` parameters."""
        return {
            "payment_method_types": list(self.payment_method_types),
            "mode": self.mode,
            "customer_email": self.customer_email,
            "client_reference_id": self.client_reference_id,
            "metadata": dict(self.metadata),
            "line_items": [item.to_stripe_params() for item in self.line_items],
            "success_url": self.success_url,
            "cancel_url": self.cancel_url,
        }
