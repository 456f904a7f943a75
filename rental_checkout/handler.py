"""
Checkout request handler.

Turns one booking form submission into a Stripe Checkout redirect URL:
validate the form, price it, hand a session request to the gateway, and
answer with ``{"url": ...}`` or ``{"error": ...}``. Every failure is
converted to a response here; nothing is retried.

``handler(event, context)`` is the serverless entry point.
"""

import base64
import binascii
import json
from functools import lru_cache
from typing import Any, Optional, Union

from rental_checkout.config import AppConfig, load_config
from rental_checkout.errors import (
    CheckoutError,
    GENERIC_FAILURE_MESSAGE,
    GatewayError,
    MalformedRequestError,
    MethodNotAllowedError,
)
from rental_checkout.gateway import PaymentGateway, StripeGateway
from rental_checkout.logging_context import (
    get_request_logger,
    new_request_id,
    set_request_id,
)
from rental_checkout.pricing import quote
from rental_checkout.reference import build_client_reference
from rental_checkout.responses import (
    Response,
    error_response,
    json_response,
    text_response,
)
from rental_checkout.schemas.booking_schema import BookingRequest
from rental_checkout.schemas.checkout_schema import CheckoutSessionRequest, LineItem

logger = get_request_logger(__name__)

CREATE_METHOD = "POST"


def parse_body(body: Union[str, bytes, None]) -> dict[str, Any]:
    """Decode a JSON object body.

    Raises:
        MalformedRequestError: The body is empty, not JSON, or not an object.
    """
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedRequestError() from exc
    if not body:
        raise MalformedRequestError()
    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as exc:
        # Oversized integer literals raise a plain ValueError, deep nesting RecursionError.
        raise MalformedRequestError() from exc
    if not isinstance(data, dict):
        raise MalformedRequestError()
    return data


def build_session_request(
    booking: BookingRequest, config: AppConfig
) -> CheckoutSessionRequest:
    """Price a booking and describe the checkout session for it."""
    price = quote(booking.role, booking.hours, config.pricing)
    return CheckoutSessionRequest(
        payment_method_types=list(config.stripe.payment_method_types),
        mode="payment",
        customer_email=booking.email,
        client_reference_id=build_client_reference(booking),
        metadata={
            "naam": booking.name,
            "email": booking.email,
            "telefoon": booking.phone,
            "rol": booking.role,
            "datum": booking.date,
            "starttijd": booking.start_time,
            "aantal_uur": str(booking.hours),
            "totaalbedrag": price.total_display,
        },
        line_items=[
            LineItem(
                currency=config.pricing.currency,
                unit_amount=price.unit_amount,
                product_name=f"{config.pricing.product_name} — {price.role_label}",
                description=(
                    f"Verhuur {booking.hours} uur op {booking.date} "
                    f"vanaf {booking.start_time}"
                ),
                quantity=price.quantity,
            )
        ],
        success_url=config.site.success_url,
        cancel_url=config.site.cancel_url,
    )


class CheckoutRequestHandler:
    """Validates booking submissions and opens checkout sessions for them."""

    def __init__(
        self,
        config: AppConfig,
        gateway: Optional[PaymentGateway] = None,
    ) -> None:
        self.config = config
        self.gateway = gateway if gateway is not None else StripeGateway(config.stripe)

    def handle(self, method: str, body: Union[str, bytes, None]) -> Response:
        try:
            return self._create_checkout(method, body)
        except MethodNotAllowedError as exc:
            logger.warning("Rejected %s request", exc.method or "unknown")
            return text_response(exc.status_code, exc.public_message)
        except GatewayError as exc:
            logger.error("Checkout session failed: %s", exc.public_message)
            return error_response(exc.status_code, exc.public_message)
        except CheckoutError as exc:
            if exc.status_code >= 500:
                logger.error("Checkout failed: %s", type(exc).__name__)
            else:
                logger.warning(
                    "Rejected booking (%s): %s",
                    type(exc).__name__,
                    exc.__cause__ or exc.public_message,
                )
            return error_response(exc.status_code, exc.public_message)
        except Exception:
            logger.exception("Unexpected error while creating checkout session")
            return error_response(500, GENERIC_FAILURE_MESSAGE)

    def _create_checkout(self, method: str, body: Union[str, bytes, None]) -> Response:
        if (method or "").upper() != CREATE_METHOD:
            raise MethodNotAllowedError(method)

        booking = BookingRequest.from_payload(parse_body(body))
        session_request = build_session_request(booking, self.config)
        url = self.gateway.create_session(session_request)

        logger.info(
            "Checkout session ready: %s total=%s",
            booking.summary(),
            session_request.metadata["totaalbedrag"],
        )
        return json_response(200, {"url": url})


def _event_method(event: dict[str, Any]) -> str:
    method = event.get("httpMethod")
    if method:
        return str(method)
    http = (event.get("requestContext") or {}).get("http") or {}
    return str(http.get("method") or "")


def _event_body(event: dict[str, Any]) -> Union[str, bytes, None]:
    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError):
            return None
    return body


@lru_cache(maxsize=1)
def _default_handler() -> CheckoutRequestHandler:
    return CheckoutRequestHandler(load_config())


def handler(event: dict[str, Any], context: Any = None) -> Response:
    """Serverless entry point (Netlify / API Gateway event shape)."""
    set_request_id(getattr(context, "aws_request_id", None) or new_request_id())
    try:
        checkout = _default_handler()
    except ValueError:
        logger.exception("Invalid configuration")
        return error_response(500, GENERIC_FAILURE_MESSAGE)
    return checkout.handle(_event_method(event), _event_body(event))
