"""Error taxonomy for the checkout handler.

Each error knows the HTTP status it maps to and the message the caller
is allowed to see. Internal detail stays in the exception chain and logs.
"""

from typing import Optional

REQUIRED_FIELDS_MESSAGE = "Alle verplichte velden moeten ingevuld zijn."
INVALID_HOURS_MESSAGE = "Het aantal uur moet een positief geheel getal zijn."
MALFORMED_BODY_MESSAGE = "Ongeldig verzoek: de inhoud is geen geldig JSON-object."
GATEWAY_TIMEOUT_MESSAGE = "De betaalprovider reageert niet. Probeer het later opnieuw."
GENERIC_FAILURE_MESSAGE = "Er ging iets mis bij het aanmaken van de betaling."


class CheckoutError(Exception):
    """Base class for errors converted to a response at the handler boundary."""

    status_code: int = 500
    default_message: str = GENERIC_FAILURE_MESSAGE

    def __init__(self, message: Optional[str] = None) -> None:
        self.public_message = message or self.default_message
        super().__init__(self.public_message)


class MethodNotAllowedError(CheckoutError):
    status_code = 405
    default_message = "Method Not Allowed"

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__()


class MalformedRequestError(CheckoutError):
    """The body is not a JSON object."""

    status_code = 400
    default_message = MALFORMED_BODY_MESSAGE


class ValidationError(CheckoutError):
    """A required field is missing or unusable. The message is shown to the user."""

    status_code = 400
    default_message = REQUIRED_FIELDS_MESSAGE


class ConfigurationError(CheckoutError):
    status_code = 500


class GatewayError(CheckoutError):
    """The payment provider rejected or failed the session request.

    ``public_message`` is the provider's user-facing text, e.g.
    "card declined".
    """

    status_code = 500


class GatewayTimeoutError(GatewayError):
    """The provider could not be reached in time. Safe to retry."""

    status_code = 504
    default_message = GATEWAY_TIMEOUT_MESSAGE
