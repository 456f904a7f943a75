"""Booking form data model."""

from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator

from rental_checkout.errors import (
    INVALID_HOURS_MESSAGE,
    REQUIRED_FIELDS_MESSAGE,
    ValidationError,
)

DOCENT_ROLE = "docent"

# Wire names of the fields that must be present and truthy.
REQUIRED_FIELDS = ("name", "email", "role", "date", "startTime", "hours")


def _is_blank(value: Any) -> bool:
    if isinstance(value, str):
        return not value.strip()
    return not value


class BookingRequest(BaseModel):
    """Validated rental booking submitted by the booking form."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    email: str
    phone: str = ""
    role: str
    date: str
    start_time: str = Field(alias="startTime")
    hours: int

    @field_validator("name", "email", "phone", "role", "date", "start_time", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("hours", mode="before")
    @classmethod
    def _whole_positive_hours(cls, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError("hours must be a number")
        if isinstance(value, str):
            value = value.strip()
            if not value.isdigit():
                raise ValueError("hours must be a whole number")
            value = int(value)
        elif isinstance(value, float):
            if not value.is_integer():
                raise ValueError("hours must be a whole number")
            value = int(value)
        elif not isinstance(value, int):
            raise ValueError("hours must be a number")
        if value < 1:
            raise ValueError("hours must be at least 1")
        return value

    @property
    def is_docent(self) -> bool:
        return self.role == DOCENT_ROLE

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "BookingRequest":
        """Build a booking from a decoded form body.

        Raises:
            ValidationError: a required field is missing or falsy, or
                ``hours`` is not a whole positive number.
        """
        missing = [name for name in REQUIRED_FIELDS if _is_blank(payload.get(name))]
        if missing:
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)

        data = {name: payload.get(name) for name in REQUIRED_FIELDS}
        data["phone"] = payload.get("phone")
        try:
            return cls.model_validate(data)
        except pydantic.ValidationError as exc:
            if any(err["loc"][:1] == ("hours",) for err in exc.errors()):
                raise ValidationError(INVALID_HOURS_MESSAGE) from exc
            raise ValidationError(REQUIRED_FIELDS_MESSAGE) from exc

    def summary(self) -> str:
        """Short description for logs. Leaves out contact details."""
        return f"role={self.role} date={self.date} start={self.start_time} hours={self.hours}"
