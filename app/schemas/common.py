from typing import Annotated, Optional

from pydantic import StringConstraints, field_validator

from app.utils.phone import normalize_phone

# Text fields are stripped before their length is checked, so blanks fail min_length
PersonName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]
StoreName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=150)]
PlaceName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
OptionalPlaceName = Optional[Annotated[str, StringConstraints(strip_whitespace=True, max_length=100)]]


def phone_field(*fields):
    """Build a reusable validator that normalizes phone numbers."""

    def _check(cls, value):
        if value is None:
            return value
        return normalize_phone(value)

    return field_validator(*fields)(_check)


def blank_to_none(*fields):
    """Treat blank optional strings as absent."""

    def _check(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    return field_validator(*fields, mode="before")(_check)
