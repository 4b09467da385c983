import re


_PHONE_RE = re.compile(r"^\+?\d{7,15}$")


def normalize_phone(phone: str) -> str:
    """Normalize a phone number to digits with an optional leading ``+``.

    Spaces, dashes, dots and parentheses are stripped. Raises ValueError
    if the remainder is not 7 to 15 digits long.
    """
    cleaned = re.sub(r"[\s\-().]", "", phone or "")
    if not _PHONE_RE.match(cleaned):
        raise ValueError("phone must be 7 to 15 digits with an optional leading +")
    return cleaned


__all__ = ["normalize_phone"]
