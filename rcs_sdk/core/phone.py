"""Phone Numbers — E.164 validation and the US-centric reformatting heuristic.

Invariants:
    - is_valid_e164: "+" then 2–15 digits, first digit 1–9, nothing else
    - format_phone_number never guesses: returns None when it cannot reformat confidently
    - Pure functions, no I/O

Design Decisions:
    - US-only heuristic kept as-is: capability lookups downstream depend on its
      exact output, so non-US numbers fall through unchanged (ADR: behaviour parity)
"""

import re

_E164 = re.compile(r"^\+[1-9]\d{1,14}$")
_NOT_DIGIT_OR_PLUS = re.compile(r"[^\d+]")


def is_valid_e164(phone_number: str) -> bool:
    """True iff phone_number is strictly E.164 formatted."""
    return bool(_E164.fullmatch(phone_number))


def format_phone_number(phone_number: str, country_code: str = "US") -> str | None:
    """Best-effort reformat to E.164. None when no confident reformat exists."""
    cleaned = _NOT_DIGIT_OR_PLUS.sub("", phone_number)

    if is_valid_e164(cleaned):
        return cleaned

    if country_code == "US":
        digits_only = cleaned[1:] if cleaned.startswith("+") else cleaned
        if len(digits_only) == 10:
            return f"+1{digits_only}"
        if len(digits_only) == 11 and digits_only.startswith("1"):
            return f"+{digits_only}"

    return None
