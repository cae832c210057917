"""Field validators for the transfer wizard.

Every function here is pure and total: bad input yields ``False`` (or
``None`` for :func:`parse_amount`), never an exception.
"""

import re
from datetime import date
from decimal import Decimal, InvalidOperation

import phonenumbers


_CARD_RE = re.compile(r"[0-9]{13,19}")
_CVV_RE = re.compile(r"[0-9]{3,4}")
_BANK_ACCOUNT_RE = re.compile(r"[0-9]{6,20}")
_MONTH_RE = re.compile(r"[0-9]{1,2}")
_YEAR_RE = re.compile(r"[0-9]{2,4}")
_WHITESPACE_RE = re.compile(r"\s+")
_NON_DIGIT_RE = re.compile(r"[^0-9]")


def _luhn_ok(digits: str) -> bool:
    total = 0

    # Double every second digit counting from the rightmost one
    for i, ch in enumerate(reversed(digits)):
        digit = int(ch)
        if i % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit

    return total % 10 == 0


def validate_card_number(value: str) -> bool:
    """Check length (13-19 digits, whitespace ignored) and the Luhn checksum."""

    clean = _WHITESPACE_RE.sub("", value or "")

    if not _CARD_RE.fullmatch(clean):
        return False

    return _luhn_ok(clean)


def validate_expiry(value: str, today: date | None = None) -> bool:
    """Accept ``MM/YY`` or ``MM/YYYY`` expiring this month or later."""

    cleaned = (value or "").strip()
    parts = cleaned.split("/")

    if len(parts) != 2:
        return False

    month, year = (p.strip() for p in parts)

    if not _MONTH_RE.fullmatch(month) or not _YEAR_RE.fullmatch(year):
        return False

    # 3-digit years are neither short nor full form
    if len(year) == 3:
        return False

    month_num = int(month)
    year_num = 2000 + int(year) if len(year) == 2 else int(year)

    if not 1 <= month_num <= 12:
        return False

    today = today or date.today()

    return (year_num, month_num) >= (today.year, today.month)


def validate_cvv(value: str) -> bool:
    return bool(_CVV_RE.fullmatch(value or ""))


def validate_bank_account(value: str) -> bool:
    return bool(_BANK_ACCOUNT_RE.fullmatch(value or ""))


def validate_mobile_number(value: str, region: str | None = None) -> bool:
    """Validate against the international numbering plan.

    Without ``region`` the number must carry its country calling code
    (``+27...``); with one, national formats for that region are accepted too.
    """

    if not value:
        return False

    try:
        number = phonenumbers.parse(value, region.upper() if region else None)
    except phonenumbers.NumberParseException:
        return False

    return phonenumbers.is_valid_number(number)


def format_card_number(value: str) -> str:
    """Group card digits in fours: ``"4539148803436467"`` -> ``"4539 1488 0343 6467"``."""

    digits = _NON_DIGIT_RE.sub("", value or "")

    return " ".join(digits[i : i + 4] for i in range(0, len(digits), 4))


def parse_amount(value: str | int | float | Decimal | None) -> Decimal | None:
    """Parse a sender amount; ``None`` for blank, non-numeric, NaN or infinite input."""

    if value is None or isinstance(value, bool):
        return None

    text = str(value).strip()

    if not text:
        return None

    try:
        amount = Decimal(text)
    except InvalidOperation:
        return None

    if not amount.is_finite():
        return None

    return amount
