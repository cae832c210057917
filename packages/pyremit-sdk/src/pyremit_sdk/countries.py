"""Supported destination corridors."""

from pyremit_sdk.models import Country


SUPPORTED_COUNTRIES: tuple[Country, ...] = (
    Country(code="ZA", name="South Africa", currency="ZAR"),
    Country(code="GB", name="United Kingdom", currency="GBP"),
)


def find_country(
    code: str, countries: tuple[Country, ...] = SUPPORTED_COUNTRIES
) -> Country | None:
    """Look up a destination by ISO country code (case-insensitive)."""

    code_upper = code.strip().upper()

    for country in countries:
        if country.code == code_upper:
            return country

    return None
