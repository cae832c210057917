"""Configuration from environment variables."""

import os
from dataclasses import dataclass
from decimal import Decimal


DEFAULT_RATES_URL = "https://68976304250b078c2041c7fc.mockapi.io/api/wiremit/InterviewAPIS"


@dataclass
class RatesConfig:
    url: str = DEFAULT_RATES_URL
    timeout: float = 10.0


@dataclass
class TransferLimits:
    min_amount_usd: Decimal = Decimal("10")
    max_amount_usd: Decimal = Decimal("5000")

    def allows(self, amount_usd: Decimal) -> bool:
        return self.min_amount_usd <= amount_usd <= self.max_amount_usd


def get_rates_config() -> RatesConfig:
    """Get exchange-rate feed configuration from environment variables.

    Optional env vars: PYREMIT_RATES_URL, PYREMIT_RATES_TIMEOUT
    """

    return RatesConfig(
        url=os.environ.get("PYREMIT_RATES_URL", DEFAULT_RATES_URL),
        timeout=float(os.environ.get("PYREMIT_RATES_TIMEOUT", "10")),
    )


def get_transfer_limits() -> TransferLimits:
    """Get the accepted send-amount range from environment variables.

    Optional env vars: PYREMIT_MIN_AMOUNT_USD, PYREMIT_MAX_AMOUNT_USD
    """

    return TransferLimits(
        min_amount_usd=Decimal(os.environ.get("PYREMIT_MIN_AMOUNT_USD", "10")),
        max_amount_usd=Decimal(os.environ.get("PYREMIT_MAX_AMOUNT_USD", "5000")),
    )
