"""Exchange-rate provider.

Fetches USD rates from the rates feed with curl_cffi and publishes them as
an immutable :class:`RateSnapshot`. A refresh builds a complete new snapshot
and swaps it in with one assignment, so readers on other threads see either
the previous snapshot or the new one. When the feed fails the provider
publishes the fallback table and records the error; it never raises.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from curl_cffi import CurlError
from curl_cffi.requests import Session
from pyremit_sdk.config import RatesConfig, get_rates_config
from pyremit_sdk.exceptions import RatesFetchError
from pyremit_sdk.models import RateSnapshot
from pyremit_sdk.types import RateSource

log = logging.getLogger(__name__)

BASE_CURRENCY = "USD"

FALLBACK_RATES: dict[str, Decimal] = {
    "GBP": Decimal("0.8"),
    "ZAR": Decimal("18.5"),
    "EUR": Decimal("0.85"),
}

SUPPORTED_CURRENCIES: tuple[str, ...] = ("GBP", "ZAR")


def _to_rate(value: Any) -> Decimal | None:
    if isinstance(value, bool):
        return None
    try:
        rate = Decimal(str(value))
    except InvalidOperation:
        return None
    if not rate.is_finite() or rate <= 0:
        return None
    return rate


def normalize_rates(payload: Any) -> dict[str, Decimal]:
    """Flatten the feed payload into ``{currency: rate}``.

    The feed returns a list of single-key objects
    (``[{"USD": 1}, {"GBP": 0.74}, {"ZAR": 17.75}]``); a flat object is
    accepted as well. Entries with unusable values are dropped.
    """

    if isinstance(payload, dict):
        items: Iterable[tuple[Any, Any]] = payload.items()
    elif isinstance(payload, list):
        items = [
            pair
            for entry in payload
            if isinstance(entry, dict)
            for pair in entry.items()
        ]
    else:
        raise RatesFetchError(f"Unexpected rates payload: {type(payload).__name__}")

    normalized: dict[str, Decimal] = {}

    for currency, value in items:
        rate = _to_rate(value)
        if rate is not None:
            normalized[str(currency).upper()] = rate

    return normalized


class RatesProvider:
    """Single-writer, multi-reader holder of the current rate snapshot."""

    def __init__(
        self,
        config: RatesConfig | None = None,
        supported: Iterable[str] = SUPPORTED_CURRENCIES,
        fallback: dict[str, Decimal] | None = None,
        session_factory: Callable[[], Session] | None = None,
    ) -> None:
        self._config = config or get_rates_config()
        self._supported = tuple(c.upper() for c in supported)
        self._fallback = dict(FALLBACK_RATES if fallback is None else fallback)
        self._session_factory = session_factory or self._default_session

        self._snapshot = RateSnapshot(rates={}, source=RateSource.INITIAL)
        # No snapshot has been fetched yet
        self._loading = True
        self._refresh_lock = threading.Lock()

    def _default_session(self) -> Session:
        return Session(impersonate="chrome", timeout=self._config.timeout)

    # -- readers -----------------------------------------------------------

    @property
    def snapshot(self) -> RateSnapshot:
        return self._snapshot

    @property
    def loading(self) -> bool:
        """True until the first refresh finishes, and while one is running."""
        return self._loading

    @property
    def error(self) -> str | None:
        return self._snapshot.error

    def get_rate(self, currency: str) -> Decimal | None:
        """Units of ``currency`` per 1 USD.

        Before the first refresh the fallback table answers. Currencies
        neither in the snapshot nor in the fallback table yield ``None``.
        """

        code = currency.upper()

        if code == BASE_CURRENCY:
            return Decimal(1)

        rate = self._snapshot.get_rate(code)

        if rate is None:
            rate = self._fallback.get(code)

        return rate

    # -- writer ------------------------------------------------------------

    def _fetch(self) -> dict[str, Decimal]:
        with self._session_factory() as session:
            resp = session.get(self._config.url)

        if resp.status_code >= 400:
            raise RatesFetchError(f"HTTP {resp.status_code}: {resp.text[:200]}")

        try:
            payload = resp.json()
        except ValueError as exc:
            raise RatesFetchError(f"Malformed rates payload: {exc}") from exc

        return normalize_rates(payload)

    def _fallback_snapshot(self, error: str) -> RateSnapshot:
        return RateSnapshot(
            rates={c: self._fallback[c] for c in self._supported if c in self._fallback},
            source=RateSource.FALLBACK,
            fetched_at=datetime.now(timezone.utc),
            error=error,
        )

    def _build_snapshot(self) -> RateSnapshot:
        try:
            fetched = self._fetch()

        except (CurlError, RatesFetchError) as exc:
            log.warning("Rate refresh failed, using fallback rates: %s", exc)
            return self._fallback_snapshot(str(exc))

        rates: dict[str, Decimal] = {}

        # Supported currencies missing from the feed take their fallback value
        for code in self._supported:
            rate = fetched.get(code, self._fallback.get(code))
            if rate is not None:
                rates[code] = rate

        log.info("Rates refreshed: %s", {k: str(v) for k, v in rates.items()})

        return RateSnapshot(
            rates=rates,
            source=RateSource.LIVE,
            fetched_at=datetime.now(timezone.utc),
        )

    def refresh(self) -> RateSnapshot:
        """Fetch the feed and publish a new snapshot; never raises for feed errors."""

        with self._refresh_lock:
            self._loading = True

            try:
                snapshot = self._build_snapshot()
                self._snapshot = snapshot

            finally:
                self._loading = False

        return snapshot

    def refresh_in_background(self) -> threading.Thread:
        """Run :meth:`refresh` on a daemon thread and return the thread."""

        thread = threading.Thread(target=self.refresh, name="rates-refresh", daemon=True)
        thread.start()

        return thread
