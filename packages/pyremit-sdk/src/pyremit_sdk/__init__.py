from pyremit_sdk.config import (
    get_rates_config,
    get_transfer_limits,
    RatesConfig,
    TransferLimits,
)
from pyremit_sdk.countries import find_country, SUPPORTED_COUNTRIES
from pyremit_sdk.exceptions import (
    RatesFetchError,
    RemitError,
    UnknownFieldError,
    WizardStateError,
)
from pyremit_sdk.fees import (
    calculate_fee,
    calculate_received_amount,
    DEFAULT_FEE_SCHEDULE,
    FeeSchedule,
    quote,
)
from pyremit_sdk.ledger import TransferLedger
from pyremit_sdk.notifications import LoggingNotifier, Notifier, RecordingNotifier
from pyremit_sdk.rates import RatesProvider
from pyremit_sdk.review import build_review
from pyremit_sdk.wizard import WizardController
