class RemitError(Exception):
    """Base exception for SDK errors."""


class UnknownFieldError(RemitError, KeyError):
    """A field name that is not part of a transfer request."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown transfer field: {name!r}")

    def __str__(self) -> str:
        return self.args[0]


class WizardStateError(RemitError):
    """Operation not allowed at the wizard's current step."""


class RatesFetchError(RemitError):
    """Exchange rates could not be fetched or parsed."""
