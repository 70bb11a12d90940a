# src/lendrate/domain/errors.py


class LendRateError(Exception):
    """Base class for faults raised by the pricing and loan-math engine."""


class InvalidLoanInput(LendRateError, ValueError):
    """Structurally invalid input: non-positive principal or term, bad frequency."""


class InvalidRateRecord(LendRateError, ValueError):
    """A raw provider record that cannot be normalized into an offer."""


class UnknownRateProvider(LendRateError, KeyError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown rate provider: {self.name!r}"


class RateProviderError(RuntimeError):
    pass
