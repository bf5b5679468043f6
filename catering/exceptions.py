"""Error hierarchy for the catering order engine.

Discount inputs never raise: they are clamped by the pricing calculator.
"""
from typing import Iterable


class CateringError(Exception):
    """Base class for all catering errors."""


class CustomerValidationError(CateringError, ValueError):
    """A customer payload is missing required identity fields or is otherwise invalid."""

    def __init__(self, fields: Iterable[str], message: str = None) -> None:
        self.fields = list(fields)
        if message is None:
            message = f"Invalid customer: missing or invalid {', '.join(self.fields)}"
        super().__init__(message)


class OrderValidationError(CateringError, ValueError):
    """An order edit produced an invalid order, e.g. an unknown discount type."""

    def __init__(self, fields: Iterable[str], message: str = None) -> None:
        self.fields = list(fields)
        if message is None:
            message = f"Invalid order: invalid {', '.join(self.fields)}"
        super().__init__(message)


class InvalidStatusError(CateringError, ValueError):
    """A status value outside received/delivered/paid."""


class StatusTransitionError(CateringError):
    """A backward status change while forward-only transitions are enforced."""

    def __init__(self, current: str, requested: str) -> None:
        self.current = current
        self.requested = requested
        super().__init__(f"Status change {current} -> {requested} is not a forward transition")


class RecordStoreError(CateringError, RuntimeError):
    """Reading from or writing to the record store failed."""


class RecordNotFoundError(RecordStoreError, LookupError):
    """The requested order or customer does not exist in the record store."""


class DuplicateRecordError(RecordStoreError):
    """An insert would overwrite an existing record with the same key."""
