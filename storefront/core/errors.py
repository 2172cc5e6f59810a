"""Error taxonomy for the store simulator.

Not-found results (selling an item that is out of stock, looking up an unused
customer ID) are plain ``False``/``None`` returns, never exceptions.
"""

from __future__ import annotations

from typing import Optional


class StoreError(Exception):
    """Base class for every error raised by storefront."""


class RecordError(StoreError, ValueError):
    """A malformed input record; the record is skipped and loading continues."""

    def __init__(self, message: str, line_no: Optional[int] = None):
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


class InvalidArgument(StoreError, ValueError):
    """A violated precondition (missing value, non-positive units, ...)."""


class UnknownCategory(InvalidArgument):
    def __init__(self, symbol: object):
        self.symbol = symbol
        super().__init__(f"unknown item category: {symbol!r}")


class DuplicateCustomer(InvalidArgument):
    def __init__(self, customer_id: int):
        self.customer_id = customer_id
        super().__init__(f"customer ID {customer_id:03d} already exists")


class UnknownCustomer(StoreError, LookupError):
    def __init__(self, customer_id: object):
        self.customer_id = customer_id
        super().__init__(f"customer ID {customer_id} not found")


class InternalConsistencyError(StoreError, RuntimeError):
    """A tree invariant was found broken. Not recoverable."""
