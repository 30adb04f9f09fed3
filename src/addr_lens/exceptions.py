"""Custom exceptions for addr-lens."""


class AddressLensError(Exception):
    """Base exception for addr-lens."""

    pass


class EngineError(AddressLensError):
    """Raised when the address engine cannot serve a request."""

    pass


class EngineSetupError(EngineError):
    """Raised when the address engine or its data cannot be loaded."""

    pass


class EngineNotInitializedError(EngineError):
    """Raised when parse/expand is called before engine setup."""

    pass


class ReplacementLengthError(AddressLensError, ValueError):
    """Raised when replacement values do not match the number of addresses."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            "The set of new values must be the same length as the addresses, "
            f"or of length 1 (got {actual} values for {expected} addresses)"
        )


class BatchCancelledError(AddressLensError):
    """Raised when a batch is interrupted by the caller."""

    def __init__(self, row: int):
        self.row = row
        super().__init__(f"Batch cancelled at row {row}")
