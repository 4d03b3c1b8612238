"""
Domain-specific errors for the trading bounded context.

All errors raised from the domain layer and its adapters are defined here.
None of them is fatal to the process: callers log them and carry on.
No framework imports allowed.
"""


class TradingDomainError(Exception):
    """Base error for all trading domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class EmptyInputError(TradingDomainError):
    """Raised when a model is asked to train on no data."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"No training data for symbol: {symbol}")
        self.symbol = symbol


class ModelNotFoundError(TradingDomainError):
    """Raised when no model snapshot exists for a symbol."""

    def __init__(self, symbol: str, location: str) -> None:
        super().__init__(f"No model snapshot for {symbol} at {location}")
        self.symbol = symbol
        self.location = location


class ModelCorruptError(TradingDomainError):
    """Raised when a model snapshot cannot be parsed for the expected topology."""

    def __init__(self, symbol: str, reason: str) -> None:
        super().__init__(f"Corrupt model snapshot for {symbol}: {reason}")
        self.symbol = symbol
        self.reason = reason


class PersistenceError(TradingDomainError):
    """Raised when a model snapshot cannot be written or read from storage."""

    def __init__(self, symbol: str, location: str, reason: str) -> None:
        super().__init__(f"Cannot persist model for {symbol} at {location}: {reason}")
        self.symbol = symbol
        self.location = location
        self.reason = reason


class MalformedTickError(TradingDomainError):
    """Raised when an incoming price payload cannot be parsed."""

    def __init__(self, symbol: str, reason: str) -> None:
        super().__init__(f"Malformed tick for {symbol}: {reason}")
        self.symbol = symbol
        self.reason = reason


class UnknownSymbolError(TradingDomainError):
    """Raised when a tick arrives for a symbol with no registered model."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"No model registered for symbol: {symbol}")
        self.symbol = symbol
