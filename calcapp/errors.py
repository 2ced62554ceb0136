"""
Exception hierarchy shared by the calculator, evaluator and backends.
"""


class CalcAppError(Exception):
    """Base class for calcapp errors."""


class ExpressionError(CalcAppError, ValueError):
    """Raised when an arithmetic expression cannot be parsed or evaluated."""


class BackendError(CalcAppError):
    """Raised when a network-backed collaborator fails."""


class CurrencyConversionError(BackendError):
    """Raised when the exchange-rate backend cannot produce a rate."""


class LLMBackendError(BackendError):
    """Raised when a completion backend fails or replies with garbage."""
