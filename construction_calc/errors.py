"""
Error taxonomy for the calculators, the usage limiter and billing.

All of these are recoverable at the HTTP boundary. main.py registers a
handler per class that turns them into a JSON response.
"""

from urllib.parse import quote


class CalculatorError(Exception):
    """Base class for every error raised by this package."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CalculatorError):
    """Malformed ratio, block size, or non-numeric/non-positive input."""

    status_code = 422


class ConfigurationError(CalculatorError):
    """Missing catalog entry or unset secret."""

    status_code = 500


class PaymentError(CalculatorError):
    """Paystack rejected the request or could not be reached."""

    status_code = 502


class QuotaExceededError(CalculatorError):
    """Free calculation limit reached for an identity."""

    status_code = 403

    def __init__(self, identity: str, limit: int, redirect_to: str = None):
        super().__init__("Free limit reached. Please subscribe to continue.")
        self.identity = identity
        self.limit = limit
        self.redirect_to = redirect_to or "/subscribe.html?email=" + quote(identity, safe="")

    def to_dict(self) -> dict:
        return {
            "detail": self.message,
            "identity": self.identity,
            "limit": self.limit,
            "redirectTo": self.redirect_to,
        }
