from typing import Any, Dict, Optional

class StripeRestError(Exception):
    """Base exception class for all stripe-rest exceptions"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

class ConfigError(StripeRestError):
    """Raised when there is a configuration error"""
    pass

class LoggerError(StripeRestError):
    """Raised when there is a logging error"""
    pass
