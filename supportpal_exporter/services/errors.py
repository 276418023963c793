"""
SupportPal client errors
"""
from typing import Any, Dict, Optional


class SupportPalError(Exception):
    """Base error for SupportPal API access"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class TransportError(SupportPalError):
    """Request could not be completed (connection, timeout, HTTP status)"""


class DecodeError(SupportPalError):
    """Response body is not a valid SupportPal envelope"""


class ApiError(SupportPalError):
    """SupportPal answered with an error envelope or without data"""


class StartupError(SupportPalError):
    """Label schema could not be discovered, no metrics can be registered"""
