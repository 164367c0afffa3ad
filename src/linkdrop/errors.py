"""
Error taxonomy for the Linkdrop SDK.

All errors raised by the SDK derive from LinkdropError so callers can
catch the whole family in one place.
"""

from typing import Optional


class LinkdropError(Exception):
    """Base class for all SDK errors."""
    pass


class InvalidSigner(LinkdropError):
    """Raised when signing key material or a signer object cannot be used."""
    pass


class InvalidKey(LinkdropError):
    """Raised when a link key does not parse to a valid private key."""
    pass


class SigningFailure(LinkdropError):
    """Raised when the signing capability errors or is unavailable."""
    pass


class InvalidEncoding(LinkdropError, ValueError):
    """Raised when an address, integer, salt or bytecode is malformed."""
    pass


class UnsupportedConfiguration(LinkdropError):
    """Raised when the SDK is configured for an unknown chain."""
    pass


class ClaimServiceError(LinkdropError):
    """Raised when the claim service cannot be reached or rejects a claim."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
