"""
OCN Notary error hierarchy.

Verification failures are never raised: they are returned as
VerifyResult values. Exceptions are reserved for malformed transport
input, primitive failures while signing, and broken internal invariants.
"""


class NotaryError(Exception):
    """Base class for all notary errors."""


class SignatureFormatError(NotaryError):
    """Raised when an OCN-Signature header cannot be decoded."""
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class SigningError(NotaryError):
    """Raised when the signing primitive rejects a private key."""


class RewriteChainError(NotaryError):
    """
    Raised when a rewrite reports success without returning the
    reconstructed previous request. This is a programming fault, not an
    invalid signature.
    """
