"""
Error taxonomy for logo verification.

The HTTP layer decides which status code each kind becomes;
nothing in here knows about transports.
"""

from enum import Enum


class VerificationErrorKind(str, Enum):
    bad_request = "bad_request"
    not_found = "not_found"
    # the next two never reach the HTTP layer as-is: an upload that cannot be
    # decoded becomes internal_error, an incomparable pair becomes a non-match verdict
    unreadable_image = "unreadable_image"
    incomparable_fingerprint = "incomparable_fingerprint"
    internal_error = "internal_error"


class VerificationError(Exception):
    """Raised by the verification flow when no verdict can be produced."""

    def __init__(self, kind: VerificationErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"VerificationError(kind={self.kind.value!r}, message={self.message!r})"
