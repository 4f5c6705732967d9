"""Custom exception hierarchy for thumbvault."""

from __future__ import annotations


class ThumbVaultError(Exception):
    """Base class for all custom errors raised by thumbvault."""


class InfrastructureError(ThumbVaultError):
    """Base class for infrastructure-level errors."""


# --- Codec errors ---

class CodecError(InfrastructureError):
    """Base class for failures while converting between values and bytes."""


class EncodeError(CodecError):
    """Raised when a value cannot be serialised to bytes."""


class DecodeError(CodecError):
    """Raised when stored bytes cannot be decoded into a value."""


# --- Cache lifecycle errors ---

class CacheUnavailableError(ThumbVaultError):
    """Raised when no usable cache directory could be resolved."""
