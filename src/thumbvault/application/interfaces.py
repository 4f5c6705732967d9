from abc import ABC, abstractmethod
from typing import Any

from ..domain.models import EncodingConfig


class IImageEncoder(ABC):
    """Interface for serialising values before they are written to disk."""

    @abstractmethod
    def encode(self, value: Any, config: EncodingConfig) -> bytes:
        """
        Serialise *value* according to *config*.
        Raises EncodeError when the value cannot be encoded.
        """
        pass


class IImageDecoder(ABC):
    """Interface for turning cached bytes back into values."""

    @abstractmethod
    def decode(self, data: bytes, max_width: int, max_height: int) -> Any:
        """
        Decode *data* into a value no larger than ``(max_width, max_height)``.
        Non-positive bounds leave that axis unconstrained.
        Raises DecodeError when the bytes are not decodable.
        """
        pass
