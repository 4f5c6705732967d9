"""Discriminated results returned by the storage layer.

The blob store never logs and never raises for I/O problems.  Each
operation returns an :class:`Outcome` that callers inspect and, where they
choose to, turn into diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Status(Enum):
    OK = "ok"
    MISSING = "missing"
    IO_ERROR = "io_error"
    ENCODE_ERROR = "encode_error"
    DECODE_ERROR = "decode_error"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Success-with-value or failure-with-reason."""

    status: Status
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Outcome[T]":
        return cls(Status.OK, value)

    @classmethod
    def missing(cls) -> "Outcome[T]":
        return cls(Status.MISSING)

    @classmethod
    def failure(cls, status: Status, error: BaseException | None = None) -> "Outcome[T]":
        if status is Status.OK:
            raise ValueError("failure() requires a non-OK status")
        return cls(status, None, error)

    @property
    def ok(self) -> bool:
        return self.status is Status.OK

    @property
    def reason(self) -> str:
        """Human readable explanation, empty for successful outcomes."""

        if self.ok:
            return ""
        if self.error is not None:
            return f"{self.status.value}: {self.error}"
        return self.status.value

    def __bool__(self) -> bool:
        return self.ok
