"""
Operation Results

Handlers return a DataResult instead of raising for expected business
outcomes ("username already exists"); unexpected failures still raise.
"""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class DataResult(Generic[T]):
    success: bool
    message: str = ""
    data: Optional[T] = None

    @classmethod
    def ok(cls, data: Optional[T] = None, message: str = "") -> "DataResult[T]":
        return cls(success=True, message=message, data=data)

    @classmethod
    def error(cls, message: str, data: Optional[T] = None) -> "DataResult[T]":
        return cls(success=False, message=message, data=data)
