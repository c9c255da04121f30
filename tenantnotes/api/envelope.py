"""Response envelope shared by every JSON endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    data: T | None = None
    error: str | None = None
    message: str | None = None
    code: str | None = None


def ok(data: T | None = None, message: str | None = None) -> Envelope[T]:
    return Envelope(data=data, message=message)
