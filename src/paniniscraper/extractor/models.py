"""
Result types used inside the extractors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class Found(Generic[T]):
    value: T


@dataclass(slots=True, frozen=True)
class NotFound:
    field: str


FieldResult = Union[Found[T], NotFound]


@dataclass(slots=True, frozen=True)
class Prices:
    full_price: float
    current_price: float
