"""Domain layer: Core business entities and rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Explicit(Generic[T]):
    """A value found in the pending changes or the synced domains."""

    value: T


@dataclass(frozen=True)
class Default(Generic[T]):
    """The global defaults, used when nothing is configured for a domain."""

    value: T


Defaulted = Union[Explicit[T], Default[T]]
