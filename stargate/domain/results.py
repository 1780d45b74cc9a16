"""Résultat étiqueté des recherches par nom: `Found(value) | NotFound(name)`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    name: str

    @property
    def message(self) -> str:
        return f"No person was found matching name '{self.name}'"


LookupResult = Found[T] | NotFound
