"""Result type for explicit error handling.

Every fallible step of release planning (reading a manifest, sorting the
dependency graph, locating a changelog entry) returns either `Ok(value)` or
`Err(error)`. Callers branch on the variant instead of catching exceptions,
so a failure always travels back with the unit, field or path it concerns.

Usage:
    match manifest.get_field("package.version"):
        case Ok(value):
            print(f"version: {value}")
        case Err(FieldNotFound(field=field)):
            print(f"no {field}")
        case Err(error):
            print(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")

__all__ = ["Ok", "Err", "Result"]


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result.

    Attributes:
        error: The error value (usually one of the error dataclasses).
    """

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = "Ok[T] | Err[E]"

