"""Result type for lookups and operations that can miss or fail.

Registry lookups (train, project or iteration by name) and per-module
orchestration outcomes return a ``Result`` instead of raising. Callers decide
what a miss or a failed module means for them. Exceptions stay reserved for
broken configuration: cyclic dependencies, unsupported phases, unparseable
versions.

Usage:
    match trains.by_name("Ockham"):
        case Ok(train):
            print(train.name)
        case Err(missing):
            print(missing.message)

    ockham = trains.by_name("Ockham").unwrap()   # in tests and fixed registries
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NoReturn, TypeGuard

__all__ = ["Err", "Ok", "Result", "is_err", "is_ok"]


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T

    def unwrap(self) -> T:
        return self.value

    def unwrap_or[D](self, default: D) -> T:
        return self.value

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A miss or failure.

    Attributes:
        error: The payload, usually a frozen dataclass such as ``NotFound``,
            ``NoImplementation`` or ``ModuleFailure``.
    """

    error: E

    def unwrap(self) -> NoReturn:
        """Raise ``ValueError`` naming the error."""
        message = getattr(self.error, "message", self.error)
        raise ValueError(f"called unwrap on Err: {message}")

    def unwrap_or[D](self, default: D) -> D:
        return default

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]


def is_ok[T, E](result: Result[T, E]) -> TypeGuard[Ok[T]]:
    return isinstance(result, Ok)


def is_err[T, E](result: Result[T, E]) -> TypeGuard[Err[E]]:
    return isinstance(result, Err)
