"""Result types for railway-oriented programming.

Provider calls, credential resolution and the retry loop all report failure
as data instead of raising. Callers branch on the variant explicitly.

Usage:
    result = await provider.get_account("acc-1")
    match result:
        case Success(value=account):
            print(account["name"])
        case Failure(error=error):
            print(f"{error.kind.value}: {error.message}")
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


# Type alias for Result union
type Result[T, E] = Success[T] | Failure[E]
