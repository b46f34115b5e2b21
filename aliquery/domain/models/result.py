"""Explicit success/failure values returned by the transport and façades."""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from aliquery.domain.errors import AliqueryError

T = TypeVar("T")
E = TypeVar("E", bound=AliqueryError)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful outcome carrying `value`."""
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """A failed outcome carrying the `error` that caused it."""
    error: E

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        """Raises the carried error."""
        raise self.error


Result = Union[Ok[T], Err[E]]
