"""
Tagged outcomes for service calls.

Services raise typed DomainExceptions. Callers that prefer to branch on
the failure kind instead of writing try/except (seeding, batch jobs) wrap
the call with capture() and inspect the Outcome.
"""
from dataclasses import dataclass
from typing import Awaitable, Generic, Optional, TypeVar

from core.domain.exceptions import DomainException, ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a success value or the domain error that prevented it."""

    value: Optional[T] = None
    error: Optional[DomainException] = None

    @property
    def ok(self) -> bool:
        """True when the call succeeded."""
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        """Failure kind, or None on success."""
        return self.error.kind if self.error is not None else None

    def failed_with(self, *error_types: type) -> bool:
        """Check whether the call failed with one of the given exception types."""
        return self.error is not None and isinstance(self.error, error_types)

    def unwrap(self) -> T:
        """
        Return the success value.

        Raises:
            DomainException: The captured error, if the call failed
        """
        if self.error is not None:
            raise self.error
        return self.value


async def capture(awaitable: Awaitable[T]) -> Outcome[T]:
    """
    Await a service call and capture its domain failure, if any.

    Only DomainException is captured. Invariant violations (ValueError)
    and unexpected errors propagate.
    """
    try:
        return Outcome(value=await awaitable)
    except DomainException as exc:
        return Outcome(error=exc)
