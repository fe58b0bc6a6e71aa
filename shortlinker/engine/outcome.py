"""Tagged outcomes for engine calls

Callers (e.g. the Lambda handlers) match on `Outcome.kind` to pick a
response instead of inspecting exception types.

Example:
    >>> outcome = capture(engine.unshorten, 'doesNotExist')
    >>> outcome.kind
    <OutcomeKind.NOT_FOUND: 'not_found'>
    >>> outcome.classified
    True
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from shortlinker.constants import OutcomeKind
from shortlinker.exceptions import ShortLinkerError


@dataclass(frozen=True)
class Outcome[T]:
    """Result of an engine call.

    Attributes:
        kind (OutcomeKind):
            SUCCESS, or the kind carried by the raised error.
        value (T | None):
            Return value of the call (only on success).
        error (ShortLinkerError | None):
            Raised error (only on failure).
    """

    kind: OutcomeKind
    value: T | None = None
    error: ShortLinkerError | None = None

    @classmethod
    def success(cls, value: T) -> 'Outcome[T]':
        return cls(kind=OutcomeKind.SUCCESS, value=value)

    @classmethod
    def failure(cls, error: ShortLinkerError) -> 'Outcome[T]':
        return cls(kind=error.kind, error=error)

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @property
    def classified(self) -> bool:
        """True for outcomes meant to be shown to clients as-is (i.e. not found)."""
        return self.kind is OutcomeKind.NOT_FOUND


def capture[T](func: Callable[..., T], *args: Any, **kwargs: Any) -> Outcome[T]:
    """Call func and wrap its result, or its application error, in an Outcome.

    Errors that are not ShortLinkerError propagate unchanged.
    """
    try:
        return Outcome.success(func(*args, **kwargs))
    except ShortLinkerError as e:
        return Outcome.failure(e)
