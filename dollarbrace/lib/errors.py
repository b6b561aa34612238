"""
Exception hierarchy for dollarbrace.

Every error raised by the library derives from `DollarBraceError`:

- `PropertyNotFoundError`: no resolver produced a value for a name. Errors
  raised while chasing nested names are chained through `__cause__` so that
  the message shows the path that led to the missing property.
- `CircularResolutionError`: a name was requested again while it was still
  being resolved.
- `FilterIOError`: a file could not be read or written.
- `ExpressionEvaluationError`: an explicitly addressed expression failed.

`CircularResolutionError` is not a `PropertyNotFoundError`; resolvers that
fall through on "not found" let it propagate.
"""

from pathlib import Path
from typing import Optional


class DollarBraceError(Exception):
    """Base class for all dollarbrace errors."""


class ResolutionError(DollarBraceError):
    """A property name could not be turned into a value."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name: str = name


class PropertyNotFoundError(ResolutionError):
    """No resolver answered for `name`.

    When `cause` is another `PropertyNotFoundError` for a different name the
    two are chained, building the trail printed by `__str__`. A cause with the
    same name is dropped so repeated attempts on one name do not stack up.
    """

    def __init__(
        self, name: str, cause: Optional["PropertyNotFoundError"] = None
    ) -> None:
        super().__init__(name)
        if cause is not None and cause.name != name:
            self.__cause__ = cause

    def trail(self) -> list[str]:
        """Names from this error down to the innermost chained one."""
        names: list[str] = [self.name]
        cause: Optional[BaseException] = self.__cause__
        while cause is not None:
            if isinstance(cause, PropertyNotFoundError):
                names.append(cause.name)
            cause = cause.__cause__
        return names

    def __str__(self) -> str:
        names: list[str] = self.trail()
        path: str = " -> ".join(f"'{name}'" for name in names)
        if len(names) == 1:
            return f"Property not found: {path}"
        return f"Property not found: '{names[-1]}' [{path}]"


class CircularResolutionError(ResolutionError):
    """`name` was requested while its own resolution was still in progress."""

    def __str__(self) -> str:
        return f"Circular property resolution: '{self.name}'"


class FilterIOError(DollarBraceError):
    """Reading or writing a filtered file failed."""

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path: Path = Path(path)
        self.reason: str = reason


class ExpressionEvaluationError(DollarBraceError):
    """An expression addressed through its prefix could not be evaluated."""

    def __init__(self, expression: str, reason: str) -> None:
        super().__init__(f"Cannot evaluate '{expression}': {reason}")
        self.expression: str = expression
        self.reason: str = reason
