"""Exception types shared across the pagekit package.

Content and rendering problems never raise: unknown section types and
malformed stored layers degrade to generic output. The exceptions below cover
caller mistakes (unknown ids, invalid permutations, unknown themes),
configuration errors, and failures of the persistence collaborator.
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class PagekitError(Exception):
    """Base class for errors raised by pagekit."""


class SiteConfigError(PagekitError, ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class SectionNotFoundError(PagekitError, KeyError):
    """Raised when a section id does not exist in the project."""

    def __init__(self, section_id: str) -> None:
        super().__init__(section_id)
        self.section_id = section_id

    def __str__(self) -> str:
        return f"Unknown section '{self.section_id}'"


class OrderInvariantError(PagekitError, ValueError):
    """Raised when section positions are not a dense permutation."""


class UnknownThemeError(PagekitError, KeyError):
    """Raised when a theme or font collection id is not in the catalog."""

    def __init__(self, kind: str, key: str, known: cabc.Iterable[str]) -> None:
        super().__init__(key)
        self.kind = kind
        self.key = key
        self.known = sorted(known)

    def __str__(self) -> str:
        available = ", ".join(self.known)
        return f"Unknown {self.kind} '{self.key}'. Known {self.kind}s: {available}"


class PersistenceError(PagekitError, RuntimeError):
    """Raised by a section repository when a write or read fails."""


class SectionSyncError(PagekitError):
    """A store mutation could not be persisted and local state was reloaded.

    The error is recoverable: the store already holds the authoritative
    section list again, and :meth:`retry` replays the failed operation.
    """

    def __init__(
        self,
        operation: str,
        cause: PersistenceError,
        retry: cabc.Callable[[], object],
    ) -> None:
        super().__init__(f"Failed to persist '{operation}': {cause}")
        self.operation = operation
        self.cause = cause
        self._retry = retry

    def retry(self) -> object:
        """Replay the operation that failed to persist."""
        return self._retry()


__all__ = [
    "OrderInvariantError",
    "PagekitError",
    "PersistenceError",
    "SectionNotFoundError",
    "SectionSyncError",
    "SiteConfigError",
    "UnknownThemeError",
]
