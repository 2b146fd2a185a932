from __future__ import annotations

from typing import Sequence


class AlignedInputError(ValueError):
    """Base class for problems with the input alignment itself."""


class EmptyInputError(AlignedInputError):
    pass


class InvalidSymbolError(AlignedInputError):
    """A record holds bytes that are not ASCII alignment symbols (or not valid text)."""

    def __init__(self, message: str, *, index: int) -> None:
        super().__init__(message)
        self.index = index


class LengthMismatchError(AlignedInputError):
    """Sequences that should share one aligned length do not.

    Raised at load time (``index``/``expected``/``actual`` set) or by a pairwise
    metric (``ids`` set to the two record ids).
    """

    def __init__(
        self,
        message: str,
        *,
        ids: Sequence[str] | None = None,
        index: int | None = None,
        expected: int | None = None,
        actual: int | None = None,
    ) -> None:
        super().__init__(message)
        self.ids = tuple(ids) if ids is not None else None
        self.index = index
        self.expected = expected
        self.actual = actual


class InvariantError(RuntimeError):
    """Internal contract breach (e.g. results/queries misaligned). Not meant to be caught."""
