"""
Reader interfaces for avrogeneric.

Every field decoder implements the `ValueReader` protocol: read one value from
a decoder, optionally overwriting a previously produced value (`reuse`) instead
of allocating a new one. Reuse is advisory only. A reader must return the same
value whether or not it honors `reuse`, and must ignore a `reuse` object it
cannot use.

`StructReader` is the template for composite readers: it drives its field
readers in declared order and leaves record creation and slot access to
subclasses.
"""

from __future__ import annotations

import abc
from typing import Any, Generic, Optional, Protocol, Sequence, Tuple, TypeVar, runtime_checkable

from avrogeneric.infrastructure.decoder import Decoder

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)
S = TypeVar("S")


@runtime_checkable
class ValueReader(Protocol[T_co]):
    """
    Common interface all value readers implement.
    """

    def read(self, decoder: Decoder, reuse: Optional[Any] = None) -> T_co:
        """
        Read one value from `decoder`.

        Parameters
        ----------
        decoder : Decoder
            Decoder positioned at the start of the value.
        reuse : Any, optional
            A value previously returned by this reader that may be overwritten.

        Returns
        -------
        T
            The decoded value. Stream errors from the decoder propagate unchanged.
        """
        ...


class AbstractValueReader(abc.ABC, Generic[T]):
    """
    Optional ABC helper for class-based readers.
    """

    @abc.abstractmethod
    def read(self, decoder: Decoder, reuse: Optional[Any] = None) -> T:  # pragma: no cover - interface only
        """Read one value."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class StructReader(AbstractValueReader[S]):
    """
    Decode a struct by reading each field, in order, into a target object.

    Subclasses decide what the target is (`reuse_or_create`) and how slots are
    accessed (`get` / `set`).
    """

    def __init__(self, readers: Sequence[ValueReader[Any]]) -> None:
        self._readers: Tuple[ValueReader[Any], ...] = tuple(readers)

    @property
    def readers(self) -> Tuple[ValueReader[Any], ...]:
        return self._readers

    @abc.abstractmethod
    def reuse_or_create(self, reuse: Optional[Any]) -> S:  # pragma: no cover - interface only
        """Return `reuse` when it is a compatible target, else a fresh one."""
        raise NotImplementedError

    @abc.abstractmethod
    def get(self, struct: S, pos: int) -> Any:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def set(self, struct: S, pos: int, value: Any) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    def read(self, decoder: Decoder, reuse: Optional[Any] = None) -> S:
        struct = self.reuse_or_create(reuse)
        # Writes are immediate: a failure part way through leaves earlier
        # fields of a reused target overwritten.
        for pos, reader in enumerate(self._readers):
            self.set(struct, pos, reader.read(decoder, self.get(struct, pos)))
        return struct

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(repr(r) for r in self._readers)})"


__all__ = [
    "AbstractValueReader",
    "StructReader",
    "ValueReader",
]
