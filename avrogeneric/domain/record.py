"""
Generic, positional record model.

`GenericRecord` stands in for a generated class: values are stored by position
in the order of the record's `StructType`, and can also be addressed by field
name.
"""
from __future__ import annotations

from typing import Any, Dict, List

from avrogeneric.domain.schema import StructType


class GenericRecord:
    """
    Mutable container of field values shaped by a `StructType`.

    Records are not thread-safe; a record being populated belongs to the call
    that populates it.
    """

    __slots__ = ("_struct", "_values")

    def __init__(self, struct: StructType) -> None:
        self._struct = struct
        self._values: List[Any] = [None] * len(struct)

    @classmethod
    def create(cls, struct: StructType) -> "GenericRecord":
        """Create an empty record (all fields None) for `struct`."""
        return cls(struct)

    @staticmethod
    def can_reuse(candidate: object, struct: StructType) -> bool:
        """
        Return True if `candidate` can be overwritten in place as a record of `struct`.
        """
        if not isinstance(candidate, GenericRecord):
            return False
        other = candidate._struct
        return other is struct or other == struct

    def struct(self) -> StructType:
        return self._struct

    def size(self) -> int:
        return len(self._values)

    def get(self, pos: int) -> Any:
        return self._values[pos]

    def set(self, pos: int, value: Any) -> None:
        self._values[pos] = value

    def get_field(self, name: str) -> Any:
        return self._values[self._struct.position(name)]

    def set_field(self, name: str, value: Any) -> None:
        self._values[self._struct.position(name)] = value

    def copy(self) -> "GenericRecord":
        """Shallow copy; nested records and lists are shared."""
        duplicate = GenericRecord(self._struct)
        duplicate._values = list(self._values)
        return duplicate

    def to_dict(self) -> Dict[str, Any]:
        """Field name to value mapping, converting nested records recursively."""
        return {
            name: _plain(value) for name, value in zip(self._struct.names(), self._values)
        }

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GenericRecord):
            return NotImplemented
        return self._struct == other._struct and self._values == other._values

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        body = ", ".join(
            f"{name}={value!r}" for name, value in zip(self._struct.names(), self._values)
        )
        return f"GenericRecord({body})"


def _plain(value: Any) -> Any:
    if isinstance(value, GenericRecord):
        return value.to_dict()
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


__all__ = ["GenericRecord"]
