"""
Schema models for avrogeneric.

A `StructType` is an ordered list of `NestedField`s. Readers use it only to
size and shape fresh records; which reader decodes which field is decided by
whoever builds the reader list.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple, Union

from pydantic import BaseModel, Field, model_validator


class PrimitiveType(str, Enum):
    BOOLEAN = "boolean"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    DATE = "date"
    TIME = "time"
    TIMESTAMP = "timestamp"
    TIMESTAMPTZ = "timestamptz"
    STRING = "string"
    UUID = "uuid"
    FIXED = "fixed"
    BINARY = "binary"


class ListType(BaseModel):
    """A list whose elements all share one type."""

    element_id: int = Field(..., description="Id of the element field.")
    element_type: "FieldType" = Field(..., description="Type of each element.")
    element_optional: bool = Field(True, description="Whether elements may be null.")

    model_config = {"frozen": True}


class NestedField(BaseModel):
    """
    One named, typed field of a struct.
    """

    field_id: int = Field(..., description="Unique field id.")
    name: str = Field(..., min_length=1, description="Field name, unique within the struct.")
    type: "FieldType" = Field(..., description="Field type.")
    optional: bool = Field(True, description="Whether the field may be null.")
    doc: Optional[str] = Field(None, description="Optional documentation string.")

    model_config = {"frozen": True}

    @classmethod
    def required(cls, field_id: int, name: str, type: "FieldType", doc: Optional[str] = None) -> "NestedField":
        return cls(field_id=field_id, name=name, type=type, optional=False, doc=doc)

    @classmethod
    def of(cls, field_id: int, name: str, type: "FieldType", doc: Optional[str] = None) -> "NestedField":
        return cls(field_id=field_id, name=name, type=type, optional=True, doc=doc)


class StructType(BaseModel):
    """
    Ordered, immutable list of fields describing a composite value.
    """

    fields: Tuple[NestedField, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_unique_names(self) -> "StructType":
        seen: Dict[str, int] = {}
        for pos, nested in enumerate(self.fields):
            if nested.name in seen:
                raise ValueError(
                    f"Duplicate field name '{nested.name}' at positions {seen[nested.name]} and {pos}"
                )
            seen[nested.name] = pos
        return self

    @classmethod
    def of(cls, *fields: NestedField) -> "StructType":
        return cls(fields=tuple(fields))

    def __len__(self) -> int:
        return len(self.fields)

    def position(self, name: str) -> int:
        """Return the position of the named field or raise KeyError."""
        for pos, nested in enumerate(self.fields):
            if nested.name == name:
                return pos
        raise KeyError(name)

    def field(self, name: str) -> NestedField:
        return self.fields[self.position(name)]

    def names(self) -> Tuple[str, ...]:
        return tuple(nested.name for nested in self.fields)


FieldType = Union[PrimitiveType, StructType, ListType]

ListType.model_rebuild()
NestedField.model_rebuild()
StructType.model_rebuild()


__all__ = ["FieldType", "ListType", "NestedField", "PrimitiveType", "StructType"]
