"""
Domain package for avrogeneric.

Exports the schema models and the generic record. Keep this package focused on
data definitions; decoding lives in `avrogeneric.readers`.
"""

from avrogeneric.domain.record import GenericRecord
from avrogeneric.domain.schema import FieldType, ListType, NestedField, PrimitiveType, StructType

__all__ = [
    "FieldType",
    "GenericRecord",
    "ListType",
    "NestedField",
    "PrimitiveType",
    "StructType",
]
