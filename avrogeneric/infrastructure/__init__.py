"""
Infrastructure package for avrogeneric.

Holds the byte-level I/O concerns (the binary decoder), decoupled from the
readers that interpret decoded primitives.
"""

from avrogeneric.infrastructure.decoder import BinaryDecoder, Decoder

__all__ = [
    "BinaryDecoder",
    "Decoder",
]
