"""Fixed-width numeric field types.

Python integers are unbounded, so record fields that need the range checks
of a sized machine type annotate themselves with one of these subclasses:

    @dataclass
    class Packet:
        ttl: UInt8 = tagged("ttl")
        offset: Int32 = tagged("offset")

Values are plain ``int``/``float`` instances and compare equal to them.
Constructing an integer type outside its range raises ``OverflowError``.
"""

from __future__ import annotations

import struct
from typing import Any


class FixedInt(int):
    """Base class for sized integers."""

    bits: int = 64
    signed: bool = True
    min_value: int = -(1 << 63)
    max_value: int = (1 << 63) - 1

    def __init_subclass__(cls, *, bits: int = 64, signed: bool = True, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.bits = bits
        cls.signed = signed
        if signed:
            cls.min_value = -(1 << (bits - 1))
            cls.max_value = (1 << (bits - 1)) - 1
        else:
            cls.min_value = 0
            cls.max_value = (1 << bits) - 1

    def __new__(cls, value: Any = 0, *args: Any) -> "FixedInt":
        obj = super().__new__(cls, value, *args)
        if not cls.min_value <= obj <= cls.max_value:
            raise OverflowError(
                f"value {int(obj)} out of range for {cls.__name__} "
                f"[{cls.min_value}, {cls.max_value}]"
            )
        return obj

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"

    def __str__(self) -> str:
        return int.__repr__(self)

    __format__ = int.__format__


class Int8(FixedInt, bits=8):
    pass


class Int16(FixedInt, bits=16):
    pass


class Int32(FixedInt, bits=32):
    pass


class Int64(FixedInt, bits=64):
    pass


class UInt(FixedInt, bits=64, signed=False):
    pass


class UInt8(FixedInt, bits=8, signed=False):
    pass


class UInt16(FixedInt, bits=16, signed=False):
    pass


class UInt32(FixedInt, bits=32, signed=False):
    pass


class UInt64(FixedInt, bits=64, signed=False):
    pass


class Float64(float):
    """Double precision float; identical in range to ``float``."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({float(self)!r})"

    def __str__(self) -> str:
        return float.__repr__(self)


class Float32(float):
    """Float rounded to IEEE 754 single precision on construction."""

    def __new__(cls, value: Any = 0.0) -> "Float32":
        # struct raises OverflowError for finite values beyond single range
        (rounded,) = struct.unpack("f", struct.pack("f", float(value)))
        return super().__new__(cls, rounded)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({float(self)!r})"

    def __str__(self) -> str:
        return float.__repr__(self)


SIGNED_INT_TYPES = (Int8, Int16, Int32, Int64)
UNSIGNED_INT_TYPES = (UInt, UInt8, UInt16, UInt32, UInt64)
FLOAT_TYPES = (Float32, Float64)

__all__ = [
    "FixedInt",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Float32",
    "Float64",
    "SIGNED_INT_TYPES",
    "UNSIGNED_INT_TYPES",
    "FLOAT_TYPES",
]
