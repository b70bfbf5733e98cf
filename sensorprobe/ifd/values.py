"""Typed values carried by IFD entries.

Decodes the raw bytes of a directory entry into one of the twelve classic
TIFF value types, honouring the byte order of the enclosing structure.
"""

import struct
from dataclasses import dataclass
from typing import Dict, NamedTuple, Optional, Tuple, Union

from sensorprobe.errors import InvalidDataError, UnsupportedTypeError

TYPE_BYTE = 1
TYPE_ASCII = 2
TYPE_SHORT = 3
TYPE_LONG = 4
TYPE_RATIONAL = 5
TYPE_SBYTE = 6
TYPE_UNDEFINED = 7
TYPE_SSHORT = 8
TYPE_SLONG = 9
TYPE_SRATIONAL = 10
TYPE_FLOAT = 11
TYPE_DOUBLE = 12

# {type_id: (element_size_bytes, struct_format_char)}
VALUE_TYPES: Dict[int, Tuple[int, str]] = {
    TYPE_BYTE: (1, 'B'),
    TYPE_ASCII: (1, 's'),
    TYPE_SHORT: (2, 'H'),
    TYPE_LONG: (4, 'I'),
    TYPE_RATIONAL: (8, 'II'),   # num/denom
    TYPE_SBYTE: (1, 'b'),
    TYPE_UNDEFINED: (1, 's'),
    TYPE_SSHORT: (2, 'h'),
    TYPE_SLONG: (4, 'i'),
    TYPE_SRATIONAL: (8, 'ii'),
    TYPE_FLOAT: (4, 'f'),
    TYPE_DOUBLE: (8, 'd'),
}

VALUE_TYPE_NAMES: Dict[int, str] = {
    TYPE_BYTE: 'BYTE', TYPE_ASCII: 'ASCII', TYPE_SHORT: 'SHORT',
    TYPE_LONG: 'LONG', TYPE_RATIONAL: 'RATIONAL', TYPE_SBYTE: 'SBYTE',
    TYPE_UNDEFINED: 'UNDEFINED', TYPE_SSHORT: 'SSHORT', TYPE_SLONG: 'SLONG',
    TYPE_SRATIONAL: 'SRATIONAL', TYPE_FLOAT: 'FLOAT', TYPE_DOUBLE: 'DOUBLE',
}


class Rational(NamedTuple):
    """A numerator/denominator pair (signed or unsigned)."""
    numerator: int
    denominator: int

    def to_float(self) -> float:
        """Divide in double precision.

        A zero denominator raises InvalidDataError rather than returning
        inf or nan.
        """
        if self.denominator == 0:
            raise InvalidDataError(
                f"Rational {self.numerator}/0 has a zero denominator")
        return self.numerator / self.denominator


@dataclass(frozen=True)
class TypedValue:
    """An immutable, typed IFD value.

    ``values`` is a tuple of numbers for the integer and float types, a
    tuple of ``bytes`` for ASCII (one item per NUL-separated string), a
    tuple of :class:`Rational` for the rational types, and plain ``bytes``
    for UNDEFINED.
    """
    type_id: int
    values: Union[Tuple, bytes]

    @property
    def type_name(self) -> str:
        return value_type_name(self.type_id)

    def __len__(self) -> int:
        return len(self.values)


def value_type_name(type_id: int) -> str:
    return VALUE_TYPE_NAMES.get(type_id, f'TYPE_{type_id}')


def element_width(type_id: int, tag: Optional[int] = None) -> int:
    """Return the per-element byte width of a value type."""
    try:
        return VALUE_TYPES[type_id][0]
    except KeyError:
        raise UnsupportedTypeError(type_id, tag) from None


def decode_value(type_id: int, data: bytes, endian: str) -> TypedValue:
    """Decode ``data`` as a sequence of ``type_id`` elements.

    Args:
        type_id: TIFF value type code.
        data: Raw value bytes; trailing bytes that do not fill a whole
            element are ignored.
        endian: '<' for little-endian, '>' for big-endian.
    """
    width = element_width(type_id)
    fmt_char = VALUE_TYPES[type_id][1]

    if type_id == TYPE_ASCII:
        # No trimming: "abc\0" yields (b'abc', b'')
        return TypedValue(type_id, tuple(data.split(b'\x00')))
    if type_id == TYPE_UNDEFINED:
        return TypedValue(type_id, bytes(data))

    count = len(data) // width
    fmt = endian + fmt_char * count
    flat = struct.unpack(fmt, data[:struct.calcsize(fmt)])

    if type_id in (TYPE_RATIONAL, TYPE_SRATIONAL):
        pairs = tuple(Rational(flat[i], flat[i + 1])
                      for i in range(0, len(flat), 2))
        return TypedValue(type_id, pairs)
    return TypedValue(type_id, tuple(flat))
