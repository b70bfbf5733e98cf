"""Canon maker-note entry point.

A Canon maker note is an IFD whose out-of-line pointers are absolute file
offsets.  An 8-byte footer at the end of the blob records the byte order,
the magic number 42, and the file offset the maker note was written at::

    +---------+---------+-------------------+
    | II / MM |   42    |  original offset  |
    +---------+---------+-------------------+
      2 bytes   2 bytes       4 bytes
"""

import logging
import struct
from typing import List, Tuple

from sensorprobe.errors import (
    BadMagicError,
    InvalidByteOrderMarkerError,
    TooShortError,
)
from sensorprobe.ifd.parser import DirectoryEntry, decode_directory

logger = logging.getLogger(__name__)

FOOTER_SIZE = 8
FOOTER_MAGIC = 42

IFD_LITTLE_ENDIAN = 0x4949  # "II"
IFD_BIG_ENDIAN = 0x4D4D     # "MM"


def read_footer(blob: bytes) -> Tuple[str, int]:
    """Parse the maker-note footer. Returns (endian, original_offset)."""
    if len(blob) < FOOTER_SIZE:
        raise TooShortError(len(blob))
    footer = bytes(blob[-FOOTER_SIZE:])

    # The marker reads the same in either order, so peek it big-endian
    marker = struct.unpack('>H', footer[:2])[0]
    if marker == IFD_LITTLE_ENDIAN:
        endian = '<'
    elif marker == IFD_BIG_ENDIAN:
        endian = '>'
    else:
        raise InvalidByteOrderMarkerError(marker)

    magic, original_offset = struct.unpack(endian + 'HI', footer[2:])
    if magic != FOOTER_MAGIC:
        raise BadMagicError(magic)
    return endian, original_offset


def decode_maker_note(blob: bytes) -> List[DirectoryEntry]:
    """Decode a Canon maker-note blob into its directory entries."""
    endian, original_offset = read_footer(blob)
    logger.debug("Maker note: %d bytes, %s-endian, original offset %d",
                 len(blob), 'little' if endian == '<' else 'big',
                 original_offset)
    # Pointers are absolute in the file; shift them into blob coordinates
    return decode_directory(blob, -original_offset, endian)
