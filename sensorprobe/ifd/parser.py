"""IFD (Image File Directory) decoder for in-memory maker-note buffers.

Every offset and length read from the buffer is attacker-controlled, so
each read is bounds-checked and reported as a typed
:class:`~sensorprobe.errors.DecodeError` instead of ``struct.error``.
"""

import logging
import struct
from dataclasses import dataclass
from typing import Dict, List

from sensorprobe.errors import (
    OutOfBoundsError,
    TruncatedDirectoryError,
    ValueOverflowError,
)
from sensorprobe.ifd.values import TypedValue, decode_value, element_width
from sensorprobe.log import TRACE

logger = logging.getLogger(__name__)

# Values up to this many bytes live in the entry record itself
INLINE_THRESHOLD = 4
ENTRY_SIZE = 12
# Offsets in the format are 32-bit
MAX_VALUE_BYTES = 0xFFFFFFFF

# Canon maker-note tag names
TAG_NAMES: Dict[int, str] = {
    0x0001: 'CameraSettings', 0x0002: 'FocalLength',
    0x0003: 'FlashInfo', 0x0004: 'ShotInfo', 0x0005: 'Panorama',
    0x0006: 'ImageType', 0x0007: 'FirmwareVersion',
    0x0008: 'FileNumber', 0x0009: 'OwnerName',
    0x000C: 'SerialNumber', 0x000D: 'CameraInfo',
    0x000F: 'CustomFunctions', 0x0010: 'ModelID',
    0x0012: 'PictureInfo', 0x0013: 'ThumbnailImageValidArea',
    0x0015: 'SerialNumberFormat', 0x001A: 'SuperMacro',
    0x0026: 'AFInfo2', 0x0083: 'OriginalDecisionDataOffset',
    0x0093: 'FileInfo', 0x0095: 'LensModel',
    0x0096: 'InternalSerialNumber', 0x0097: 'DustRemovalData',
    0x00A0: 'ProcessingInfo', 0x00AA: 'MeasuredColor',
    0x00B4: 'ColorSpace', 0x00E0: 'SensorInfo',
    0x4001: 'ColorData', 0x4008: 'PictureStyleUserDef',
}


@dataclass(frozen=True)
class DirectoryEntry:
    """A single decoded IFD entry."""
    tag: int
    value: TypedValue

    @property
    def tag_name(self) -> str:
        return TAG_NAMES.get(self.tag, f'Tag_0x{self.tag:04X}')


def _unpack(fmt: str, buffer: bytes, offset: int) -> tuple:
    size = struct.calcsize(fmt)
    if offset + size > len(buffer):
        raise TruncatedDirectoryError(offset, size, len(buffer))
    return struct.unpack_from(fmt, buffer, offset)


def decode_directory(buffer: bytes, pointer_fixup: int,
                     endian: str) -> List[DirectoryEntry]:
    """Decode the IFD at the start of ``buffer``.

    Args:
        buffer: The bytes holding the directory and its out-of-line data.
        pointer_fixup: Added to every out-of-line value pointer to map it
            into ``buffer`` coordinates.
        endian: '<' for little-endian, '>' for big-endian.

    Returns:
        The entries in directory order.
    """
    buffer = bytes(buffer)
    (num_entries,) = _unpack(endian + 'H', buffer, 0)
    logger.debug("Decoding directory: %d entries, fixup %d, %d-byte buffer",
                 num_entries, pointer_fixup, len(buffer))

    entries = []
    offset = 2
    for _ in range(num_entries):
        tag_id, dtype, count = _unpack(endian + 'HHI', buffer, offset)
        width = element_width(dtype, tag_id)
        total = width * count
        if total > MAX_VALUE_BYTES:
            raise ValueOverflowError(tag_id, dtype, count)

        if total <= INLINE_THRESHOLD:
            value_start = offset + 8
            if value_start + INLINE_THRESHOLD > len(buffer):
                raise TruncatedDirectoryError(
                    value_start, INLINE_THRESHOLD, len(buffer))
        else:
            (pointer,) = _unpack(endian + 'I', buffer, offset + 8)
            value_start = pointer + pointer_fixup
            if value_start < 0 or value_start + total > len(buffer):
                raise OutOfBoundsError(tag_id, value_start, total, len(buffer))

        value = decode_value(dtype, buffer[value_start:value_start + total],
                             endian)
        entry = DirectoryEntry(tag_id, value)
        logger.log(TRACE, "  %s (0x%04X): %s x %d", entry.tag_name, tag_id,
                   value.type_name, count)
        entries.append(entry)
        offset += ENTRY_SIZE

    return entries
