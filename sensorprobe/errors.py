"""Exception classes for sensorprobe.

Every failure raised by the library derives from :class:`SensorProbeError`,
so callers can catch one type.  Subclasses carry structured attributes
(tag ids, offsets, expected/actual types) so tests and callers do not
have to parse messages.
"""

from typing import Optional


class SensorProbeError(Exception):
    """Base exception for all sensorprobe errors."""

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message)


class MetadataIOError(SensorProbeError):
    """Raised when the input file cannot be opened or read."""

    def __init__(self, message: str, path=None):
        self.path = path
        super().__init__(message)


class InvalidDataError(SensorProbeError):
    """Raised for structurally malformed or inconsistent field content."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class MissingFieldError(InvalidDataError):
    """A required field is absent from the tag store."""

    def __init__(self, field: str):
        super().__init__(f"Missing {field} field", field=field)


class FieldTypeError(InvalidDataError):
    """A field holds a different value type than expected."""

    def __init__(self, field: str, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected {expected} data for {field} field, got {actual}",
            field=field,
        )


class FieldCountError(InvalidDataError):
    """A field holds the wrong number of elements."""

    def __init__(self, field: str, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected {expected} {field} value(s), got {actual}",
            field=field,
        )


class UnsupportedError(SensorProbeError):
    """Raised for well-formed input that lies outside the supported domain.

    Examples: Exif version older than 2.30, an unknown SensitivityType
    code, or a camera maker whose maker note cannot be decoded.
    """


class UpstreamParseError(SensorProbeError):
    """Raised when the Exif container itself cannot be parsed."""


# ---------------------------------------------------------------------------
# Maker-note / directory decoding
# ---------------------------------------------------------------------------

class DecodeError(InvalidDataError):
    """Base class for binary directory decoding failures."""


class TooShortError(DecodeError):
    """The maker-note blob cannot hold its 8-byte footer."""

    def __init__(self, length: int):
        self.length = length
        super().__init__(f"Maker note too short for footer: {length} byte(s)")


class InvalidByteOrderMarkerError(DecodeError):
    """The footer byte-order marker is neither 'II' nor 'MM'."""

    def __init__(self, marker: int):
        self.marker = marker
        super().__init__(f"Invalid byte order marker 0x{marker:04X}")


class BadMagicError(DecodeError):
    """The footer magic number is not 42."""

    def __init__(self, magic: int):
        self.magic = magic
        super().__init__(f"Invalid maker note magic {magic} (expected 42)")


class UnsupportedTypeError(DecodeError):
    """A directory entry uses an unknown value type code."""

    def __init__(self, type_id: int, tag: Optional[int] = None):
        self.type_id = type_id
        self.tag = tag
        where = f" in tag 0x{tag:04X}" if tag is not None else ""
        super().__init__(f"Unsupported value type {type_id}{where}")


class ValueOverflowError(DecodeError):
    """width * count does not fit the 32-bit address space of the format."""

    def __init__(self, tag: int, type_id: int, count: int):
        self.tag = tag
        self.type_id = type_id
        self.count = count
        super().__init__(
            f"Value size overflow in tag 0x{tag:04X}: "
            f"type {type_id} x {count} element(s)"
        )


class OutOfBoundsError(DecodeError):
    """An out-of-line value points outside the buffer."""

    def __init__(self, tag: int, offset: int, length: int, buffer_length: int):
        self.tag = tag
        self.offset = offset
        self.length = length
        self.buffer_length = buffer_length
        super().__init__(
            f"Value of tag 0x{tag:04X} at offset {offset} "
            f"(+{length} bytes) is outside the {buffer_length}-byte buffer"
        )


class TruncatedDirectoryError(DecodeError):
    """The directory ends before its declared entries do."""

    def __init__(self, offset: int, needed: int, buffer_length: int):
        self.offset = offset
        self.needed = needed
        self.buffer_length = buffer_length
        super().__init__(
            f"Directory truncated: need {needed} byte(s) at offset {offset}, "
            f"buffer is {buffer_length} byte(s)"
        )
