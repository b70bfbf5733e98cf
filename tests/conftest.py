"""Shared test fixtures -- synthetic maker-note blobs, Exif TIFF files and
in-memory tag stores."""

import struct

import pytest

from sensorprobe.ifd import (
    TYPE_ASCII,
    TYPE_LONG,
    TYPE_RATIONAL,
    TYPE_SHORT,
    TYPE_SRATIONAL,
    TYPE_UNDEFINED,
    VALUE_TYPES,
    Rational,
    TypedValue,
)
from sensorprobe.tagstore import (
    TAG_BODY_SERIAL_NUMBER,
    TAG_EXIF_VERSION,
    TAG_EXPOSURE_TIME,
    TAG_ISO_SPEED,
    TAG_MAKE,
    TAG_MAKER_NOTE,
    TAG_MODEL,
    TAG_SENSITIVITY_TYPE,
    MappingTagStore,
)

EXIF_IFD_POINTER_TAG = 0x8769


def pack_values(type_id, values, endian='<'):
    """Encode ``values`` as the raw bytes of a ``type_id`` entry.

    ASCII and UNDEFINED take bytes; rationals take (num, den) pairs;
    everything else takes a list of numbers.
    """
    if type_id in (TYPE_ASCII, TYPE_UNDEFINED):
        return bytes(values)
    fmt_char = VALUE_TYPES[type_id][1]
    if type_id in (TYPE_RATIONAL, TYPE_SRATIONAL):
        flat = [n for pair in values for n in pair]
        return struct.pack(endian + fmt_char * len(values), *flat)
    return struct.pack(endian + fmt_char * len(values), *values)


def _padded(data):
    return data + b'\x00' * (len(data) % 2)


def build_ifd(entries, start, endian='<', next_ifd=0):
    """Build one IFD located at file offset ``start``.

    Args:
        entries: List of (tag_id, type_id, count, value_bytes) tuples.
            Values of 4 bytes or less are stored inline, the rest in a
            data area right after the IFD.
        start: Absolute offset the IFD will occupy; used for pointers.

    Returns:
        bytes: IFD + out-of-line data area.
    """
    n = len(entries)
    data_start = start + 2 + 12 * n + 4
    ifd_bytes = struct.pack(endian + 'H', n)
    data_bytes = b''

    for tag_id, type_id, count, value in entries:
        ifd_bytes += struct.pack(endian + 'HHI', tag_id, type_id, count)
        if len(value) <= 4:
            ifd_bytes += value + b'\x00' * (4 - len(value))
        else:
            ifd_bytes += struct.pack(endian + 'I', data_start + len(data_bytes))
            data_bytes += _padded(value)

    ifd_bytes += struct.pack(endian + 'I', next_ifd)
    return ifd_bytes + data_bytes


def build_makernote(entries, endian='<', original_offset=0, marker=None,
                    magic=42):
    """Build a Canon-style maker-note blob with an 8-byte footer.

    Out-of-line pointers are absolute: they assume the blob sits at
    ``original_offset`` in the enclosing file, and the footer records that
    offset.
    """
    if marker is None:
        marker = b'II' if endian == '<' else b'MM'
    body = build_ifd(entries, original_offset, endian)
    return body + marker + struct.pack(endian + 'HI', magic, original_offset)


def shot_info(temperature_raw=148, length=29):
    """A ShotInfo SHORT array with the raw temperature at index 12."""
    values = [0] * length
    values[0] = length * 2
    if length > 12:
        values[12] = temperature_raw
    return values


def canon_makernote_entries(shot_values=None, endian='<'):
    """Maker-note entries: ShotInfo plus an ImageType string."""
    if shot_values is None:
        shot_values = shot_info()
    image_type = b'Canon EOS R5\x00'
    return [
        (0x0004, TYPE_SHORT, len(shot_values),
         pack_values(TYPE_SHORT, shot_values, endian)),
        (0x0006, TYPE_ASCII, len(image_type), image_type),
    ]


def build_exif_tiff(ifd0_entries, exif_entries, maker_note_entries=None,
                    endian='<'):
    """Build a TIFF file with IFD0, an Exif sub-IFD and an optional maker note.

    The maker note is placed first in the Exif data area so its absolute
    offset is known before it is built.
    """
    bo = b'II' if endian == '<' else b'MM'
    ifd0_count = len(ifd0_entries) + 1
    ifd0_data = sum(len(_padded(v)) for _, _, _, v in ifd0_entries if len(v) > 4)
    exif_start = 8 + 2 + 12 * ifd0_count + 4 + ifd0_data

    exif_entries = list(exif_entries)
    if maker_note_entries is not None:
        exif_count = len(exif_entries) + 1
        maker_note_offset = exif_start + 2 + 12 * exif_count + 4
        blob = build_makernote(maker_note_entries, endian,
                               original_offset=maker_note_offset)
        exif_entries.insert(0, (TAG_MAKER_NOTE, TYPE_UNDEFINED, len(blob), blob))

    ifd0_entries = list(ifd0_entries) + [
        (EXIF_IFD_POINTER_TAG, TYPE_LONG, 1, struct.pack(endian + 'I', exif_start)),
    ]
    header = bo + struct.pack(endian + 'HI', 42, 8)
    ifd0 = build_ifd(ifd0_entries, 8, endian)
    exif = build_ifd(exif_entries, exif_start, endian)
    assert len(header + ifd0) == exif_start
    return header + ifd0 + exif


def canon_tiff_entries(make=b'Canon', model=b'Canon EOS R5',
                       serial=b'012345678901', exif_version=b'0231',
                       sensitivity_type=3, iso=400, exposure=(1, 250),
                       endian='<'):
    """(ifd0_entries, exif_entries) for a well-formed Canon image."""
    make = make + b'\x00'
    model = model + b'\x00'
    serial = serial + b'\x00'
    ifd0 = [
        (TAG_MAKE, TYPE_ASCII, len(make), make),
        (TAG_MODEL, TYPE_ASCII, len(model), model),
    ]
    exif = [
        (TAG_EXPOSURE_TIME, TYPE_RATIONAL, 1,
         pack_values(TYPE_RATIONAL, [exposure], endian)),
        (TAG_SENSITIVITY_TYPE, TYPE_SHORT, 1,
         pack_values(TYPE_SHORT, [sensitivity_type], endian)),
        (TAG_ISO_SPEED, TYPE_LONG, 1, pack_values(TYPE_LONG, [iso], endian)),
        (TAG_EXIF_VERSION, TYPE_UNDEFINED, 4, exif_version),
        (TAG_BODY_SERIAL_NUMBER, TYPE_ASCII, len(serial), serial),
    ]
    return ifd0, exif


# ---------------------------------------------------------------------------
# In-memory tag store helpers
# ---------------------------------------------------------------------------

def ascii_value(text):
    return TypedValue(TYPE_ASCII, (text.encode('utf-8'),))


def short_value(*values):
    return TypedValue(TYPE_SHORT, tuple(values))


def long_value(*values):
    return TypedValue(TYPE_LONG, tuple(values))


def rational_value(numerator, denominator):
    return TypedValue(TYPE_RATIONAL, (Rational(numerator, denominator),))


def undefined_value(data):
    return TypedValue(TYPE_UNDEFINED, bytes(data))


def canon_fields(maker_note=None):
    """Tag-id -> TypedValue mapping for a well-formed Canon image."""
    if maker_note is None:
        maker_note = build_makernote(canon_makernote_entries(),
                                     original_offset=1000)
    return {
        TAG_EXIF_VERSION: undefined_value(b'0230'),
        TAG_MAKE: ascii_value('Canon'),
        TAG_MODEL: ascii_value('Canon EOS 5D'),
        TAG_BODY_SERIAL_NUMBER: ascii_value('123456789'),
        TAG_SENSITIVITY_TYPE: short_value(3),
        TAG_ISO_SPEED: long_value(400),
        TAG_EXPOSURE_TIME: rational_value(1, 250),
        TAG_MAKER_NOTE: undefined_value(maker_note),
    }


@pytest.fixture
def canon_store():
    """A MappingTagStore holding a complete Canon field set."""
    return MappingTagStore(canon_fields())


@pytest.fixture
def tmp_canon_tiff(tmp_path):
    """A synthetic little-endian Canon TIFF with Exif and a maker note."""
    ifd0, exif = canon_tiff_entries()
    content = build_exif_tiff(ifd0, exif, canon_makernote_entries())
    filepath = tmp_path / 'canon.tif'
    filepath.write_bytes(content)
    return filepath


@pytest.fixture
def tmp_nikon_tiff(tmp_path):
    """Same layout as tmp_canon_tiff but Make is Nikon."""
    ifd0, exif = canon_tiff_entries(make=b'Nikon', model=b'D850')
    content = build_exif_tiff(ifd0, exif, canon_makernote_entries())
    filepath = tmp_path / 'nikon.tif'
    filepath.write_bytes(content)
    return filepath
