"""Binary IFD decoding for maker-note blobs.

Re-exports the public names so callers can ``from sensorprobe.ifd import X``.
"""

# --- values.py: typed value model ---
from sensorprobe.ifd.values import (  # noqa: F401
    TYPE_BYTE,
    TYPE_ASCII,
    TYPE_SHORT,
    TYPE_LONG,
    TYPE_RATIONAL,
    TYPE_SBYTE,
    TYPE_UNDEFINED,
    TYPE_SSHORT,
    TYPE_SLONG,
    TYPE_SRATIONAL,
    TYPE_FLOAT,
    TYPE_DOUBLE,
    VALUE_TYPES,
    VALUE_TYPE_NAMES,
    Rational,
    TypedValue,
    value_type_name,
    element_width,
    decode_value,
)

# --- parser.py: directory decoding ---
from sensorprobe.ifd.parser import (  # noqa: F401
    TAG_NAMES,
    DirectoryEntry,
    decode_directory,
)

# --- makernote.py: Canon footer handling ---
from sensorprobe.ifd.makernote import (  # noqa: F401
    IFD_BIG_ENDIAN,
    IFD_LITTLE_ENDIAN,
    read_footer,
    decode_maker_note,
)
