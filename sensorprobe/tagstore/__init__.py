"""Tag stores -- sources of standard Exif fields."""

from sensorprobe.tagstore.base import (  # noqa: F401
    TAG_BODY_SERIAL_NUMBER,
    TAG_EXIF_VERSION,
    TAG_EXPOSURE_TIME,
    TAG_ISO_SPEED,
    TAG_MAKE,
    TAG_MAKER_NOTE,
    TAG_MODEL,
    TAG_NAMES,
    TAG_RECOMMENDED_EXPOSURE_INDEX,
    TAG_SENSITIVITY_TYPE,
    TAG_STANDARD_OUTPUT_SENSITIVITY,
    MappingTagStore,
    TagStore,
    tag_name,
)
from sensorprobe.tagstore.exifread_store import (  # noqa: F401
    ExifReadTagStore,
    convert_ifd_tag,
)
