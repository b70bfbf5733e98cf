"""sensorprobe -- camera sensor metadata from Exif and Canon maker notes."""

__version__ = "1.0.0"

from sensorprobe.models import ImageMetadata
from sensorprobe.errors import (
    InvalidDataError,
    MetadataIOError,
    SensorProbeError,
    UnsupportedError,
    UpstreamParseError,
)
from sensorprobe.ifd import DirectoryEntry, TypedValue, decode_maker_note
from sensorprobe.tagstore import ExifReadTagStore, MappingTagStore, TagStore
from sensorprobe.extractor import MetadataParser, extract_metadata


def read_file(path) -> ImageMetadata:
    """Extract :class:`ImageMetadata` from the image at ``path``."""
    return MetadataParser().read_file(path)


__all__ = [
    "__version__",
    "ImageMetadata",
    "DirectoryEntry",
    "TypedValue",
    "SensorProbeError",
    "MetadataIOError",
    "InvalidDataError",
    "UnsupportedError",
    "UpstreamParseError",
    "TagStore",
    "MappingTagStore",
    "ExifReadTagStore",
    "MetadataParser",
    "decode_maker_note",
    "extract_metadata",
    "read_file",
]
