"""Abstract tag store -- the narrow interface to an Exif parsing library."""

from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional

from sensorprobe.ifd.values import TypedValue

# Standard Exif tag ids consulted during extraction
TAG_MAKE = 0x010F
TAG_MODEL = 0x0110
TAG_EXPOSURE_TIME = 0x829A
TAG_SENSITIVITY_TYPE = 0x8830
TAG_STANDARD_OUTPUT_SENSITIVITY = 0x8831
TAG_RECOMMENDED_EXPOSURE_INDEX = 0x8832
TAG_ISO_SPEED = 0x8833
TAG_EXIF_VERSION = 0x9000
TAG_MAKER_NOTE = 0x927C
TAG_BODY_SERIAL_NUMBER = 0xA431

TAG_NAMES: Dict[int, str] = {
    TAG_MAKE: 'Make',
    TAG_MODEL: 'Model',
    TAG_EXPOSURE_TIME: 'ExposureTime',
    TAG_SENSITIVITY_TYPE: 'SensitivityType',
    TAG_STANDARD_OUTPUT_SENSITIVITY: 'StandardOutputSensitivity',
    TAG_RECOMMENDED_EXPOSURE_INDEX: 'RecommendedExposureIndex',
    TAG_ISO_SPEED: 'ISOSpeed',
    TAG_EXIF_VERSION: 'ExifVersion',
    TAG_MAKER_NOTE: 'MakerNote',
    TAG_BODY_SERIAL_NUMBER: 'BodySerialNumber',
}


def tag_name(tag: int) -> str:
    return TAG_NAMES.get(tag, f'Tag_0x{tag:04X}')


class TagStore(ABC):
    """Read-only view of the primary image's Exif fields, keyed by tag id."""

    @abstractmethod
    def get_field(self, tag: int) -> Optional[TypedValue]:
        """Return the value stored under ``tag``, or None if absent."""
        ...


class MappingTagStore(TagStore):
    """Tag store over an in-memory ``{tag_id: TypedValue}`` mapping."""

    def __init__(self, fields: Optional[Mapping[int, TypedValue]] = None):
        self._fields = dict(fields or {})

    def get_field(self, tag: int) -> Optional[TypedValue]:
        return self._fields.get(tag)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        names = ', '.join(tag_name(t) for t in sorted(self._fields))
        return f'MappingTagStore({names})'
