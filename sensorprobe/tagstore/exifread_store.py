"""Tag store backed by the ExifRead library."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import exifread

from sensorprobe.errors import (
    MetadataIOError,
    UnsupportedTypeError,
    UpstreamParseError,
)
from sensorprobe.ifd.values import (
    TYPE_ASCII,
    TYPE_RATIONAL,
    TYPE_SRATIONAL,
    TYPE_UNDEFINED,
    VALUE_TYPES,
    Rational,
    TypedValue,
)
from sensorprobe.tagstore.base import TagStore, tag_name

logger = logging.getLogger(__name__)

# ExifRead key prefixes that belong to the primary image
PRIMARY_IFDS = ('Image', 'EXIF')


def convert_ifd_tag(ifd_tag) -> TypedValue:
    """Convert an ExifRead ``IfdTag`` into a :class:`TypedValue`.

    ExifRead hands back ASCII as an already NUL-split ``str`` (or ``bytes``
    when it is not valid UTF-8), UNDEFINED as a list of byte values, and
    rationals as ``Ratio`` objects.
    """
    type_id = int(ifd_tag.field_type)
    values = ifd_tag.values

    if type_id not in VALUE_TYPES:
        raise UnsupportedTypeError(type_id, ifd_tag.tag)

    if type_id == TYPE_ASCII:
        if isinstance(values, str):
            values = values.encode('utf-8')
        return TypedValue(type_id, (bytes(values),))

    if type_id == TYPE_UNDEFINED:
        if isinstance(values, str):
            values = values.encode('latin-1')
        return TypedValue(type_id, bytes(values))

    if not isinstance(values, (list, tuple)):
        values = [values]

    if type_id in (TYPE_RATIONAL, TYPE_SRATIONAL):
        return TypedValue(type_id, tuple(
            Rational(int(v.numerator), int(v.denominator)) for v in values))
    return TypedValue(type_id, tuple(values))


class ExifReadTagStore(TagStore):
    """Primary-image Exif fields as parsed by ``exifread.process_file``."""

    def __init__(self, tags: Dict[str, Any]):
        self._tags = {}
        for key, ifd_tag in tags.items():
            ifd_name = key.split(' ', 1)[0]
            tag_id = getattr(ifd_tag, 'tag', None)
            if ifd_name not in PRIMARY_IFDS or tag_id is None:
                continue
            # IFD0 comes first; it wins over a duplicate in the Exif IFD
            self._tags.setdefault(tag_id, ifd_tag)
        logger.debug("Indexed %d primary Exif field(s)", len(self._tags))

    @classmethod
    def from_file(cls, path) -> 'ExifReadTagStore':
        """Parse ``path`` with ExifRead.

        Raises:
            MetadataIOError: The file cannot be opened or read.
            UpstreamParseError: ExifRead failed or found no Exif data.
        """
        path = Path(path)
        try:
            with open(path, 'rb') as fh:
                try:
                    tags = exifread.process_file(fh, details=True)
                except OSError:
                    raise
                except Exception as e:
                    raise UpstreamParseError(
                        f"Failed to parse Exif data in {path.name}: {e}") from e
        except OSError as e:
            raise MetadataIOError(f"Cannot read {path}: {e}", path=path) from e

        if not tags:
            raise UpstreamParseError(f"No Exif data found in {path.name}")
        return cls(tags)

    def get_field(self, tag: int) -> Optional[TypedValue]:
        ifd_tag = self._tags.get(tag)
        if ifd_tag is None:
            logger.debug("Field %s not present", tag_name(tag))
            return None
        return convert_ifd_tag(ifd_tag)
