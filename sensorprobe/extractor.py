"""Metadata extraction -- turns standard Exif fields and the Canon maker
note into an :class:`~sensorprobe.models.ImageMetadata` record.

Each step fails fast with the first error it meets; there is no partial
result.
"""

import logging
import struct
from pathlib import Path
from typing import Dict, Tuple

from sensorprobe.errors import (
    FieldCountError,
    FieldTypeError,
    InvalidDataError,
    MissingFieldError,
    UnsupportedError,
)
from sensorprobe.ifd import (
    TYPE_ASCII,
    TYPE_LONG,
    TYPE_RATIONAL,
    TYPE_SHORT,
    TYPE_UNDEFINED,
    Rational,
    TypedValue,
    decode_maker_note,
    value_type_name,
)
from sensorprobe.models import (
    SENSITIVITY_TYPE_ISO,
    SENSITIVITY_TYPE_REI,
    SENSITIVITY_TYPE_REI_AND_ISO,
    SENSITIVITY_TYPE_SOS,
    SENSITIVITY_TYPE_SOS_AND_ISO,
    SENSITIVITY_TYPE_SOS_AND_REI,
    SENSITIVITY_TYPE_SOS_AND_REI_AND_ISO,
    ImageMetadata,
)
from sensorprobe.tagstore import (
    TAG_BODY_SERIAL_NUMBER,
    TAG_EXIF_VERSION,
    TAG_EXPOSURE_TIME,
    TAG_ISO_SPEED,
    TAG_MAKE,
    TAG_MAKER_NOTE,
    TAG_MODEL,
    TAG_RECOMMENDED_EXPOSURE_INDEX,
    TAG_SENSITIVITY_TYPE,
    TAG_STANDARD_OUTPUT_SENSITIVITY,
    ExifReadTagStore,
    TagStore,
    tag_name,
)

logger = logging.getLogger(__name__)

MIN_EXIF_VERSION = (2, 30)

# The only maker whose maker note layout is understood
SUPPORTED_MAKE = 'Canon'

# SensitivityType code -> tag holding the sensitivity value
SENSITIVITY_FIELDS: Dict[int, int] = {
    SENSITIVITY_TYPE_SOS: TAG_STANDARD_OUTPUT_SENSITIVITY,
    SENSITIVITY_TYPE_REI: TAG_RECOMMENDED_EXPOSURE_INDEX,
    SENSITIVITY_TYPE_ISO: TAG_ISO_SPEED,
    SENSITIVITY_TYPE_SOS_AND_REI: TAG_ISO_SPEED,
    SENSITIVITY_TYPE_SOS_AND_ISO: TAG_STANDARD_OUTPUT_SENSITIVITY,
    SENSITIVITY_TYPE_REI_AND_ISO: TAG_ISO_SPEED,
    SENSITIVITY_TYPE_SOS_AND_REI_AND_ISO: TAG_ISO_SPEED,
}

TAG_CANON_SHOTINFO = 0x0004
SHOTINFO_CAMERA_TEMPERATURE = 12
# ShotInfo stores temperature with a +128 bias
SHOTINFO_TEMPERATURE_BIAS = 128


def _to_f32(value: float) -> float:
    """Round a Python float to single precision."""
    return struct.unpack('<f', struct.pack('<f', value))[0]


# ---------------------------------------------------------------------------
# Field accessors
# ---------------------------------------------------------------------------

def _get_typed_field(store: TagStore, tag: int, type_id: int) -> TypedValue:
    field_name = tag_name(tag)
    value = store.get_field(tag)
    if value is None:
        raise MissingFieldError(field_name)
    if value.type_id != type_id:
        raise FieldTypeError(field_name, value_type_name(type_id),
                             value.type_name)
    return value


def _get_single(store: TagStore, tag: int, type_id: int):
    value = _get_typed_field(store, tag, type_id)
    if len(value.values) != 1:
        raise FieldCountError(tag_name(tag), 1, len(value.values))
    return value.values[0]


def get_str_field(store: TagStore, tag: int) -> str:
    raw = _get_single(store, tag, TYPE_ASCII)
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError:
        field_name = tag_name(tag)
        raise InvalidDataError(f"Bad UTF-8 in {field_name} field",
                               field=field_name) from None


def get_u16_field(store: TagStore, tag: int) -> int:
    return _get_single(store, tag, TYPE_SHORT)


def get_u32_field(store: TagStore, tag: int) -> int:
    return _get_single(store, tag, TYPE_LONG)


def get_rational_field(store: TagStore, tag: int) -> Rational:
    return _get_single(store, tag, TYPE_RATIONAL)


def get_exif_version(store: TagStore) -> Tuple[int, int]:
    """Read ExifVersion (e.g. b'0230') as a (major, minor) tuple."""
    data = _get_typed_field(store, TAG_EXIF_VERSION, TYPE_UNDEFINED).values
    if len(data) != 4:
        raise FieldCountError('ExifVersion', 4, len(data))
    major, minor = data[:2], data[2:]
    if not (major.isdigit() and minor.isdigit()):
        raise InvalidDataError(
            "Expected numeric ascii digits in ExifVersion field",
            field='ExifVersion')
    return int(major), int(minor)


def get_maker_note(store: TagStore) -> bytes:
    return _get_typed_field(store, TAG_MAKER_NOTE, TYPE_UNDEFINED).values


# ---------------------------------------------------------------------------
# Extraction steps
# ---------------------------------------------------------------------------

def check_exif_version(store: TagStore) -> Tuple[int, int]:
    version = get_exif_version(store)
    if version < MIN_EXIF_VERSION:
        raise UnsupportedError(
            f"Exif version {version[0]}.{version[1]:02d} is not supported "
            f"(need {MIN_EXIF_VERSION[0]}.{MIN_EXIF_VERSION[1]:02d} or later)")
    return version


def get_make(store: TagStore) -> str:
    return get_str_field(store, TAG_MAKE)


def compose_model_name(make: str, model: str) -> str:
    """Join make and model without repeating the make.

    >>> compose_model_name('Canon', 'Canon EOS 5D')
    'Canon EOS 5D'
    >>> compose_model_name('Nikon', 'D850')
    'Nikon D850'
    """
    if model.startswith(make):
        return model
    if not make.endswith(' '):
        make += ' '
    return make + model


def get_model(store: TagStore) -> str:
    make = get_make(store)
    model = get_str_field(store, TAG_MODEL)
    return compose_model_name(make, model)


def get_serial_number(store: TagStore) -> str:
    return get_str_field(store, TAG_BODY_SERIAL_NUMBER)


def get_sensitivity(store: TagStore) -> Tuple[int, int]:
    """Return (sensitivity, sensitivity_type)."""
    sensitivity_type = get_u16_field(store, TAG_SENSITIVITY_TYPE)
    tag = SENSITIVITY_FIELDS.get(sensitivity_type)
    if tag is None:
        raise UnsupportedError(f"Unknown SensitivityType {sensitivity_type}")
    logger.debug("SensitivityType %d -> %s", sensitivity_type, tag_name(tag))
    return get_u32_field(store, tag), sensitivity_type


def get_exposure_time(store: TagStore) -> float:
    return _to_f32(get_rational_field(store, TAG_EXPOSURE_TIME).to_float())


def get_temperature(store: TagStore) -> float:
    """Read the sensor temperature (C) from the Canon ShotInfo record."""
    make = get_make(store)
    if make != SUPPORTED_MAKE:
        raise UnsupportedError(
            f"Only {SUPPORTED_MAKE} cameras are supported (got {make!r})")

    for entry in decode_maker_note(get_maker_note(store)):
        if entry.tag != TAG_CANON_SHOTINFO:
            continue
        if entry.value.type_id != TYPE_SHORT:
            raise FieldTypeError('ShotInfo', value_type_name(TYPE_SHORT),
                                 entry.value.type_name)
        data = entry.value.values
        if len(data) <= SHOTINFO_CAMERA_TEMPERATURE:
            raise InvalidDataError("Missing Camera Temperature field",
                                   field='ShotInfo')
        return float(data[SHOTINFO_CAMERA_TEMPERATURE] - SHOTINFO_TEMPERATURE_BIAS)

    raise InvalidDataError("Canon ShotInfo maker note not found",
                           field='ShotInfo')


def extract_metadata(store: TagStore) -> ImageMetadata:
    """Run every extraction step against ``store``."""
    version = check_exif_version(store)
    logger.info("Exif version %d.%02d", *version)

    camera_model = get_model(store)
    serial_number = get_serial_number(store)
    sensitivity, sensitivity_type = get_sensitivity(store)
    exposure_time = get_exposure_time(store)
    temperature = get_temperature(store)

    logger.info("Extracted metadata for %s (serial %s)",
                camera_model, serial_number)
    return ImageMetadata(
        camera_model=camera_model,
        camera_serial_number=serial_number,
        sensor_sensitivity=sensitivity,
        sensitivity_type=sensitivity_type,
        exposure_time=exposure_time,
        temperature=temperature,
    )


class MetadataParser:
    """Reads :class:`ImageMetadata` from image files."""

    def read_file(self, path) -> ImageMetadata:
        path = Path(path)
        logger.info("Reading %s", path)
        return extract_metadata(ExifReadTagStore.from_file(path))
