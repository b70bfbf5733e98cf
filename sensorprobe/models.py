"""Data models for sensorprobe extraction results."""

from dataclasses import asdict, dataclass
from typing import Dict

# Codes defined for Exif tag 0x8830 (SensitivityType)
SENSITIVITY_TYPE_SOS = 1
SENSITIVITY_TYPE_REI = 2
SENSITIVITY_TYPE_ISO = 3
SENSITIVITY_TYPE_SOS_AND_REI = 4
SENSITIVITY_TYPE_SOS_AND_ISO = 5
SENSITIVITY_TYPE_REI_AND_ISO = 6
SENSITIVITY_TYPE_SOS_AND_REI_AND_ISO = 7

SENSITIVITY_TYPE_NAMES: Dict[int, str] = {
    SENSITIVITY_TYPE_SOS: 'SOS',
    SENSITIVITY_TYPE_REI: 'REI',
    SENSITIVITY_TYPE_ISO: 'ISO',
    SENSITIVITY_TYPE_SOS_AND_REI: 'SOS+REI',
    SENSITIVITY_TYPE_SOS_AND_ISO: 'SOS+ISO',
    SENSITIVITY_TYPE_REI_AND_ISO: 'REI+ISO',
    SENSITIVITY_TYPE_SOS_AND_REI_AND_ISO: 'SOS+REI+ISO',
}


@dataclass(frozen=True)
class ImageMetadata:
    """Camera metadata extracted from a single image."""
    camera_model: str
    camera_serial_number: str
    # Generally ISO, but may also be REI or SOS
    sensor_sensitivity: int
    # One of the SENSITIVITY_TYPE_* codes
    sensitivity_type: int
    exposure_time: float  # seconds
    temperature: float  # degrees C

    @property
    def sensitivity_type_name(self) -> str:
        return SENSITIVITY_TYPE_NAMES.get(self.sensitivity_type, 'Unknown')

    def to_dict(self) -> Dict:
        """Return the record as a plain dict (JSON-serializable)."""
        return asdict(self)
