"""
Measurement serializer.

Renders one measurement as `NAME;TEMPERATURE` with exactly one fractional
digit and `.` as decimal separator, optionally followed by a newline.
Formatting goes through str.format, which never consults the locale.
"""

from stationgen.errors import SerializationError
from stationgen.model import Measurement


MAX_SERIALIZED_BYTES = 128
DELIMITER = ";"
NEWLINE = "\n"

# Longest temperature part we reserve room for when vetting names up front:
# delimiter, sign, up to five integer digits, point, one digit, newline.
_RESERVED_BYTES = len(";-99999.9\n")


def format_temperature(temperature: float) -> str:
    return f"{temperature:.1f}"


def serialize(measurement: Measurement, newline: bool = True) -> bytes:
    """
    Serialize one measurement.

    Args:
        measurement: Measurement to render
        newline: Append a trailing newline

    Returns:
        UTF-8 encoded line

    Raises:
        SerializationError: If the line does not fit MAX_SERIALIZED_BYTES
    """
    line = f"{measurement.name}{DELIMITER}{format_temperature(measurement.temperature)}"
    if newline:
        line += NEWLINE
    data = line.encode("utf-8")
    if len(data) >= MAX_SERIALIZED_BYTES:
        raise SerializationError(
            f"serialized measurement of '{measurement.name}' takes {len(data)} bytes, "
            f"limit is {MAX_SERIALIZED_BYTES - 1}"
        )
    return data


def name_fits(name: str) -> bool:
    """Whether a station name leaves room for any realistic temperature."""
    return len(name.encode("utf-8")) + _RESERVED_BYTES < MAX_SERIALIZED_BYTES


def check_name_fits(name: str) -> None:
    """
    Raises:
        SerializationError: If `name` is too long to serialize safely
    """
    if not name_fits(name):
        raise SerializationError(
            f"station name '{name[:32]}...' is {len(name.encode('utf-8'))} bytes, "
            f"too long for a {MAX_SERIALIZED_BYTES} byte line"
        )
