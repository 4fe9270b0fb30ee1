"""
Core data objects.

    - Station: static reference entry of the station catalog
    - Measurement: one (station name, temperature) sample

These are plain data. Sampling state lives in `stationgen.sampler`,
rendering in `stationgen.serializer`.
"""

from dataclasses import dataclass


DEFAULT_STANDARD_DEVIATION = 10.0


@dataclass(frozen=True)
class Station:
    """
    A named location with a target temperature distribution.

    Properties:
        name: Station name as written to the output (UTF-8)
        mean: Mean temperature in degrees Celsius
        standard_deviation: Spread of the distribution, must be > 0
    """

    name: str
    mean: float
    standard_deviation: float = DEFAULT_STANDARD_DEVIATION


@dataclass(frozen=True)
class Measurement:
    """
    One temperature sample.

    Created per sample, serialized immediately and discarded. Never
    collected by the generator itself.
    """

    name: str
    temperature: float
