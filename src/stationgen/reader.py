"""
Measurement reader.

Reads a generated file back and aggregates min/mean/max per station, the
computation the generated data is meant to benchmark. Used to check output
files, not optimized for speed.

Usage:
    python -m stationgen.reader data/mesurments.txt
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, Union

from stationgen.errors import MeasurementFormatError
from stationgen.model import Measurement
from stationgen.serializer import DELIMITER


@dataclass
class StationSummary:
    """Running aggregate of one station's temperatures."""
    count: int = 0
    total: float = 0.0
    minimum: float = float("inf")
    maximum: float = float("-inf")

    def add(self, temperature: float) -> None:
        self.count += 1
        self.total += temperature
        self.minimum = min(self.minimum, temperature)
        self.maximum = max(self.maximum, temperature)

    @property
    def mean(self) -> float:
        return self.total / self.count if self.count else 0.0


def parse_line(line: str) -> Measurement:
    """
    Parse one `NAME;TEMPERATURE` line (trailing newline allowed).

    Raises:
        MeasurementFormatError: If the line has no delimiter or a bad number
    """
    line = line.rstrip("\r\n")
    name, sep, value = line.rpartition(DELIMITER)
    if not sep or not name:
        raise MeasurementFormatError(f"malformed measurement line: {line!r}")
    try:
        temperature = float(value)
    except ValueError as e:
        raise MeasurementFormatError(f"bad temperature in line {line!r}") from e
    return Measurement(name=name, temperature=temperature)


def iter_measurements(path: Union[str, Path]) -> Iterator[Measurement]:
    """Stream measurements from a file, skipping empty lines."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        for line in f:
            if line.strip():
                yield parse_line(line)


def summarize(measurements: Iterable[Measurement]) -> Dict[str, StationSummary]:
    summaries: Dict[str, StationSummary] = {}
    for m in measurements:
        summary = summaries.get(m.name)
        if summary is None:
            summary = StationSummary()
            summaries[m.name] = summary
        summary.add(m.temperature)
    return summaries


def format_summary(summaries: Dict[str, StationSummary]) -> str:
    """Render as `{Abha=-23.0/18.0/59.2, ...}` sorted by station name."""
    parts = [
        f"{name}={s.minimum:.1f}/{s.mean:.1f}/{s.maximum:.1f}"
        for name, s in sorted(summaries.items())
    ]
    return "{" + ", ".join(parts) + "}"


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Summarize a measurements file per station")
    parser.add_argument("path", help="Path to a NAME;TEMPERATURE file")
    args = parser.parse_args()

    print(format_summary(summarize(iter_measurements(args.path))))
