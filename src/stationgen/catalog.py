"""
Station Catalog.

An ordered, dynamically-sized collection of Station entries. The built-in
catalog holds the classic 413-station table; custom catalogs can be loaded
from `;`-separated text files (`name;mean[;standard_deviation]`, the shape of
the usual `weather_stations.csv`) or from YAML/JSON documents.

INVARIANTS:
    - At least one station
    - Station names are unique, non-empty and contain no `;` or newline
    - Every standard deviation is > 0
    - Every name leaves room for a temperature in one serialized line
"""

import csv
from io import StringIO
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Union

from stationgen.builtin_stations import BUILTIN_STATIONS
from stationgen.errors import CatalogError, SerializationError
from stationgen.model import DEFAULT_STANDARD_DEVIATION, Station
from stationgen.sampler import SamplingMode, StationSampler
from stationgen.serializer import DELIMITER, check_name_fits


class StationCatalog:
    """Validated, ordered list of stations."""

    def __init__(self, stations: Iterable[Station]):
        self._stations: List[Station] = list(stations)
        self._by_name: Dict[str, Station] = {}
        self._validate()

    def _validate(self) -> None:
        if not self._stations:
            raise CatalogError("station catalog is empty")

        for station in self._stations:
            name = station.name
            if not name or not name.strip():
                raise CatalogError("station name must not be empty")
            if DELIMITER in name or "\n" in name or "\r" in name:
                raise CatalogError(f"station name {name!r} contains a delimiter or newline")
            try:
                check_name_fits(name)
            except SerializationError as e:
                raise CatalogError(str(e)) from e
            if not station.standard_deviation > 0:
                raise CatalogError(
                    f"standard deviation of station '{name}' must be > 0, "
                    f"got {station.standard_deviation}"
                )
            if name in self._by_name:
                raise CatalogError(f"duplicate station '{name}'")
            self._by_name[name] = station

    @classmethod
    def builtin(cls) -> "StationCatalog":
        """The built-in 413-station catalog (default standard deviation everywhere)."""
        return cls.from_stations(Station(name=name, mean=mean) for name, mean in BUILTIN_STATIONS)

    @classmethod
    def from_stations(cls, stations: Iterable[Station]) -> "StationCatalog":
        """
        Raises:
            CatalogError: If the stations break a catalog invariant
        """
        return cls(stations)

    def __len__(self) -> int:
        return len(self._stations)

    def __iter__(self) -> Iterator[Station]:
        return iter(self._stations)

    def __getitem__(self, index: int) -> Station:
        return self._stations[index]

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def names(self) -> List[str]:
        return [station.name for station in self._stations]

    def get(self, name: str) -> Optional[Station]:
        """
        Retrieve a station by name.

        Returns:
            Station or None if not found
        """
        return self._by_name.get(name)

    def samplers(
        self,
        global_seed: Optional[int] = None,
        mode: SamplingMode = SamplingMode.REFERENCE,
    ) -> List[StationSampler]:
        """
        Build one sampler per station, in catalog order.

        Each sampler gets its own PRNG. With a global seed all of them are
        seeded identically, which makes the whole run reproducible.
        """
        return [
            StationSampler.from_station(station, global_seed=global_seed, mode=mode)
            for station in self._stations
        ]


def parse_catalog_csv(text: str) -> StationCatalog:
    """
    Parse `name;mean[;standard_deviation]` lines.

    Blank lines and lines starting with `#` are skipped. Names are taken
    verbatim (they may contain commas, quotes and inner spaces).

    Raises:
        CatalogError: On malformed lines or an invalid resulting catalog
    """
    stations: List[Station] = []
    reader = csv.reader(StringIO(text), delimiter=DELIMITER, quoting=csv.QUOTE_NONE)
    for row in reader:
        if not any(field.strip() for field in row) or row[0].lstrip().startswith("#"):
            continue

        if len(row) not in (2, 3):
            raise CatalogError(
                f"line {reader.line_num}: expected 'name;mean[;standard_deviation]', "
                f"got {DELIMITER.join(row)!r}"
            )

        name = row[0].strip()
        try:
            mean = float(row[1])
            sd = float(row[2]) if len(row) == 3 and row[2].strip() else DEFAULT_STANDARD_DEVIATION
        except ValueError as e:
            raise CatalogError(f"line {reader.line_num}: {e}") from e

        stations.append(Station(name=name, mean=mean, standard_deviation=sd))

    return StationCatalog.from_stations(stations)


def _read_catalog_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogError(f"can't read station catalog '{path}': {e}") from e


def load_catalog_csv(path: Union[str, Path]) -> StationCatalog:
    return parse_catalog_csv(_read_catalog_text(Path(path)))


def load_catalog(path: Union[str, Path]) -> StationCatalog:
    """
    Load a catalog file, choosing the format from the extension.

        .yaml / .yml -> YAML document
        .json        -> JSON document
        anything else -> `;`-separated text

    Raises:
        CatalogError: If the file cannot be read or is invalid
    """
    from stationgen.serialization import catalog_from_json, catalog_from_yaml

    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return catalog_from_yaml(_read_catalog_text(path))
    if suffix == ".json":
        return catalog_from_json(_read_catalog_text(path))
    return load_catalog_csv(path)
