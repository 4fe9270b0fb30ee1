"""
Serialization helpers for station catalogs.

Provides JSON/YAML round-trip via an intermediate dict representation:

    {"stations": [{"name": ..., "mean": ..., "standard_deviation": ...}, ...]}

`standard_deviation` may be omitted on input, the default of 10 applies.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from stationgen.catalog import StationCatalog
from stationgen.errors import CatalogError
from stationgen.model import DEFAULT_STANDARD_DEVIATION, Station


def station_to_dict(s: Station) -> Dict[str, Any]:
    return {"name": s.name, "mean": s.mean, "standard_deviation": s.standard_deviation}


def station_from_dict(d: Dict[str, Any]) -> Station:
    if not isinstance(d, dict):
        raise CatalogError(f"station entry must be a mapping, got {type(d).__name__}")
    try:
        name = d["name"]
        mean = float(d["mean"])
        sd = d.get("standard_deviation")
        sd = DEFAULT_STANDARD_DEVIATION if sd is None else float(sd)
    except KeyError as e:
        raise CatalogError(f"station entry is missing {e}") from e
    except (TypeError, ValueError) as e:
        raise CatalogError(f"invalid station entry {d!r}: {e}") from e
    if not isinstance(name, str):
        raise CatalogError(f"station name must be a string, got {name!r}")
    return Station(name=name, mean=mean, standard_deviation=sd)


def catalog_to_dict(c: StationCatalog) -> Dict[str, Any]:
    return {"stations": [station_to_dict(s) for s in c]}


def catalog_from_dict(d: Any) -> StationCatalog:
    if not isinstance(d, dict) or not isinstance(d.get("stations"), list):
        raise CatalogError("catalog document must be a mapping with a 'stations' list")
    return StationCatalog.from_stations(station_from_dict(s) for s in d["stations"])


def catalog_to_json(c: StationCatalog) -> str:
    return json.dumps(catalog_to_dict(c), ensure_ascii=False, indent=2)


def catalog_from_json(s: str) -> StationCatalog:
    try:
        d = json.loads(s)
    except json.JSONDecodeError as e:
        raise CatalogError(f"invalid JSON catalog: {e}") from e
    return catalog_from_dict(d)


def catalog_to_yaml(c: StationCatalog) -> str:
    return yaml.safe_dump(catalog_to_dict(c), allow_unicode=True, sort_keys=False)


def catalog_from_yaml(s: str) -> StationCatalog:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise CatalogError(f"invalid YAML catalog: {e}") from e
    return catalog_from_dict(d)
