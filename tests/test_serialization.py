"""
Tests for station catalog serialization.

These tests ensure lossless JSON/YAML round-trip using the explicit
serialization functions in `stationgen.serialization`.
"""

import pytest

from stationgen.catalog import StationCatalog, load_catalog
from stationgen.errors import CatalogError
from stationgen.model import Station
from stationgen.serialization import (
    catalog_from_dict,
    catalog_from_json,
    catalog_from_yaml,
    catalog_to_dict,
    catalog_to_json,
    catalog_to_yaml,
    station_from_dict,
)


def build_sample_catalog() -> StationCatalog:
    return StationCatalog([
        Station(name="Reykjavík", mean=4.3),
        Station(name="Washington, D.C.", mean=14.6, standard_deviation=7.5),
        Station(name="Ürümqi", mean=7.4, standard_deviation=12.0),
    ])


def test_json_roundtrip():
    catalog = build_sample_catalog()
    before = catalog_to_dict(catalog)
    restored = catalog_from_json(catalog_to_json(catalog))
    assert catalog_to_dict(restored) == before


def test_yaml_roundtrip():
    catalog = build_sample_catalog()
    before = catalog_to_dict(catalog)
    restored = catalog_from_yaml(catalog_to_yaml(catalog))
    assert catalog_to_dict(restored) == before


def test_yaml_keeps_unicode_readable():
    assert "Reykjavík" in catalog_to_yaml(build_sample_catalog())


def test_missing_standard_deviation_defaults():
    station = station_from_dict({"name": "Oslo", "mean": 5.7})
    assert station.standard_deviation == 10.0


def test_builtin_catalog_roundtrip():
    catalog = StationCatalog.builtin()
    restored = catalog_from_dict(catalog_to_dict(catalog))
    assert list(restored) == list(catalog)


@pytest.mark.parametrize("doc", [
    None,
    [],
    {"stations": "Oslo"},
    {"stations": [{"mean": 1.0}]},
    {"stations": [{"name": "Oslo", "mean": "warm"}]},
    {"stations": [{"name": 3, "mean": 1.0}]},
    {"stations": ["Oslo"]},
])
def test_invalid_documents(doc):
    with pytest.raises(CatalogError):
        catalog_from_dict(doc)


def test_invalid_yaml_text():
    with pytest.raises(CatalogError):
        catalog_from_yaml("stations: [unclosed")


def test_invalid_json_text():
    with pytest.raises(CatalogError):
        catalog_from_json("{not json")


def test_load_catalog_yaml_and_json(tmp_path):
    catalog = build_sample_catalog()
    yaml_path = tmp_path / "stations.yaml"
    yaml_path.write_text(catalog_to_yaml(catalog), encoding="utf-8")
    json_path = tmp_path / "stations.json"
    json_path.write_text(catalog_to_json(catalog), encoding="utf-8")

    assert list(load_catalog(yaml_path)) == list(catalog)
    assert list(load_catalog(json_path)) == list(catalog)
