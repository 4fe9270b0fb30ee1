"""
Tests for the measurement stream generator.

Includes the fixed-seed scenario published with the reference datasets:
seed 123456789, ten measurements, built-in catalog.
"""

import pytest

from stationgen.catalog import StationCatalog
from stationgen.generator import DEFAULT_AMOUNT, MeasurementStream
from stationgen.model import Measurement
from stationgen.sampler import StationSampler
from stationgen.serializer import serialize


REFERENCE_SEED = 123456789
REFERENCE_LINES = [
    "Moscow;-4.7",
    "Reykjavík;-6.2",
    "İzmir;7.4",
    "Kathmandu;7.8",
    "Hargeisa;11.2",
    "Budapest;0.8",
    "Vilnius;-4.5",
    "Addis Ababa;5.5",
    "Changsha;6.9",
    "Frankfurt;0.1",
]


def reference_stream(amount=10, seed=REFERENCE_SEED):
    samplers = StationCatalog.builtin().samplers(global_seed=seed)
    return MeasurementStream(samplers, amount=amount, global_seed=seed)


def small_samplers(seed=1):
    return [
        StationSampler("A", 0.0, seed=seed),
        StationSampler("B", 10.0, seed=seed),
        StationSampler("C", 20.0, seed=seed),
    ]


class TestReferenceScenario:
    """Fixed seed output must match the published sequence exactly."""

    def test_reference_sequence(self):
        lines = [serialize(m, newline=False).decode("utf-8") for m in reference_stream()]
        assert lines == REFERENCE_LINES

    def test_reference_sequence_is_repeatable(self):
        first = b"".join(serialize(m) for m in reference_stream(amount=500))
        second = b"".join(serialize(m) for m in reference_stream(amount=500))
        assert first == second

    def test_prefix_stable_across_amounts(self):
        short = [serialize(m) for m in reference_stream(amount=10)]
        long = [serialize(m) for m in reference_stream(amount=100)]
        assert long[:10] == short


class TestTermination:
    """Exactly `amount` items, then end-of-sequence forever."""

    def test_yields_exactly_amount(self):
        stream = MeasurementStream(small_samplers(), amount=25, seed=3)
        items = list(stream)
        assert len(items) == 25
        assert all(isinstance(m, Measurement) for m in items)

    def test_keeps_signalling_end(self):
        stream = MeasurementStream(small_samplers(), amount=2, seed=3)
        assert stream.next_measurement() is not None
        assert stream.next_measurement() is not None
        for _ in range(5):
            assert stream.next_measurement() is None
        with pytest.raises(StopIteration):
            next(stream)
        assert stream.emitted == 2

    def test_counters(self):
        stream = MeasurementStream(small_samplers(), amount=5, seed=3)
        assert stream.remaining == 5
        next(stream)
        assert stream.emitted == 1
        assert stream.remaining == 4
        assert not stream.exhausted
        list(stream)
        assert stream.exhausted
        assert stream.remaining == 0

    def test_zero_amount(self):
        stream = MeasurementStream(small_samplers(), amount=0, seed=3)
        assert list(stream) == []

    def test_zero_amount_without_stations(self):
        assert list(MeasurementStream([], amount=0, seed=3)) == []

    def test_default_amount(self):
        assert MeasurementStream(small_samplers(), seed=1).amount == DEFAULT_AMOUNT == 100_000

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            MeasurementStream(small_samplers(), amount=-1, seed=3)
        with pytest.raises(ValueError):
            MeasurementStream([], amount=1, seed=3)


class TestSelection:
    """Uniform station selection with an independent selector PRNG."""

    def test_every_station_gets_selected(self):
        stream = MeasurementStream(small_samplers(), amount=3000, seed=11)
        counts = {}
        for m in stream:
            counts[m.name] = counts.get(m.name, 0) + 1
        assert set(counts) == {"A", "B", "C"}
        for count in counts.values():
            assert 800 < count < 1200

    def test_single_station(self):
        stream = MeasurementStream([StationSampler("Solo", 1.0, seed=1)], amount=20, seed=5)
        assert {m.name for m in stream} == {"Solo"}

    def test_selector_seed_does_not_change_station_sequences(self):
        # whatever order the selector visits stations in, the n-th sample of a
        # station is the n-th value of its own PRNG
        def per_station(selector_seed):
            result = {}
            for m in MeasurementStream(small_samplers(seed=8), amount=300, seed=selector_seed):
                result.setdefault(m.name, []).append(m.temperature)
            return result

        a = per_station(1)
        b = per_station(2)
        for name in ("A", "B", "C"):
            n = min(len(a[name]), len(b[name]))
            assert a[name][:n] == b[name][:n]

    def test_global_seed_applies_to_selector(self):
        stream = MeasurementStream(small_samplers(), amount=1, global_seed=99)
        assert stream.seed == 99

    def test_explicit_selector_seed_beats_global(self):
        stream = MeasurementStream(small_samplers(), amount=1, seed=5, global_seed=99)
        assert stream.seed == 5
