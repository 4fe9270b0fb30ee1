"""
Tests for the per-station temperature sampler.
"""

import math

import pytest

from stationgen.errors import CatalogError
from stationgen.model import Measurement, Station
from stationgen.prng import Xoshiro256
from stationgen.sampler import CLT_TERMS, SamplingMode, StationSampler


def _stats(values):
    n = len(values)
    mean = sum(values) / n
    var = sum((v - mean) ** 2 for v in values) / n
    return mean, math.sqrt(var)


class TestConstruction:
    """Defaults and validation."""

    def test_default_standard_deviation(self):
        sampler = StationSampler("Oslo", 5.7, seed=1)
        assert sampler.standard_deviation == 10.0

    def test_explicit_seed_beats_global(self):
        sampler = StationSampler("Oslo", 5.7, seed=1, global_seed=2)
        assert sampler.seed == 1

    def test_global_seed(self):
        sampler = StationSampler("Oslo", 5.7, global_seed=2)
        assert sampler.seed == 2

    @pytest.mark.parametrize("sd", [0, -1.0, float("nan")])
    def test_rejects_non_positive_standard_deviation(self, sd):
        with pytest.raises(CatalogError):
            StationSampler("Oslo", 5.7, standard_deviation=sd, seed=1)

    def test_from_station(self):
        station = Station(name="Lima", mean=19.3, standard_deviation=3.1)
        sampler = StationSampler.from_station(station, global_seed=9)
        assert sampler.name == "Lima"
        assert sampler.mean == 19.3
        assert sampler.standard_deviation == 3.1
        assert sampler.seed == 9

    def test_draws_per_sample(self):
        assert StationSampler("A", 0, seed=1).draws_per_sample == CLT_TERMS - 1
        unbiased = StationSampler("A", 0, seed=1, mode=SamplingMode.UNBIASED)
        assert unbiased.draws_per_sample == CLT_TERMS

    def test_mode_accepts_string_value(self):
        sampler = StationSampler("A", 0, seed=1, mode="unbiased")
        assert sampler.mode is SamplingMode.UNBIASED


class TestSampling:
    """Values produced by sample()."""

    def test_reference_first_value(self):
        sampler = StationSampler("Moscow", 5.8, seed=123456789)
        assert sampler.sample() == pytest.approx(5.8 - 10.51106, abs=1e-4)

    def test_unbiased_first_value(self):
        sampler = StationSampler("X", 0.0, 1.0, seed=123456789, mode=SamplingMode.UNBIASED)
        assert sampler.sample() == pytest.approx(-0.931319, abs=1e-5)

    def test_same_seed_same_samples(self):
        a = StationSampler("A", 10.0, seed=77)
        b = StationSampler("B", 10.0, seed=77)
        assert [a.sample() for _ in range(50)] == [b.sample() for _ in range(50)]

    def test_samples_are_bounded(self):
        # the CLT sum of uniforms cannot leave (-n/2, n/2) before normalizing
        sampler = StationSampler("A", 0.0, 1.0, seed=3, mode=SamplingMode.UNBIASED)
        bound = (CLT_TERMS / 2) / math.sqrt(CLT_TERMS / 12.0)
        for _ in range(2000):
            assert -bound < sampler.sample() < bound

    def test_measure_carries_name(self):
        m = StationSampler("Tromsø", 2.9, seed=1).measure()
        assert isinstance(m, Measurement)
        assert m.name == "Tromsø"

    def test_unbiased_converges_to_normal(self):
        sampler = StationSampler("A", 0.0, 1.0, seed=2024, mode=SamplingMode.UNBIASED)
        mean, sd = _stats([sampler.sample() for _ in range(100_000)])
        assert abs(mean) < 0.05
        assert abs(sd - 1.0) < 0.05

    def test_unbiased_divides_by_sum_standard_deviation(self):
        sampler = StationSampler("A", 0.0, 1.0, seed=1, mode=SamplingMode.UNBIASED)
        rng = Xoshiro256(1)
        for _ in range(20):
            total = sum(rng.random() for _ in range(CLT_TERMS))
            expected = (total - CLT_TERMS / 2) / math.sqrt(CLT_TERMS / 12.0)
            assert sampler.standard_normal() == pytest.approx(expected, rel=1e-12)

    def test_reference_multiplies_by_sum_standard_deviation(self):
        sampler = StationSampler("A", 0.0, 1.0, seed=1)
        rng = Xoshiro256(1)
        for _ in range(20):
            total = sum(rng.random() for _ in range(CLT_TERMS - 1))
            expected = (total - CLT_TERMS / 2) * math.sqrt(CLT_TERMS / 12.0)
            assert sampler.standard_normal() == pytest.approx(expected, rel=1e-12)

    def test_unbiased_scales_mean_and_sd(self):
        sampler = StationSampler("A", 20.0, 4.0, seed=5, mode=SamplingMode.UNBIASED)
        mean, sd = _stats([sampler.sample() for _ in range(20_000)])
        assert mean == pytest.approx(20.0, abs=0.2)
        assert sd == pytest.approx(4.0, abs=0.2)

    def test_reference_mode_offset(self):
        # n - 1 uniforms centered on n/2: mean -0.5 * sqrt(10/12), sd sqrt(9/12 * 10/12)
        sampler = StationSampler("A", 0.0, 1.0, seed=2024)
        mean, sd = _stats([sampler.sample() for _ in range(50_000)])
        assert mean == pytest.approx(-0.5 * math.sqrt(10 / 12), abs=0.05)
        assert sd == pytest.approx(math.sqrt(0.75 * 10 / 12), abs=0.05)
