"""
Station Sampler: one pseudo-random temperature engine per station.

Temperatures follow an approximate normal distribution built from the
Central Limit Theorem: the sum of n uniform draws has mean n/2 and standard
deviation sqrt(n/12), so centering and dividing by sqrt(n/12) gives N(0, 1).
Rescaling by the station's standard deviation and mean gives the final
value. No inverse CDF and no transcendental calls per sample.

Sampling modes:
    - REFERENCE: byte-compatible with the reference dataset generator.
      It sums only n - 1 uniforms, centers on n/2 and multiplies by
      sqrt(n/12), so samples sit about 0.46 standard deviations below the
      mean with a spread of about 0.79 standard deviations.
    - UNBIASED: sums all n uniforms; converges to Normal(mean, sd).

ARCHITECTURAL RULE:
    Each sampler owns its PRNG. Only `sample()` advances it, so a
    station's sequence does not depend on how often other stations are
    selected.
"""

import math
from enum import Enum
from typing import Optional

from stationgen.errors import CatalogError
from stationgen.model import DEFAULT_STANDARD_DEVIATION, Measurement, Station
from stationgen.prng import Xoshiro256
from stationgen.seeds import resolve_seed


CLT_TERMS = 10
_CLT_SD = math.sqrt(CLT_TERMS / 12.0)


class SamplingMode(Enum):
    """How many uniforms are summed per sample."""
    REFERENCE = "reference"  # n - 1 uniforms, matches published datasets
    UNBIASED = "unbiased"    # n uniforms


class StationSampler:
    """
    Per-station temperature engine.

    Properties:
        name: Station name
        mean: Target mean temperature
        standard_deviation: Target standard deviation (10 when not given)
        seed: Resolved u64 seed of this station's PRNG
        mode: SamplingMode
        rng: Xoshiro256 instance exclusively owned by this sampler
    """

    def __init__(
        self,
        name: str,
        mean: float,
        standard_deviation: Optional[float] = None,
        seed: Optional[int] = None,
        global_seed: Optional[int] = None,
        mode: SamplingMode = SamplingMode.REFERENCE,
    ):
        if standard_deviation is None:
            standard_deviation = DEFAULT_STANDARD_DEVIATION
        if not standard_deviation > 0:
            raise CatalogError(
                f"standard deviation of station '{name}' must be > 0, got {standard_deviation}"
            )

        self.name = name
        self.mean = float(mean)
        self.standard_deviation = float(standard_deviation)
        self.seed = resolve_seed(seed, global_seed)
        self.mode = SamplingMode(mode)
        self.rng = Xoshiro256(self.seed)

    @classmethod
    def from_station(
        cls,
        station: Station,
        seed: Optional[int] = None,
        global_seed: Optional[int] = None,
        mode: SamplingMode = SamplingMode.REFERENCE,
    ) -> "StationSampler":
        return cls(
            station.name,
            station.mean,
            station.standard_deviation,
            seed=seed,
            global_seed=global_seed,
            mode=mode,
        )

    @property
    def draws_per_sample(self) -> int:
        if self.mode is SamplingMode.UNBIASED:
            return CLT_TERMS
        return CLT_TERMS - 1

    def standard_normal(self) -> float:
        """Return one approximately N(0, 1) value (N(-0.46, 0.79) in REFERENCE mode)."""
        total = 0.0
        for _ in range(self.draws_per_sample):
            total += self.rng.random()
        centered = total - CLT_TERMS / 2
        if self.mode is SamplingMode.UNBIASED:
            return centered / _CLT_SD
        return centered * _CLT_SD

    def sample(self) -> float:
        """Return the next temperature of this station."""
        return self.standard_normal() * self.standard_deviation + self.mean

    def measure(self) -> Measurement:
        return Measurement(name=self.name, temperature=self.sample())

    def __repr__(self) -> str:
        return (
            f"StationSampler(name={self.name!r}, mean={self.mean}, "
            f"standard_deviation={self.standard_deviation}, seed={self.seed}, "
            f"mode={self.mode.value})"
        )
