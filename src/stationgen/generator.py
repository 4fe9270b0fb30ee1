"""
Measurement Stream Generator.

Produces a lazy, finite, forward-only sequence of exactly `amount`
measurements. Each step draws one uniform from the selector PRNG, picks a
station uniformly at random (with replacement) and asks that station's
sampler for a temperature.

The selector PRNG is its own Xoshiro256 instance. It never shares state with
the station samplers.
"""

from typing import Iterator, Optional, Sequence

from stationgen.model import Measurement
from stationgen.prng import Xoshiro256, select_index
from stationgen.sampler import StationSampler
from stationgen.seeds import resolve_seed


DEFAULT_AMOUNT = 100_000


class MeasurementStream:
    """
    Iterator over generated measurements.

    Properties:
        stations: Station samplers to select from
        amount: Total number of measurements to produce
        emitted: Number of measurements produced so far (<= amount)
        seed: Resolved seed of the selector PRNG
    """

    def __init__(
        self,
        stations: Sequence[StationSampler],
        amount: int = DEFAULT_AMOUNT,
        seed: Optional[int] = None,
        global_seed: Optional[int] = None,
    ):
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        if amount > 0 and len(stations) == 0:
            raise ValueError("cannot generate measurements without stations")

        self.stations = list(stations)
        self.amount = amount
        self.emitted = 0
        self.seed = resolve_seed(seed, global_seed)
        self._rng = Xoshiro256(self.seed)

    @property
    def remaining(self) -> int:
        return self.amount - self.emitted

    @property
    def exhausted(self) -> bool:
        return self.emitted >= self.amount

    def next_measurement(self) -> Optional[Measurement]:
        """
        Produce the next measurement.

        Returns:
            Measurement, or None once `amount` measurements were produced.
            Calling again after that keeps returning None.
        """
        if self.exhausted:
            return None
        self.emitted += 1

        index = select_index(self._rng.random(), len(self.stations))
        return self.stations[index].measure()

    def __iter__(self) -> Iterator[Measurement]:
        return self

    def __next__(self) -> Measurement:
        measurement = self.next_measurement()
        if measurement is None:
            raise StopIteration
        return measurement
