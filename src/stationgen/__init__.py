"""
stationgen: synthetic weather station measurement generator.

Writes large `NAME;TEMPERATURE` datasets for benchmarking data-processing
tools. The generator is fully deterministic for a given seed:

    - prng: xoshiro256++ engines, one per station plus one selector
    - sampler: Central Limit Theorem temperatures per station
    - generator: uniform station selection, exactly `amount` measurements
    - serializer: one `;`-delimited line per measurement
    - writer: output directory/file handling

Everything that touches the filesystem lives in `writer` and `cli`.
"""

__version__ = "0.1.0"
