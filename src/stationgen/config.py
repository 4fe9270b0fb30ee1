"""
Generator configuration.

All recognized options with their defaults live on GeneratorConfig. A YAML
file with the same keys can be loaded on top of the defaults:

    amount: 1000000
    output_directory: data
    output_filename: mesurments.txt
    truncate_existing: true
    use_fixed_seed: true
    fixed_seed: 123456789
    stations_path: stations.yaml
    sampling_mode: reference
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from stationgen.errors import ConfigError
from stationgen.generator import DEFAULT_AMOUNT
from stationgen.prng import check_u64
from stationgen.sampler import SamplingMode
from stationgen.seeds import DEFAULT_FIXED_SEED


logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIRECTORY = "data"
DEFAULT_OUTPUT_FILENAME = "mesurments.txt"


@dataclass
class GeneratorConfig:
    """
    Options of one generator run.

    Properties:
        amount: Number of lines to write
        output_directory: Directory of the output file (created if missing)
        output_filename: Output file name
        truncate_existing: Recreate the file empty instead of writing over it in place
        use_fixed_seed: Seed every PRNG from `fixed_seed` (reproducible run)
        fixed_seed: Run-wide seed used when `use_fixed_seed` is set
        stations_path: Optional custom station catalog file
        sampling_mode: SamplingMode for all stations
    """

    amount: int = DEFAULT_AMOUNT
    output_directory: str = DEFAULT_OUTPUT_DIRECTORY
    output_filename: str = DEFAULT_OUTPUT_FILENAME
    truncate_existing: bool = False
    use_fixed_seed: bool = False
    fixed_seed: int = DEFAULT_FIXED_SEED
    stations_path: Optional[str] = None
    sampling_mode: SamplingMode = SamplingMode.REFERENCE

    @property
    def global_seed(self) -> Optional[int]:
        return self.fixed_seed if self.use_fixed_seed else None

    @property
    def output_path(self) -> Path:
        return Path(self.output_directory) / self.output_filename

    def validate(self) -> "GeneratorConfig":
        """
        Raises:
            ConfigError: On any invalid option
        """
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ConfigError(f"amount must be an integer, got {self.amount!r}")
        if self.amount < 0:
            raise ConfigError(f"amount must be >= 0, got {self.amount}")
        for name in ("truncate_existing", "use_fixed_seed"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigError(f"{name} must be true or false, got {value!r}")
        if not isinstance(self.output_filename, str) or not isinstance(self.output_directory, str):
            raise ConfigError("output_directory and output_filename must be strings")
        if self.stations_path is not None and not isinstance(self.stations_path, str):
            raise ConfigError(f"stations_path must be a string, got {self.stations_path!r}")
        if not self.output_filename:
            raise ConfigError("output_filename must not be empty")
        if not self.output_directory:
            raise ConfigError("output_directory must not be empty")
        try:
            check_u64(self.fixed_seed, "fixed_seed")
        except ValueError as e:
            raise ConfigError(str(e)) from e
        if not isinstance(self.sampling_mode, SamplingMode):
            raise ConfigError(f"sampling_mode must be a SamplingMode, got {self.sampling_mode!r}")
        return self


def config_to_dict(config: GeneratorConfig) -> Dict[str, Any]:
    d = asdict(config)
    d["sampling_mode"] = config.sampling_mode.value
    return d


def config_from_dict(d: Optional[Dict[str, Any]]) -> GeneratorConfig:
    """
    Build a config from a mapping; missing keys keep their defaults.

    Raises:
        ConfigError: On unknown keys or invalid values
    """
    if d is None:
        d = {}
    if not isinstance(d, dict):
        raise ConfigError(f"configuration must be a mapping, got {type(d).__name__}")

    known = {f.name for f in fields(GeneratorConfig)}
    unknown = sorted(set(d) - known)
    if unknown:
        raise ConfigError(f"unknown configuration keys: {', '.join(unknown)}")

    values = dict(d)
    if "sampling_mode" in values:
        try:
            values["sampling_mode"] = SamplingMode(values["sampling_mode"])
        except ValueError as e:
            raise ConfigError(str(e)) from e

    return GeneratorConfig(**values).validate()


def load_config(path: Union[str, Path]) -> GeneratorConfig:
    """
    Load a YAML configuration file.

    Raises:
        ConfigError: If the file can't be read or parsed, or holds invalid options
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"can't read configuration '{path}': {e}") from e
    try:
        d = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in '{path}': {e}") from e

    logger.debug("loaded configuration from %s", path)
    return config_from_dict(d)


def config_to_yaml(config: GeneratorConfig) -> str:
    return yaml.safe_dump(config_to_dict(config), sort_keys=False)
