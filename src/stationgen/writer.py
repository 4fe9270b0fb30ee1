"""
Sink Writer: output directory/file handling and the write loop.

The loop pulls one measurement at a time, serializes it and writes it before
asking for the next one, so memory use does not grow with `amount`.

Filesystem failures are wrapped in SinkError naming the failing operation.
They are fatal for the run; nothing is retried or cleaned up.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Iterable, Optional, Union

from stationgen.catalog import StationCatalog, load_catalog
from stationgen.config import GeneratorConfig
from stationgen.errors import SinkError
from stationgen.generator import MeasurementStream
from stationgen.model import Measurement
from stationgen.serializer import serialize


logger = logging.getLogger(__name__)

PROGRESS_EVERY = 1_000_000


def ensure_directory(directory: Union[str, Path]) -> Path:
    """
    Create `directory` (and parents) unless it already exists.

    Raises:
        SinkError: If the directory can't be created
    """
    directory = Path(directory)
    if directory.is_dir():
        return directory
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SinkError("create directory", directory, e) from e
    logger.info("created output directory %s", directory)
    return directory


def open_measurements_file(
    directory: Union[str, Path],
    filename: str,
    truncate: bool = False,
) -> BinaryIO:
    """
    Open the output file for writing at position 0.

    Args:
        directory: Output directory, created if missing
        filename: File name inside `directory`
        truncate: Recreate the file empty. Otherwise an existing file is
            opened read-write and overwritten in place from the start
            (bytes past the new end are kept); a missing file is created.

    Returns:
        Buffered binary file object; the caller closes it

    Raises:
        SinkError: On any filesystem failure
    """
    path = ensure_directory(directory) / filename

    if truncate:
        try:
            return open(path, "wb")
        except OSError as e:
            raise SinkError("create file", path, e) from e

    try:
        return open(path, "r+b")
    except FileNotFoundError:
        pass
    except OSError as e:
        raise SinkError("open file", path, e) from e

    try:
        return open(path, "xb")
    except OSError as e:
        raise SinkError("create file", path, e) from e


def write_measurements(measurements: Iterable[Measurement], fh: BinaryIO) -> int:
    """
    Serialize and write every measurement to `fh`.

    Returns:
        Number of lines written

    Raises:
        SinkError: If a write fails
    """
    count = 0
    name = getattr(fh, "name", "<stream>")
    for measurement in measurements:
        data = serialize(measurement, newline=True)
        try:
            fh.write(data)
        except OSError as e:
            raise SinkError("write to", name, e) from e
        count += 1
        if count % PROGRESS_EVERY == 0:
            logger.info("generated %d measurements", count)
    return count


def make_measurements_file(
    config: Optional[GeneratorConfig] = None,
    catalog: Optional[StationCatalog] = None,
) -> Path:
    """
    Generate a complete measurements file.

    Args:
        config: Run options (defaults when None)
        catalog: Station catalog; when None, `config.stations_path` is loaded
            if set, else the built-in catalog is used

    Returns:
        Path of the written file

    Raises:
        ConfigError, CatalogError, SinkError
    """
    config = (config or GeneratorConfig()).validate()

    if catalog is None:
        if config.stations_path:
            catalog = load_catalog(config.stations_path)
        else:
            catalog = StationCatalog.builtin()

    global_seed = config.global_seed
    samplers = catalog.samplers(global_seed=global_seed, mode=config.sampling_mode)
    stream = MeasurementStream(samplers, amount=config.amount, global_seed=global_seed)
    logger.info(
        "writing %d measurements from %d stations to %s (selector seed %d)",
        config.amount, len(catalog), config.output_path, stream.seed,
    )

    fh = open_measurements_file(
        config.output_directory,
        config.output_filename,
        truncate=config.truncate_existing,
    )
    try:
        with fh:
            written = write_measurements(stream, fh)
    except OSError as e:
        # buffered data is flushed on close
        raise SinkError("write to", config.output_path, e) from e

    logger.info("wrote %d measurements to %s", written, config.output_path)
    return config.output_path
