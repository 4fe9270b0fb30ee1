"""
Command line entry point.

    stationgen -n 1000000 --truncate --seed 42
    stationgen --config run.yaml --stations my_stations.csv

Options given on the command line override the configuration file.
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from stationgen import __version__
from stationgen.config import GeneratorConfig, load_config
from stationgen.errors import StationGenError
from stationgen.sampler import SamplingMode
from stationgen.writer import make_measurements_file


logger = logging.getLogger("stationgen")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stationgen",
        description="Generate a synthetic NAME;TEMPERATURE weather station dataset",
    )
    parser.add_argument("-n", "--amount", type=int, help="number of measurements (default 100000)")
    parser.add_argument("-d", "--output-dir", help="output directory (default 'data')")
    parser.add_argument("-o", "--output-file", help="output file name (default 'mesurments.txt')")
    parser.add_argument(
        "--truncate", action="store_true", default=None,
        help="recreate the output file empty before writing",
    )
    seed = parser.add_mutually_exclusive_group()
    seed.add_argument("--seed", type=int, help="run-wide seed, makes the output reproducible")
    seed.add_argument(
        "--fixed-seed", action="store_true", default=None,
        help="use the default fixed seed (123456789)",
    )
    parser.add_argument("--stations", help="station catalog file (.csv/.txt, .yaml, .json)")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument(
        "--unbiased", action="store_true",
        help="sum all ten uniforms per sample instead of matching the reference datasets",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="only log errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def config_from_args(args: argparse.Namespace) -> GeneratorConfig:
    """Merge parsed arguments over the configuration file (or the defaults)."""
    config = load_config(args.config) if args.config else GeneratorConfig()

    overrides = {}
    if args.amount is not None:
        overrides["amount"] = args.amount
    if args.output_dir is not None:
        overrides["output_directory"] = args.output_dir
    if args.output_file is not None:
        overrides["output_filename"] = args.output_file
    if args.truncate:
        overrides["truncate_existing"] = True
    if args.seed is not None:
        overrides["use_fixed_seed"] = True
        overrides["fixed_seed"] = args.seed
    if args.fixed_seed:
        overrides["use_fixed_seed"] = True
    if args.stations is not None:
        overrides["stations_path"] = args.stations
    if args.unbiased:
        overrides["sampling_mode"] = SamplingMode.UNBIASED

    return replace(config, **overrides).validate()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        config = config_from_args(args)
        path = make_measurements_file(config)
    except StationGenError as e:
        logger.error("%s", e)
        return 1

    logger.info("done: %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
