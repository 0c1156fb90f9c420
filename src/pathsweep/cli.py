#!/usr/bin/env python3
"""
Command line entry points.

    pathsweep -t rc+ -x 64 -y 64 -o rc_plus.tsv
    pathsweep-compare naive.tsv rc.tsv rc_plus.tsv --plot compare.png
"""

import argparse
import logging
import sys

from .analysis import compare_profiles, load_profile
from .core.config import SimulationConfig, create_config_from_file
from .runner import run_simulation
from .strategies import STRATEGY_NAMES
from .visualization import plot_memory_profiles

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Minimum-cost column sweep comparing backpointer storage strategies")
    parser.add_argument('-t', '--simulation-type', choices=STRATEGY_NAMES,
                        help="Backpointer storage strategy (default: naive)")
    parser.add_argument('-o', '--out-file', help="Memory profile dump path (default: /dev/null)")
    parser.add_argument('-x', '--width', type=int, help="Grid width (default: 16)")
    parser.add_argument('-y', '--height', type=int, help="Grid height (default: 16)")
    parser.add_argument('-d', '--debug', action='store_true', default=None,
                        help="Print the grid after the sweep (dense strategies only)")
    parser.add_argument('-w', '--workers', type=int, help="Worker threads per sweep step")
    parser.add_argument('--config', help="YAML or JSON configuration file")
    parser.add_argument('--log-level', help="Logging level (default: INFO)")
    return parser


def load_config(args: argparse.Namespace) -> SimulationConfig:
    """Configuration file (or defaults) with command line flags on top."""
    base = create_config_from_file(args.config) if args.config else SimulationConfig()
    return base.with_overrides(
        strategy=args.simulation_type,
        out_file=args.out_file,
        width=args.width,
        height=args.height,
        debug=args.debug,
        max_workers=args.workers,
        log_level=args.log_level.upper() if args.log_level else None,
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
    except (ValueError, FileNotFoundError) as e:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logger.error(f"Invalid configuration: {e}")
        return 2

    logging.basicConfig(level=config.logging.log_level.upper(), format=LOG_FORMAT)
    config.log_configuration_summary()

    try:
        result = run_simulation(config)
    except OSError as e:
        logger.error(f"Run aborted: {e}")
        return 1

    print(result.path)
    return 0


def compare_main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Compare memory profile dumps")
    parser.add_argument('profiles', nargs='+', help="Profile dumps written by pathsweep")
    parser.add_argument('--plot', help="Write a comparison plot to this image path")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    try:
        summary = compare_profiles(args.profiles)
        print(summary.to_string())
        if args.plot:
            plot_memory_profiles({path: load_profile(path) for path in args.profiles}, args.plot)
    except (OSError, ValueError) as e:
        logger.error(f"Comparison failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
