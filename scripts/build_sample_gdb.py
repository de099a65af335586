#!/usr/bin/env python
"""
Build the Employee sample file geodatabase.

Usage:
    python scripts/build_sample_gdb.py --help
    python scripts/build_sample_gdb.py
    python scripts/build_sample_gdb.py --output /tmp/staff.gdb --verify

Defaults come from BuilderSettings (GDB_* environment variables or .env).
Any existing data at the output path is removed without confirmation.
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from gdblib.dataset_builder import build_dataset
from gdblib.exceptions import GeodatabaseError
from gdblib.models import BuilderSettings
from gdblib.sample_data import employee_dataset_spec
from gdblib.spatial_utils import describe_dataset

logger = logging.getLogger("build_sample_gdb")


def parse_args(argv: Optional[Sequence[str]], settings: BuilderSettings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the Employee sample file geodatabase")
    parser.add_argument(
        "--output", default=settings.output_path, help="Destination container path (replaced if present)"
    )
    parser.add_argument("--layer", default=settings.layer_name, help="Layer name")
    parser.add_argument(
        "--srs", default=str(settings.srs), help="Layer spatial reference (EPSG code or well-known name)"
    )
    parser.add_argument("--driver", default=settings.driver, help="GDAL vector driver")
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Read the container back and log its layer summary",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Build the sample and report the outcome.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        settings = BuilderSettings()
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    args = parse_args(argv, settings)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        spec = employee_dataset_spec(
            args.output,
            layer_name=args.layer,
            srs=args.srs,
            driver=args.driver,
        )
    except ValidationError as e:
        print(f"Invalid dataset: {e}", file=sys.stderr)
        return 1

    try:
        result = build_dataset(spec, settings)
        if args.verify:
            layer = describe_dataset(result.output_path).layer(result.layer_name)
            logger.info(
                f"Verified {layer.name}: {layer.feature_count} feature(s), "
                f"fields {layer.field_names}, srs {layer.srs}"
            )
    except GeodatabaseError as e:
        print(f"Build failed ({e.kind.value}): {e}", file=sys.stderr)
        return 1

    print(f"Sample database written to {result.output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
