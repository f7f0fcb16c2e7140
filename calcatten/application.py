"""Application factory — argument parsing, logging setup, run.

Errors raised by the core are reported here and mapped to the exit code;
nothing below this layer terminates the process.
"""

from __future__ import annotations

import argparse
import logging
import sys

from calcatten.constants import APP_NAME, APP_VERSION
from calcatten.core.errors import CalcAttenError, UsageError
from calcatten.core.material_database import MaterialService
from calcatten.core.physics_engine import PhysicsEngine
from calcatten.core.shielding_sequencer import ShieldingSequencer
from calcatten.export.csv_export import CsvExporter
from calcatten.export.json_export import JsonExporter

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="calcatten",
        description="Gamma-ray attenuation through layers of shielding.",
    )
    parser.add_argument("script", nargs="?", default=None,
                        help="Command script (Gamma(keV): / Shield(type,cm): lines)")
    parser.add_argument("--data-dir", default=None,
                        help="Directory of <material>Data.txt tables "
                             "(default: bundled tables)")
    parser.add_argument("--strict", action="store_true",
                        help="Fail on unrecognized script commands")
    parser.add_argument("--cache", action="store_true",
                        help="Read each material table once per run")
    parser.add_argument("--csv", default=None, metavar="PATH",
                        help="Write the per-layer breakdown as CSV")
    parser.add_argument("--json", default=None, metavar="PATH",
                        help="Write the result as JSON")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true",
                           help="Show debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true",
                           help="Only show warnings and errors")
    parser.add_argument("--version", action="version",
                        version=f"{APP_NAME} {APP_VERSION}")
    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Line-oriented diagnostics on stdout."""
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    logging.basicConfig(
        level=level, format="%(message)s", stream=sys.stdout,
    )


def run(argv: list[str] | None = None) -> int:
    """Parse *argv*, run the script, and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    try:
        if args.script is None:
            parser.print_usage(sys.stderr)
            raise UsageError("Usage: calcatten <macro>")

        service = MaterialService(args.data_dir, cache=args.cache)
        sequencer = ShieldingSequencer(PhysicsEngine(service), strict=args.strict)
        result = sequencer.run_script(args.script)

        if args.csv:
            CsvExporter().export_layers(result, args.csv)
            logger.info("Wrote layer breakdown to %s", args.csv)
        if args.json:
            JsonExporter().export_result(result, args.json)
            logger.info("Wrote result to %s", args.json)
    except CalcAttenError as exc:
        logger.error("Error: %s", exc)
        return EXIT_FAILURE
    except OSError as exc:
        logger.error("Error: %s", exc)
        return EXIT_FAILURE

    logger.info(
        "Final I/I_init = %g (%d layers, %.3f dB)",
        result.transmission, len(result.layers), result.attenuation_dB,
    )
    return EXIT_SUCCESS


def main() -> None:
    sys.exit(run())
