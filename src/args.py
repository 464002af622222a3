"""Argument parsing functionality for pinup."""

import argparse
from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="pinup",
        description=(
            "pinup - update pinned versions in URL module imports, "
            "honouring #= #~ #^ #< constraint fragments"
        ),
        add_help=True,
    )

    parser.add_argument("FILES",
                        help="Source files to update in place",
                        nargs="+",
                        type=str)
    parser.add_argument("-r", "--registry",
                        dest="REGISTRIES",
                        help="Registry to consult, in precedence order (repeatable; default: all)",
                        action="append",
                        type=str,
                        choices=Constants.SUPPORTED_REGISTRIES)
    parser.add_argument("--dry-run",
                        dest="DRY_RUN",
                        help="Report what would change without writing files.",
                        action="store_true")
    parser.add_argument("--test",
                        dest="TEST_COMMAND",
                        help="Shell command run after each file is written; the file is restored if it fails.",
                        action="store",
                        type=str)
    parser.add_argument("--error-on-failures",
                        dest="ERROR_ON_FAILURES",
                        help="Exit with a non-zero status code if any specifier could not be resolved.",
                        action="store_true")
    parser.add_argument("--max-workers",
                        dest="MAX_WORKERS",
                        help="Maximum concurrent registry lookups",
                        action="store",
                        type=int)
    parser.add_argument("--timeout",
                        dest="REQUEST_TIMEOUT",
                        help="HTTP request timeout in seconds",
                        action="store",
                        type=int)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level (default: PINUP_LOG_LEVEL or INFO)",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Only log warnings and errors.",
                        action="store_true")

    return parser.parse_args(argv)
