"""pinup - constraint-aware updater for versioned URL imports."""
import logging
import os
import subprocess
import sys
from typing import List, Sequence

from args import parse_args
from cli_config import apply_config, load_config
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes
from registry import get_registries
from registry.base import Registry
from update import UpdateResult, update_file
from versioning.models import ResolutionOutcome

logger = logging.getLogger(__name__)


def setup_logging(args) -> None:
    """Configure logging from --loglevel, --quiet and --logfile."""
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    level = "WARNING" if getattr(args, "QUIET", False) else None
    configure_logging(level)
    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        add_file_handler(log_file)
        logger.info("Logging to file: %s", log_file)


def format_outcome(outcome: ResolutionOutcome) -> str:
    """One report line per outcome."""
    if not outcome.success:
        return f"[failed] {outcome.specifier}: {outcome.message}"
    if outcome.changed:
        return f"[updated] {outcome.replaced.old} -> {outcome.replaced.new}"
    return f"[latest] {outcome.specifier}"


def report(path: str, result: UpdateResult, quiet: bool = False, dry_run: bool = False) -> None:
    """Write the per-outcome report for ``path`` to stdout.

    In quiet mode only failures are reported.
    """
    lines: List[str] = []
    for outcome in result.outcomes:
        if quiet and outcome.success:
            continue
        lines.append(format_outcome(outcome))
    if not lines:
        return
    header = f"{path} (dry run)" if dry_run else path
    sys.stdout.write(header + "\n")
    for line in lines:
        sys.stdout.write("  " + line + "\n")


def run_test_command(command: str) -> bool:
    """Run the verification command through the shell; True on exit status 0."""
    logger.info("Running test command: %s", command)
    completed = subprocess.run(command, shell=True, check=False)
    if completed.returncode != 0:
        logger.error("Test command failed with exit status %d", completed.returncode)
        return False
    return True


def process_file(path: str, registries: Sequence[Registry], args) -> UpdateResult:
    """Update one file, verifying it with --test and restoring it on failure.

    Raises:
        OSError: the file cannot be read or written.
        SystemExit: the test command failed (after the file is restored).
    """
    dry_run = getattr(args, "DRY_RUN", False)
    result = update_file(path, registries, dry_run=dry_run)
    test_command = getattr(args, "TEST_COMMAND", None)
    if result.changed and not dry_run and test_command:
        if not run_test_command(test_command):
            with open(path, "w", encoding="utf-8", newline="") as handle:
                handle.write(result.original)
            logger.error("Restored %s after failed test command", path)
            report(path, result, quiet=getattr(args, "QUIET", False))
            sys.exit(ExitCodes.TEST_FAILED.value)
    return result


def main(argv=None) -> None:
    """Main function of the program."""
    args = parse_args(argv)
    setup_logging(args)
    apply_config(load_config(getattr(args, "CONFIG", None)), args)

    try:
        registries = get_registries(getattr(args, "REGISTRIES", None))
    except ValueError as e:
        logger.error("%s", e)
        sys.exit(ExitCodes.CONFIG_ERROR.value)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(
                event="function_entry",
                component="cli",
                action="main",
                registries=[registry.name for registry in registries],
                files=len(args.FILES),
            )
        )

    failed = False
    for path in args.FILES:
        try:
            result = process_file(path, registries, args)
        except FileNotFoundError as e:
            logger.error("File not found: %s, aborting", e)
            sys.exit(ExitCodes.FILE_ERROR.value)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("IO error: %s, aborting", e)
            sys.exit(ExitCodes.FILE_ERROR.value)
        report(path, result, quiet=args.QUIET, dry_run=args.DRY_RUN)
        failed = failed or bool(result.failures)

    if failed and args.ERROR_ON_FAILURES:
        sys.exit(ExitCodes.EXIT_WARNINGS.value)
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
