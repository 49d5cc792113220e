"""Command line entry point of the arginfo updater."""

from __future__ import annotations

import argparse
import sys
import tempfile
from pathlib import Path
from typing import Sequence

from .config import UpdaterOptions, resolve_php_binary, resolve_stub_generator
from .errors import ArginfoUpdaterError
from .Log import Log
from .updater import ArginfoUpdater

USAGE = (
    "Usage: update-arginfo \\\n"
    "         [--clear-cache] [--cache-path=/path/to/cache] "
    "[--stub-file=/path/to/ext.stub.php] \\\n"
    "         <extension-name> <extension-source-path> <extension-build-dir>\n"
)


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser.

    Returns:
        Configured :class:`argparse.ArgumentParser` instance.
    """

    parser = argparse.ArgumentParser(
        prog="update-arginfo",
        description="Regenerate arginfo declarations in PHP extension sources",
        usage=USAGE,
        add_help=False,
    )
    parser.add_argument("positionals", nargs="*", help=argparse.SUPPRESS)
    parser.add_argument("-h", "--help", action="store_true", help="Show usage and exit")
    parser.add_argument(
        "--clear-cache",
        action="store_true",
        help="Regenerate stub files even when cached copies exist",
    )
    parser.add_argument(
        "--cache-path",
        default=tempfile.gettempdir(),
        help="Root directory of the stub cache (default: system temp dir)",
    )
    parser.add_argument("--stub-file", help="Stub template forwarded to the stub generator")
    parser.add_argument("--php-binary", help="PHP interpreter (default: $PHP_BINARY or php)")
    parser.add_argument(
        "--stub-generator",
        help="Extension introspection script (default: $ARGINFO_STUB_GENERATOR "
        "or bin/gen-stub.php)",
    )
    parser.add_argument("--log-file", help="Also write the log to this file")
    parser.add_argument("--debug", action="store_true", help="Verbose console output")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any file or arginfo entry was skipped",
    )
    return parser


def options_from_args(args: argparse.Namespace) -> UpdaterOptions:
    extension_name, source_dir, build_dir = args.positionals
    return UpdaterOptions(
        extension_name=extension_name,
        source_dir=Path(source_dir),
        build_dir=Path(build_dir),
        clear_cache=args.clear_cache,
        cache_root=Path(args.cache_path),
        stub_file=Path(args.stub_file) if args.stub_file else None,
        php_binary=resolve_php_binary(args.php_binary),
        stub_generator=resolve_stub_generator(args.stub_generator),
        strict=args.strict,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point.

    Args:
        argv: Optional argument list for testing purposes.

    Returns:
        Exit status code.
    """

    parser = build_parser()
    args = parser.parse_intermixed_args(list(argv) if argv is not None else None)
    if args.help or len(args.positionals) != 3:
        sys.stderr.write(USAGE)
        return 1

    logger = Log(log_file=args.log_file, debug_mode=args.debug).logger
    options = options_from_args(args)
    try:
        summary = ArginfoUpdater(options).run()
    except ArginfoUpdaterError as exc:
        logger.error(str(exc))
        return 1

    if options.strict and summary.skipped:
        for item in summary.skipped:
            logger.warning(f"Skipped {item}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
