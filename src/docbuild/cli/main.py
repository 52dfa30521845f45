"""CLI entrypoint for docbuild."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from docbuild import __version__
from docbuild.builder import build_docs
from docbuild.config import apply_overrides, load_config, parse_compiler_command
from docbuild.constants.branding import CLI_DESCRIPTION
from docbuild.constants.config import EXIT_BUILD_FAILED, EXIT_CONFIG_ERROR, EXIT_OK
from docbuild.exceptions import ConfigError, DocBuildError
from docbuild.exceptions.validation import format_errors
from docbuild.reporting import ProgressReporter, render_failure_summary, write_build_report
from docbuild.validation import preflight_validate

DEFAULT_COMMAND: str = "build"
COMMANDS: frozenset[str] = frozenset({DEFAULT_COMMAND, "validate-config"})
TOP_LEVEL_FLAGS: frozenset[str] = frozenset({"-h", "--help", "--version"})


def _add_root_and_config(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-r", "--root", type=Path, default=Path("."), help="Build root (default: current directory)")
    parser.add_argument("-c", "--config", type=Path, default=None, help="Explicit config file")


def _add_build_options(parser: argparse.ArgumentParser) -> None:
    _add_root_and_config(parser)
    parser.add_argument("-s", "--source", type=Path, default=None, help="Source directory, relative to the root")
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=None,
        help="Directory generated files are written to, relative to the root",
    )
    parser.add_argument(
        "--compiler",
        default=None,
        help='Compiler command, shell-quoted (default: "node ./node_modules/booklisp/index.js")',
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=None,
        help="Number of compiler processes to run at once (default: 1)",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Per-file compiler timeout in seconds")
    parser.add_argument(
        "--ignore-failures",
        action="store_true",
        default=None,
        help="Exit 0 even when the compiler fails on some files",
    )
    parser.add_argument("--report", type=Path, default=None, help="Write a JSON build report to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug diagnostics")


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="docbuild",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)
    build = subparsers.add_parser("build", help="Compile every Markdown source (default)")
    _add_build_options(build)

    validate = subparsers.add_parser("validate-config", help="Validate configuration without building")
    _add_root_and_config(validate)

    return parser


def normalize_argv(argv: list[str]) -> list[str]:
    """Prepend the default ``build`` command when no subcommand is given."""
    if argv and (argv[0] in COMMANDS or argv[0] in TOP_LEVEL_FLAGS):
        return list(argv)
    return [DEFAULT_COMMAND, *argv]


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(normalize_argv(sys.argv[1:] if argv is None else argv))

    level = logging.DEBUG if getattr(args, "verbose", False) else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(message)s")

    if args.command == "validate-config":
        return _handle_validate_config(args)

    if args.command != "build":
        parser.error(f"Unsupported command: {args.command}")

    validation_errors = preflight_validate(root=args.root, config_path=args.config)
    if validation_errors:
        print(format_errors(validation_errors), file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        config = apply_overrides(
            load_config(args.root, args.config),
            source_dir=args.source,
            output_dir=args.output_dir,
            compiler=(parse_compiler_command(args.compiler) if args.compiler is not None else None),
            jobs=args.jobs,
            timeout_seconds=args.timeout,
            ignore_failures=args.ignore_failures,
        )
        result = build_docs(root=args.root, config=config, progress=ProgressReporter())
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except DocBuildError as exc:
        print(f"Build error: {exc}", file=sys.stderr)
        return EXIT_BUILD_FAILED

    if args.report is not None:
        write_build_report(args.report, result)

    if result.ok:
        return EXIT_OK

    print(render_failure_summary(result), file=sys.stderr)
    return EXIT_OK if config.ignore_failures else EXIT_BUILD_FAILED


def _handle_validate_config(args: argparse.Namespace) -> int:
    """Run config validation and report results."""
    errors = preflight_validate(root=args.root, config_path=args.config)
    if errors:
        print(format_errors(errors), file=sys.stderr)
        return EXIT_CONFIG_ERROR

    print("Configuration is valid.")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
