from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from filestat import __version__
from filestat.config import FilestatConfig, config_disabled, load_config
from filestat.core.errors import FilestatError
from filestat.core.options import DEFAULT_OUTPUT_FORMAT, Options, UnitMode
from filestat.core.reporter import StatReporter
from filestat.trace import TraceEmitter, TraceStoreJSONL

UNITS_HELP = (
    "Choose units. "
    "e: Unix epoch time, i.e. seconds elapsed since 1970-01-01 00:00:00 (UTC). "
    "h: human readable time, customizable with -o. "
    "a: both of them separated by a space. "
    "(default: h)"
)


def _format_cli_error(e: Exception) -> str:
    """
    Print-friendly error formatting for CLI commands.
    - Always includes code/message (via __str__) when it's a FilestatError
    - Includes structured `data` payload when present
    """
    if isinstance(e, FilestatError) and isinstance(e.data, dict) and e.data:
        return str(e) + "\n" + json.dumps(e.data, ensure_ascii=False, indent=2)
    return str(e)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _reconfigure_stdout() -> None:
    # Undecodable filenames arrive as surrogate escapes; write their original bytes.
    reconfigure = getattr(sys.stdout, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(errors="surrogateescape")


def _load_cli_config(args: argparse.Namespace) -> FilestatConfig:
    if args.no_config or (args.config is None and config_disabled()):
        return FilestatConfig()
    return load_config(Path(args.config) if args.config else None)


def _first_set(*values):
    # An explicit empty string (e.g. `-o ""`) still counts as set.
    for v in values:
        if v is not None:
            return v
    return None


def build_options(args: argparse.Namespace, config: FilestatConfig) -> Options:
    units = _first_set(args.units, config.units, UnitMode.HUMAN.value)
    output_format = _first_set(args.format, config.format, DEFAULT_OUTPUT_FORMAT)
    return Options.build(
        args.paths,
        want_creation=bool(args.created),
        want_modified=bool(args.modified),
        want_accessed=bool(args.accessed),
        unit_mode=UnitMode.parse(units),
        output_format=output_format,
    )


def cmd_report(args: argparse.Namespace) -> int:
    config = _load_cli_config(args)
    options = build_options(args, config)

    trace = None
    trace_path = args.trace or config.trace
    if trace_path:
        trace = TraceEmitter(TraceStoreJSONL(Path(trace_path).expanduser()), run_id=args.run_id)

    result = StatReporter(trace=trace).report(options)
    return 1 if result.any_errored else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filestat",
        description="Report creation, modification and access times of files (an OS-independent alternative to stat)",
    )
    parser.add_argument("paths", nargs="+", help="One or more file paths")
    parser.add_argument("-c", "--created", action="store_true", help="Output creation time")
    parser.add_argument("-m", "--modified", action="store_true", help="Output modification time")
    parser.add_argument("-a", "--accessed", action="store_true", help="Output access time")
    parser.add_argument("-u", "--units", choices=[m.value for m in UnitMode], help=UNITS_HELP)
    parser.add_argument(
        "-o",
        "--format",
        help=f"Output formatting style for human readable units (default: {DEFAULT_OUTPUT_FORMAT.replace('%', '%%')})",
    )
    parser.add_argument("--config", help="Path to config YAML (default: XDG config)")
    parser.add_argument("--no-config", action="store_true", help="Ignore the config file")
    parser.add_argument("--trace", help="Append a JSONL run trace to this path")
    parser.add_argument("--run-id", default="run_cli", help="Run ID for trace correlation")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.set_defaults(func=cmd_report)
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    _configure_logging(ns.verbose)
    _reconfigure_stdout()
    try:
        return int(ns.func(ns))
    except FilestatError as e:
        print(_format_cli_error(e), file=sys.stderr)
        return 2
    except Exception as e:  # noqa: BLE001
        print(_format_cli_error(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
