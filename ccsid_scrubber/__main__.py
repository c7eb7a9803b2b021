#!/usr/bin/env python3
"""
Main entry point for the CCSID character scrubber
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional, Tuple

from .charsets import known_ccsids, resolve
from .config import ConfigurationManager
from .engine import ConversionEngine
from .exceptions import ArgumentError
from .models import ConversionJob, LineTerminator, MalformedInput, ReplacementOpt

EXIT_FAILURE = 1
EXIT_USAGE = 2

logger = logging.getLogger("ccsid_scrubber")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ccsid-scrubber",
        description=(
            "Re-encode a text file from one CCSID/encoding to another, "
            "normalizing line endings and scrubbing unconvertible characters"
        ),
        add_help=False,
        allow_abbrev=False,
    )

    parser.add_argument("--in", dest="input", metavar="<file>", help="Input file.")
    parser.add_argument("--out", dest="output", metavar="<file>", help="Output file.")
    parser.add_argument(
        "--opt",
        metavar="<replace/delete>",
        help="How to handle unconvertible characters (default: delete)",
    )
    parser.add_argument("--in-ccsid", metavar="<ccsid>", help="Input file CCSID.")
    parser.add_argument("--out-ccsid", metavar="<ccsid>", help="Output file CCSID.")
    parser.add_argument(
        "--replacement",
        metavar="<char>",
        help="Replacement character to use if replacing.",
    )
    parser.add_argument(
        "--smart-quotes",
        dest="smart_quotes",
        action="store_const",
        const=True,
        help='Replace "smart quotes" with standard quotes.',
    )
    parser.add_argument(
        "--no-smart-quotes",
        dest="smart_quotes",
        action="store_const",
        const=False,
        help="Leave smart quotes alone (default).",
    )
    parser.add_argument(
        "--line-end",
        metavar="<cr/crlf/lf>",
        help="Line endings to use for output file (default: lf)",
    )
    parser.add_argument(
        "--malformed",
        metavar="<strict/scrub/mark>",
        help=(
            "How to handle bytes that are invalid in the input CCSID: fail, "
            "treat them like unconvertible characters, or mark them with U+FFFD "
            "(default: strict)"
        ),
    )
    parser.add_argument(
        "--config", metavar="<file>", help="Configuration file (JSON format)"
    )
    parser.add_argument(
        "--default-config",
        action="store_true",
        help="Dump default configuration as JSON to stdout and exit",
    )
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show final configuration after applying all overrides",
    )
    parser.add_argument(
        "--list-ccsids",
        action="store_true",
        help="List the CCSIDs this tool knows about and exit",
    )
    parser.add_argument("-v", dest="verbose", action="store_true", help="Verbose output.")
    parser.add_argument("-h", "--help", action="store_true", help="Show this help.")
    return parser


def normalize_args(argv: List[str]) -> List[str]:
    """Lower-case flag names so that `--IN-CCSID=37` matches `--in-ccsid`"""
    normalized = []
    for arg in argv:
        if arg.startswith("-"):
            name, sep, value = arg.partition("=")
            arg = name.lower() + sep + value
        normalized.append(arg)
    return normalized


def split_malformed_args(
    parser: argparse.ArgumentParser, argv: List[str]
) -> Tuple[List[str], List[str]]:
    """Separate flags argparse would reject so they can be warned about instead

    A switch given a value (`--smart-quotes=x`) and a valued flag with no
    value (`--in` at the end) are returned in the second list.
    """
    switches = set()
    valued = set()
    for action in parser._actions:
        (switches if action.nargs == 0 else valued).update(action.option_strings)

    kept = []
    rejected = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        name, sep, _ = arg.partition("=")
        if name in switches and sep:
            rejected.append(arg)
        elif name in valued and not sep:
            if i + 1 < len(argv) and not argv[i + 1].startswith("-"):
                kept.extend(argv[i : i + 2])
                i += 1
            else:
                rejected.append(arg)
        else:
            kept.append(arg)
        i += 1
    return kept, rejected


def print_usage_and_exit(parser: argparse.ArgumentParser):
    parser.print_help(sys.stderr)
    sys.exit(EXIT_USAGE)


def _configure_logging(config: ConfigurationManager, verbose: bool):
    level_name = "DEBUG" if verbose else config.get("logging.level", "INFO")
    fmt = config.get("logging.verbose_format" if verbose else "logging.format")
    logging.basicConfig(format=fmt, handlers=[logging.StreamHandler()])
    logger.setLevel(getattr(logging, str(level_name).upper(), logging.INFO))


def _choose(value, parse: Callable, default, what: str):
    """Parse an option value; log and keep `default` if it is invalid"""
    if value is None or value == "":
        return default
    try:
        return parse(value)
    except (ArgumentError, KeyError, ValueError):
        logger.error(f"Invalid {what}: '{value}'")
        return default


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    raise ValueError(value)


def build_job(
    args: argparse.Namespace, config: ConfigurationManager
) -> ConversionJob:
    """Combine defaults, config file and command line into a ConversionJob

    Invalid values are logged and replaced by the next layer down.
    """
    defaults = ConversionJob(input_path=args.input, output_path=args.output)
    conversion = config.get("conversion", {})

    def pick(key, arg_value, parse, what):
        from_config = _choose(conversion.get(key), parse, getattr(defaults, key), what)
        return _choose(arg_value, parse, from_config, what)

    return ConversionJob(
        input_path=args.input,
        output_path=args.output,
        input_encoding=pick("input_encoding", args.in_ccsid, resolve, "input ccsid"),
        output_encoding=pick("output_encoding", args.out_ccsid, resolve, "output ccsid"),
        opt=pick("opt", args.opt, lambda v: ReplacementOpt(v.strip().lower()), "option"),
        replacement=(
            args.replacement
            if args.replacement is not None
            else conversion.get("replacement", defaults.replacement)
        ),
        line_end=pick("line_end", args.line_end, LineTerminator.parse, "line end"),
        smart_quotes=pick("smart_quotes", args.smart_quotes, _parse_bool, "smart quotes"),
        malformed=pick(
            "malformed",
            args.malformed,
            lambda v: MalformedInput(v.strip().lower()),
            "malformed input mode",
        ),
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    argv = normalize_args(sys.argv[1:] if argv is None else list(argv))
    argv, rejected = split_malformed_args(parser, argv)
    args, unknown = parser.parse_known_args(argv)
    unknown = rejected + unknown

    if args.help:
        print_usage_and_exit(parser)

    if args.default_config:
        ConfigurationManager().dump_config_json()
        return 0

    if args.list_ccsids:
        for ccsid, encoding in known_ccsids():
            print(f"{ccsid:>6}  {encoding}")
        return 0

    config = ConfigurationManager(args.config)
    _configure_logging(config, args.verbose)

    for arg in unknown:
        logger.warning(f"Argument '{arg}' unrecognized and will be ignored")

    if args.show_config:
        print("Final Configuration (after all overrides):")
        config.dump_config_json()
        if not args.input:
            return 0

    if not args.input:
        logger.error("No input file specified")
        print_usage_and_exit(parser)

    if not args.output:
        logger.warning(
            f"No output file specified. Defaulting to {args.input}.out"
        )
        args.output = args.input + ".out"

    job = build_job(args, config)
    engine = ConversionEngine(config=config.config)
    result = engine.convert(job)

    if not result.success:
        logger.error(result.reason)
        return EXIT_FAILURE

    print("Success")
    return 0


if __name__ == "__main__":
    sys.exit(main())
