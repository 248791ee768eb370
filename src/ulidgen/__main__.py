import argparse
import json
import sys
import os
from typing import Callable, List, Optional
from ulidgen import __version__
from ulidgen.config import CONFIG_FILENAME, load_config
from ulidgen.errors import ConfigError, ULIDError
from ulidgen.logging_setup import setup_logging, get_logger
from ulidgen.prompt_cmd import cmd_prompt
from ulidgen.ulid import (
    GenerationResult,
    MonotonicSequencer,
    generate_standard,
    generate_seeded,
    parse,
)
logger = get_logger()

DEFAULT_CONFIG = """# ulidgen configuration
max_count: 100
case_insensitive: true
map_ambiguous: false
json_logs: false

envs:
  strict:
    case_insensitive: false
"""

def check_count(args: argparse.Namespace, max_count: int) -> int:
    """Validate the requested batch size against the configured cap."""
    count: int = getattr(args, "count", 1)
    if count < 1 or count > max_count:
        logger.error(f"Count must be between 1 and {max_count}, got {count}")
        sys.exit(2)
    return count

def emit_results(results: List[GenerationResult], as_json: bool) -> None:
    if as_json:
        payload = [r.to_dict() for r in results]
        print(json.dumps(payload[0] if len(payload) == 1 else payload, indent=2))
    else:
        for r in results:
            print(r.ulid)

def _run_batch(args: argparse.Namespace, produce: Callable[[], GenerationResult]) -> None:
    config = load_config(env=getattr(args, "env", None))
    count = check_count(args, config["max_count"])
    try:
        results = [produce() for _ in range(count)]
    except (ULIDError, TypeError) as e:
        logger.error(f"Generation failed: {e}")
        sys.exit(1)
    emit_results(results, getattr(args, "json", False))

def cmd_standard(args: argparse.Namespace) -> None:
    """Generate ULIDs for the current time."""
    _run_batch(args, generate_standard)

def cmd_seeded(args: argparse.Namespace) -> None:
    """Generate ULIDs with a fixed seed time and fresh randomness."""
    seed_time = getattr(args, "seed_time", None)
    _run_batch(args, lambda: generate_seeded(seed_time))

def cmd_monotonic(args: argparse.Namespace) -> None:
    """Generate strictly increasing ULIDs."""
    # One sequencer per invocation keeps the batch in its own ordering domain
    sequencer = MonotonicSequencer(seed_time=getattr(args, "seed_time", None))
    _run_batch(args, sequencer.generate)

def cmd_parse(args: argparse.Namespace) -> None:
    """Decompose one or more ULIDs."""
    config = load_config(env=getattr(args, "env", None))
    case_insensitive = config["case_insensitive"] and not getattr(args, "strict_case", False)
    map_ambiguous = config["map_ambiguous"] or getattr(args, "map_ambiguous", False)

    failed = False
    parsed = []
    for value in args.ulids:
        try:
            parsed.append(parse(value, case_insensitive=case_insensitive, map_ambiguous=map_ambiguous))
        except ULIDError as e:
            logger.error(f"Cannot parse {value!r}: {e}")
            failed = True

    if getattr(args, "json", False):
        payload = [p.to_dict() for p in parsed]
        print(json.dumps(payload[0] if len(payload) == 1 else payload, indent=2))
    else:
        for p in parsed:
            date = p.to_dict()["date"] or "out of range"
            print(f"{p.ulid}  timestamp={p.timestamp}  date={date}  randomness={p.randomness_part}")

    if failed:
        sys.exit(1)

def cmd_init(args: argparse.Namespace) -> None:
    """Create a default configuration file."""
    if os.path.exists(CONFIG_FILENAME):
        logger.error(f"{CONFIG_FILENAME} already exists.")
        return

    try:
        with open(CONFIG_FILENAME, "x", encoding="utf-8") as f:
            f.write(DEFAULT_CONFIG)
        print(f"Created {CONFIG_FILENAME}")
    except FileExistsError:
        logger.error(f"{CONFIG_FILENAME} already exists.")
    except OSError as e:
        logger.error(f"Failed to create config: {e}")

def _add_generation_args(parser: argparse.ArgumentParser, seeded: bool) -> None:
    if seeded:
        parser.add_argument(
            "--seed-time", type=int, default=None, help="Timestamp in Unix epoch milliseconds (default: now)"
        )
    parser.add_argument("-n", "--count", type=int, default=1, help="Number of ULIDs to generate")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ulidgen",
        description="ulidgen - ULID Generator",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--env", help="Configuration profile from ulidgen.yaml")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", title="Available commands")

    p_standard = subparsers.add_parser("standard", help="Generate ULIDs for the current time")
    _add_generation_args(p_standard, seeded=False)
    p_standard.set_defaults(func=cmd_standard)

    p_seeded = subparsers.add_parser("seeded", help="Generate ULIDs for a given seed time")
    _add_generation_args(p_seeded, seeded=True)
    p_seeded.set_defaults(func=cmd_seeded)

    p_monotonic = subparsers.add_parser("monotonic", help="Generate strictly increasing ULIDs")
    _add_generation_args(p_monotonic, seeded=True)
    p_monotonic.set_defaults(func=cmd_monotonic)

    p_parse = subparsers.add_parser("parse", help="Parse ULIDs into their fields")
    p_parse.add_argument("ulids", nargs="+", metavar="ULID")
    p_parse.add_argument("--json", action="store_true", help="Print results as JSON")
    p_parse.add_argument("--strict-case", action="store_true", help="Reject lower-case input")
    p_parse.add_argument(
        "--map-ambiguous", action="store_true", help="Read O as 0 and I/L as 1"
    )
    p_parse.set_defaults(func=cmd_parse)

    p_init = subparsers.add_parser("init", help="Create a default ulidgen.yaml")
    p_init.set_defaults(func=cmd_init)

    p_prompt = subparsers.add_parser("prompt", help="Print a usage guide for AI agents")
    p_prompt.set_defaults(func=cmd_prompt)

    return parser

def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    json_logs = args.json_logs
    if not json_logs:
        try:
            json_logs = load_config(env=args.env)["json_logs"]
        except ConfigError:
            pass  # plain logs; commands reading config report the error
    setup_logging(json_format=json_logs, verbose=args.verbose)

    if not args.command:
        parser.print_help()
        return

    try:
        args.func(args)
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(1)

if __name__ == "__main__":
    main()
