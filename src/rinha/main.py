import argparse
import json
import logging
import os
import sys

from rinha import loader, terms
from rinha.errors import MalformedTree
from rinha.interpreter import Err, Ok, interpret_file
from rinha.values import show

logger = logging.getLogger(__name__)

EXIT_FAULT = 1
EXIT_BAD_INPUT = 2


def make_arg_parser() -> argparse.ArgumentParser:
    arg_parser = argparse.ArgumentParser(
        prog="rinha", description="Evaluate a program given as a JSON syntax tree"
    )
    arg_parser.add_argument(
        "path", nargs="?", help="path to the JSON file (default: standard input)"
    )
    arg_parser.add_argument(
        "--log-level",
        default=os.environ.get("RINHA_LOG_LEVEL", "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
    )
    arg_parser.add_argument(
        "--recursion-limit",
        type=int,
        help="maximum nesting depth of the host interpreter",
    )
    arg_parser.add_argument(
        "-q", "--quiet", action="store_true", help="do not print the resulting value"
    )
    return arg_parser


def main(argv=None) -> int:
    args = make_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level, format="%(levelname)s %(name)s: %(message)s"
    )

    if args.recursion_limit is not None:
        sys.setrecursionlimit(args.recursion_limit)

    try:
        if args.path is None:
            file = loader.load(sys.stdin)
        else:
            file = loader.load_path(args.path)
    except (OSError, json.JSONDecodeError, MalformedTree) as e:
        logger.debug("cannot load program", exc_info=True)
        print(f"invalid input: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    unbound = terms.free_vars(file.expression)
    if unbound:
        logger.warning("program refers to unbound names: %s", ", ".join(sorted(unbound)))

    try:
        result = interpret_file(file)
    except RecursionError:
        logger.debug("program exceeded the recursion limit", exc_info=True)
        print("runtime error: recursion limit exceeded", file=sys.stderr)
        return EXIT_FAULT

    match result:
        case Ok(value):
            if not args.quiet:
                print(show(value))
            return 0
        case Err(fault):
            logger.debug("program aborted with %s", type(fault).__name__)
            print(f"runtime error: {fault}", file=sys.stderr)
            return EXIT_FAULT


if __name__ == "__main__":
    sys.exit(main())
