"""
Command-line driver for the Lox scanner.

    lox script.lox     scan a file and print its tokens
    lox                interactive prompt, one line per scan
"""

import argparse
import sys
from typing import List, Optional, TextIO

from .lexer.errors import ErrorReporter
from .lexer.scanner import ScanResult, tokenize_file, tokenize_string
from .utils.log import (
    DEFAULT_LEVEL, LEVEL_NAMES, LOG_LEVEL_ENV, configure_logging, get_logger
)

logger = get_logger(__name__)

# sysexits.h
EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66

PROMPT = "> "
USAGE = "Usage: lox [script]"


def print_tokens(result: ScanResult, out: TextIO) -> None:
    for token in result.tokens:
        print(token, file=out)


def run_file(path: str, out: TextIO = None, err: TextIO = None) -> int:
    """Scan one file and print its tokens. Returns the process exit status."""
    out = out or sys.stdout
    err = err or sys.stderr

    reporter = ErrorReporter(sink=lambda text: print(text, file=err))
    try:
        result = tokenize_file(path, reporter=reporter)
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Could not read %s", path, exc_info=True)
        print(f"Error reading file: {e}", file=err)
        return EX_NOINPUT

    print_tokens(result, out)
    return EX_DATAERR if result.had_error else EX_OK


def run_prompt(stdin: TextIO = None, out: TextIO = None, err: TextIO = None) -> int:
    """
    Read-scan-print loop.

    Every line is scanned on its own with a fresh reporter, so an error on one
    line does not affect the next. Ends cleanly on end of input or Ctrl-C.
    """
    stdin = stdin or sys.stdin
    out = out or sys.stdout
    err = err or sys.stderr

    while True:
        out.write(PROMPT)
        out.flush()
        try:
            line = stdin.readline()
        except KeyboardInterrupt:
            out.write("\n")
            break
        if not line:
            out.write("\n")
            break

        reporter = ErrorReporter(sink=lambda text: print(text, file=err))
        print_tokens(tokenize_string(line, reporter=reporter), out)

    return EX_OK


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lox",
        description="Scan Lox source and print its tokens.",
    )
    parser.add_argument("script", nargs="*", help="source file to scan (omit for a prompt)")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LEVEL_NAMES,
        default=None,
        help=f"logging level (default: ${LOG_LEVEL_ENV} or {DEFAULT_LEVEL})",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    configure_logging(args.log_level)

    if len(args.script) > 1:
        print(USAGE)
        return EX_USAGE
    if args.script:
        return run_file(args.script[0])
    return run_prompt()


if __name__ == "__main__":
    sys.exit(main())
