"""
slark CLI Entrypoint.

Command-line front end that tokenizes or parses a Starlark-style file and
prints a debug dump of the result.

Features:
    - Read source from a file or from an inline string (`-s`).
    - Dump the token stream (default) or the parsed program (`-m ast`).
    - Optional JSON output for either mode.
    - Debug logging with `--verbose`.

Example usage:
    slark BUILD.bazel
    slark -m ast defs.bzl
    slark -s 'load("//foo.bzl", "bar")' -m ast --json

Functions:
    run_slark(source: str, is_string: bool = False, mode: str = "tokens",
              as_json: bool = False, quiet: bool = False) -> None:
        Reads the input, tokenizes or parses it and prints the dump.

    main(argv: list[str] | None = None) -> None:
        Parses CLI arguments, configures logging and runs `run_slark`. Exits
        with status 1 on any syntax or I/O error.
"""

import argparse
import json
import logging
import sys

from slark.slark_errors import SlarkSyntaxError
from slark.slark_lexer import token_to_string, tokenize
from slark.slark_parser import parse

logger = logging.getLogger("slark.cli")

MODES = ("tokens", "ast")


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        stream=sys.stderr,
    )


def run_slark(
    source: str,
    is_string: bool = False,
    mode: str = "tokens",
    as_json: bool = False,
    quiet: bool = False,
) -> None:
    """
    Tokenize or parse the input and print the result.

    Args:
        source (str): Path to the input file, or raw source if `is_string`.
        is_string (bool): Treat `source` as the text itself. Defaults to False.
        mode (str): "tokens" to dump tokens, "ast" to dump the parsed program.
        as_json (bool): Print JSON instead of the text rendering.
        quiet (bool): Do not echo the input before the dump.

    Raises:
        ValueError: If `mode` is unknown.
        OSError: If the input file cannot be read.
        UnicodeDecodeError: If the input file is not valid UTF-8.
        SlarkSyntaxError: If tokenizing or parsing fails.
    """
    if mode not in MODES:
        raise ValueError(f"Unknown mode: {mode!r}")

    if not is_string:
        logger.debug("reading %s", source)
        with open(source, encoding="utf-8") as f:
            source = f.read()

    if not quiet and not as_json:
        print(f"Input:\n{source}\n")

    if mode == "tokens":
        tokens = tokenize(source)
        if as_json:
            print(json.dumps([token_to_string(tok) for tok in tokens], indent=2))
        else:
            print("Tokens:\n" + "".join(f"{token_to_string(tok)} " for tok in tokens))
        return

    program = parse(source)
    if as_json:
        print(json.dumps(program.to_dict(), indent=2))
    else:
        print(f"Program:\n{program}")


def main(argv: list[str] | None = None) -> None:
    """
    Entry point for the slark CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-m`, `--mode`: `tokens` (default) or `ast`.
        - `--json`: Emit JSON.
        - `-q`, `--quiet`: Do not echo the input.
        - `-v`, `--verbose`: Enable debug logging.
    """
    parser = argparse.ArgumentParser(
        prog="slark", description="Tokenize or parse Starlark load statements"
    )
    parser.add_argument("source", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-m",
        "--mode",
        choices=MODES,
        default="tokens",
        help="What to print (default: tokens)",
    )
    parser.add_argument(
        "--json", dest="as_json", action="store_true", help="Print JSON output"
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Do not echo the input"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        run_slark(
            source=args.source,
            is_string=args.string,
            mode=args.mode,
            as_json=args.as_json,
            quiet=args.quiet,
        )
    except OSError as e:
        print(f"Error: Could not open file {args.source}: {e.strerror}", file=sys.stderr)
        sys.exit(1)
    except UnicodeDecodeError as e:
        print(f"Error: Could not decode file {args.source}: {e.reason}", file=sys.stderr)
        sys.exit(1)
    except SlarkSyntaxError as e:
        label = "parse" if args.mode == "ast" else "tokenize"
        print(f"Error: Failed to {label} input: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
