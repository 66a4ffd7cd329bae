"""
Ember CLI Entrypoint.

This module provides the command-line interface for parsing Ember source code.

Features:
    - Read source from `.em` files or inline strings.
    - Lex and parse the code, reporting the first error with its source span.
    - Render the AST as prefix text or as JSON.
    - Output to console or file.
    - Launch an interactive REPL.

Example usage:
    ember hello.em
    ember -s "print 1 + 2;" --json
    ember program.em -o program.ast
    ember --repl

Functions:
    run_ember(source, is_string=False, as_json=False, out=None, max_depth=DEFAULT_MAX_DEPTH) -> str:
        Executes the pipeline (lex → parse → render → output).

    format_error(err) -> str:
        One-line diagnostic including the span of the offending token.

    main(argv=None) -> int:
        Parses CLI arguments and invokes the appropriate action.
"""

import argparse
import json
import logging
import sys

from ember.ember_constants import DEFAULT_MAX_DEPTH
from ember.ember_errors import EmberError
from ember.ember_lexer import CharacterStream, Lexer
from ember.ember_parser import Parser
from ember.ember_printer import AstPrinter

logger = logging.getLogger(__name__)


def format_error(err: EmberError) -> str:
    return f"{err} [line {err.line}, start {err.start}, end {err.end}]"


def run_ember(
    source: str,
    is_string: bool = False,
    as_json: bool = False,
    out: str | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> str:
    """
    Run the Ember front-end: lex, parse, render, and print or write the result.

    Args:
        source (str): The Ember source code or path to a `.em` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        as_json (bool): If True, renders the AST as JSON instead of prefix text.
        out (str | None): Optional path to write the rendered AST. If None, prints to stdout.
        max_depth (int): Nesting bound handed to the parser.

    Returns:
        str: The rendered AST.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.em'.
        EmberError: On the first lexical or syntax error.
    """
    if not is_string and not source.endswith(".em"):
        raise ValueError("Only .em files are supported.")
    if not is_string:
        logger.debug("reading %s", source)
        with open(source, encoding="utf-8") as f:
            source = f.read()

    lexer = Lexer(CharacterStream(source))
    program = Parser(lexer, max_depth=max_depth).parse_program()

    if as_json:
        rendered = json.dumps([stmt.to_dict() for stmt in program], indent=2)
    else:
        rendered = AstPrinter().render(program)

    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(rendered)
        logger.debug("wrote %d statements to %s", len(program), out)
    else:
        print(rendered)
    return rendered


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ember")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-j", "--json", dest="as_json", action="store_true", help="Emit the AST as JSON"
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Maximum nesting depth (default: {DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument(
        "--repl", action="store_true", help="Launch interactive REPL instead of parsing"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the Ember CLI.

    Launches the REPL if no source is given or `--repl` is specified, otherwise
    parses the source and renders its AST. Returns the process exit status.
    """
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.repl or args.source is None:
        from ember.ember_repl import start_repl

        start_repl(as_json=args.as_json, max_depth=args.max_depth)
        return 0

    try:
        run_ember(
            source=args.source,
            is_string=args.string,
            as_json=args.as_json,
            out=args.out,
            max_depth=args.max_depth,
        )
    except EmberError as err:
        print(format_error(err), file=sys.stderr)
        return 1
    except (OSError, ValueError) as err:
        print(f"error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
