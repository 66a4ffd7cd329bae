"""
Interactive shell for inspecting how Ember source parses.

Each entry is read line by line (continuing while braces are unbalanced), parsed and echoed
back as a rendered AST. Entries ending in `;` or `}` are parsed as a program; anything
else is parsed as a single expression. A parse error is reported and the session
carries on with the next entry.

Commands:
    exit / quit     Leave the REPL.
    verbose-mode    Toggle JSON output.
"""

import io
import json
import logging
import traceback

from ember.ember_constants import DEFAULT_MAX_DEPTH
from ember.ember_errors import EmberError
from ember.ember_lexer import CharacterStream, Lexer
from ember.ember_parser import Parser
from ember.ember_printer import AstPrinter

logger = logging.getLogger(__name__)


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def read_entry() -> str | None:
    """Reads one complete entry; returns None when the user asks to leave."""
    src_lines: list[str] = []
    brace_count = 0
    while True:
        prompt = ">>> " if not src_lines else "... "
        line = input(prompt)
        if line.strip() in ("exit", "quit") and not src_lines:
            return None
        src_lines.append(line)
        brace_count += line.count("{") - line.count("}")
        if brace_count <= 0:
            break
    return "\n".join(src_lines).strip()


def evaluate_entry(
    src: str, as_json: bool = False, max_depth: int = DEFAULT_MAX_DEPTH
) -> str:
    """Parses one entry and returns its rendered AST.

    An entry that does not end in `;` or `}` is read as a single bare expression.
    """
    parser = Parser(Lexer(CharacterStream(src)), max_depth=max_depth)
    if not src.rstrip().endswith((";", "}")):
        expr = parser.parse_expression()
        if as_json:
            return json.dumps(expr.to_dict(), indent=2)
        return AstPrinter().render(expr)

    program = parser.parse_program()
    if as_json:
        return json.dumps([stmt.to_dict() for stmt in program], indent=2)
    return AstPrinter().render(program)


def start_repl(as_json: bool = False, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
    print("Ember REPL. Type 'exit' or 'quit' to leave.")

    while True:
        try:
            src = read_entry()
            if src is None:
                print("Exiting Ember REPL.")
                return
            if not src or src.startswith("#"):
                continue
            if src.lower() == "verbose-mode":
                as_json = not as_json
                print(f"[mode] >>> JSON output {'ON' if as_json else 'OFF'}")
                continue

            try:
                rendered = evaluate_entry(src, as_json=as_json, max_depth=max_depth)
            except EmberError as err:
                logger.debug("entry rejected: %r", err)
                print(f"[error] >>> {err} (line {err.line})")
                continue
            except Exception:
                print_traceback()
                continue

            if rendered:
                print(rendered)

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Ember REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
