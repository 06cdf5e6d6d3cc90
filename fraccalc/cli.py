# cli.py

"""
Command line front end for the fraction calculator.

    fraccalc                      prompt for expressions until an empty line or EOF
    fraccalc 1/2 + 3_1/4          solve one expression and exit
    fraccalc -- -2_1/2 * 3        use "--" when the expression starts with an option-like literal

Each expression is echoed as "? <expr>" and answered with "= <result>". A bad
expression prints a one-line diagnostic to stderr; in interactive mode the
loop carries on with the next prompt.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, List, Optional, TextIO, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory, History, InMemoryHistory
from pydantic import ValidationError

from fraccalc.config import Settings
from fraccalc.errors import FracCalcError
from fraccalc.rational import RenderMode
from fraccalc.solver import solve

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ERROR_PREFIX = "! Error evaluating expression: "

HELP_EPILOG = """
Expressions are whitespace delimited values and operators, for example:
  ? 1/2 + 3_1/4 * -2
  = -6

Values:     integers (12), fractions (3/4, -27/5), mixed fractions (1_3/4)
Operators:  + - * /   (* and / bind tighter; equal precedence is left to right)
Results:    reduced fractions, or NaN, +Infinity, -Infinity

Environment: FRACCALC_RENDER_MODE, FRACCALC_LOG_LEVEL, FRACCALC_HISTORY_FILE,
FRACCALC_PROMPT (also read from a .env file).
"""

ReadLine = Callable[[str], str]


def configure_logging(level: int) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


# --------------------------
# REPL
# --------------------------

class REPL:
    """Read-Eval-Print Loop for the calculator."""

    def __init__(self, settings: Optional[Settings] = None,
                 out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        self.settings = settings or Settings()
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def evaluate_line(self, line: str) -> Tuple[bool, str]:
        """Evaluate a single expression. Returns (ok, result-or-diagnostic)."""
        try:
            return True, solve(line, self.settings.render_mode)
        except FracCalcError as e:
            logger.debug(f"Failed to evaluate {line!r}: {type(e).__name__}: {e}")
            return False, f"{ERROR_PREFIX}{e}"

    def _report(self, ok: bool, text: str) -> None:
        if ok:
            print(f"= {text}", file=self.out)
        else:
            print(text, file=self.err)

    def run_expression(self, expression: str) -> int:
        """Echo, solve and print one expression. Returns a process exit code."""
        print(f"? {expression}", file=self.out)
        ok, text = self.evaluate_line(expression)
        self._report(ok, text)
        return 0 if ok else 1

    def _history(self) -> History:
        if self.settings.history_file is None:
            return InMemoryHistory()
        return FileHistory(str(self.settings.history_file))

    def default_reader(self, stdin: Optional[TextIO] = None) -> ReadLine:
        """prompt_toolkit session on a terminal, plain line reads otherwise."""
        stdin = stdin or sys.stdin
        if stdin.isatty():
            session = PromptSession(history=self._history())
            return session.prompt
        return _stream_reader(stdin, self.out)

    def repl_loop(self, read_line: Optional[ReadLine] = None) -> None:
        """Prompt until an empty line or end of input."""
        read_line = read_line or self.default_reader()
        while True:
            try:
                line = read_line(self.settings.prompt)
            except KeyboardInterrupt:
                print("^C", file=self.out)
                continue
            except EOFError:
                break
            line = line.strip()
            if not line:
                break
            self._report(*self.evaluate_line(line))


def _stream_reader(stream: TextIO, out: TextIO) -> ReadLine:
    def read_line(prompt: str) -> str:
        out.write(prompt)
        out.flush()
        line = stream.readline()
        if not line:
            raise EOFError()
        return line.rstrip("\n")
    return read_line


# --------------------------
# Entry point
# --------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fraccalc",
        description="Solve arithmetic expressions over integers and fractions.",
        epilog=HELP_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument(
        "-h", "--help", "-?",
        action="help",
        help="Show this help message and exit.",
    )
    parser.add_argument(
        "--mixed",
        action="store_true",
        help="Render improper fractions as mixed fractions (e.g. 5_2/5).",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging level (default: FRACCALC_LOG_LEVEL or WARNING).",
    )
    parser.add_argument(
        "--no-history",
        action="store_true",
        help="Do not read or write the interactive prompt history file.",
    )
    parser.add_argument(
        "expression",
        nargs=argparse.REMAINDER,
        help="Expression to solve. Prompts interactively when omitted.",
    )
    return parser


def _apply_args(settings: Settings, args: argparse.Namespace) -> Settings:
    update = {}
    if args.mixed:
        update["render_mode"] = RenderMode.MIXED
    if args.log_level:
        update["log_level"] = args.log_level
    if args.no_history:
        update["history_file"] = None
    return settings.model_copy(update=update)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = Settings.from_env()
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2
    settings = _apply_args(settings, args)
    configure_logging(settings.logging_level)
    logger.debug(f"Settings: {settings!r}")

    repl = REPL(settings)
    words = args.expression
    if words and words[0] == "--":
        words = words[1:]
    expression = " ".join(words).strip()
    if expression:
        return repl.run_expression(expression)
    repl.repl_loop()
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
