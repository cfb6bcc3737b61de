"""
Field Calculator - Main Entry Point

An interactive calculator over exact fields: rationals (Q), residues
modulo a prime (Z p), and matrices over either, with row reduction,
rank and determinants.

Run with:
    python -m fieldcalc.main
    fieldcalc --log-level DEBUG
"""

from typing import Callable, List, Optional
import argparse
import logging
import sys

from .common.errors import CalculatorError
from .config import LOG_LEVELS, CalculatorConfig
from .repl.runtime import Runtime


logger = logging.getLogger(__name__)

USAGE = """\
Commands:
  DEF Q <name>                  then enter a rational, e.g. -3/4
  DEF Z <p> <name>              then enter an integer (reduced mod p)
  DEF Matrix[Q] <h> <w> <name>  then enter h rows of w entries
  DEF Matrix[Z <p>] <h> <w> <name>
  EVAL <type>                   then enter a prefix expression, e.g. + a * b c
  HELP                          show this text
  EXIT                          leave the calculator

Operators: + - * /   Functions: neg inv det rank rref pow scale"""


def print_banner(config: CalculatorConfig, write: Callable[[str], None] = print):
    """Print the calculator banner."""
    title = f"{config.name} - exact arithmetic over Q and Z p"
    write("╔" + "═" * 68 + "╗")
    write("║" + title.center(68) + "║")
    write("╚" + "═" * 68 + "╝")
    write(USAGE)
    write("")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fieldcalc",
        description="Interactive calculator over rationals and prime fields.",
    )
    parser.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS,
                        type=str.upper, help="logging level (default: WARNING)")
    parser.add_argument("--no-banner", action="store_true",
                        help="do not print the banner on start")
    parser.add_argument("--prompt", default="> ", help="command prompt")
    return parser


def run(config: CalculatorConfig,
        read_line: Optional[Callable[[str], str]] = None,
        write: Callable[[str], None] = print) -> int:
    """
    The read-eval-print loop.

    Errors from a command are reported and the loop carries on; end of
    input or Ctrl-C ends the session.
    """
    if read_line is None:
        read_line = input

    runtime = Runtime(read_line=read_line, input_prompt=config.input_prompt)

    if config.show_banner:
        print_banner(config, write)

    while not runtime.exit_requested:
        try:
            command = read_line(config.prompt).strip()
            if not command:
                continue
            if command == "HELP":
                write(USAGE)
                continue
            output = runtime.execute(command)
        except CalculatorError as error:
            logger.debug("command failed: %r", error)
            write(f"ERROR: {error}")
            continue
        except (EOFError, KeyboardInterrupt):
            write("")
            break

        if output is not None:
            write(output)

    write("Goodbye!")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    config = CalculatorConfig.from_args(args)

    logging.basicConfig(
        level=config.numeric_log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("starting with %s", config.summary())

    return run(config)


if __name__ == "__main__":
    sys.exit(main())
