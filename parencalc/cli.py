import argparse
import logging
import readline
import sys
from typing import Optional

from parencalc.session import Session, SessionConfig
from parencalc.tokenizer import DEFAULT_CONFIG, LEGACY_CONFIG
from parencalc.utils import format_number

PROMPT = "% "


def _load_line_history(session: Session) -> None:
    readline.clear_history()
    for line in session.history.items:
        readline.add_history(line)


def run_repl(session: Session) -> int:
    # only lines that evaluated go to the arrow-key history
    readline.set_auto_history(False)
    _load_line_history(session)
    while True:
        try:
            line = input(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            return 0

        response = session.process_line(line)
        _load_line_history(session)
        if response.error is not None:
            print(response.error, file=sys.stderr)
            continue
        for out_line in response.lines:
            print(out_line)
        if response.quit:
            return 0


def run_commands(session: Session, commands: list[str]) -> int:
    for command in commands:
        response = session.process_line(command)
        if response.error is not None:
            print(response.error, file=sys.stderr)
            return 1
        if response.quit:
            return 0
        if response.result is not None:
            print(format_number(response.result))
        else:
            for out_line in response.lines:
                print(out_line)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Fully-parenthesized calculator")
    parser.add_argument(
        "-c",
        "--command",
        dest="commands",
        action="append",
        default=[],
        help="Evaluate the expression and print the result; may be repeated, all share one environment",
    )
    parser.add_argument(
        "--history-size", type=int, default=10, help="Number of evaluated lines kept for arrow-key recall"
    )
    parser.add_argument("--strict", action="store_true", help="Reject tokens left after a complete expression")
    parser.add_argument(
        "--legacy-separators", action="store_true", help="Do not split words on '^' and '%%'"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log parse traces and assignments")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s %(message)s")

    config = SessionConfig(
        max_history=args.history_size,
        strict=args.strict,
        tokenizer=LEGACY_CONFIG if args.legacy_separators else DEFAULT_CONFIG,
    )
    session = Session(config)
    if args.commands:
        return run_commands(session, args.commands)
    return run_repl(session)


if __name__ == "__main__":
    raise SystemExit(main())
