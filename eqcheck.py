#!/usr/bin/env python3
"""
eqcheck: verify arithmetic equations.
Each equation ("(1 + 1) * 5 = 10") is parsed, its left-hand side evaluated and
compared exactly with the right-hand value. Equations come from the command
line or a file (--file, one per line, '#' comments allowed).
"""

import argparse
import sys
from pathlib import Path

from equation_engine import EquationGrammar, ParseError
from expression import format_number
from utils import setup_logging, handle_error

__version__ = '0.1.0'


def read_equations(path):
    """Yield (line_number, text) for each non-blank, non-comment line."""
    if path == '-':
        lines = sys.stdin.read().splitlines()
    else:
        lines = Path(path).read_text(encoding='utf-8').splitlines()
    for number, line in enumerate(lines, start=1):
        text = line.strip()
        if not text or text.startswith('#'):
            continue
        yield number, text


def check_equations(items, grammar, show_value=False, out=None):
    """Parse and check each equation, printing its rendering.

    Returns (correct, incorrect, invalid) counts.
    """
    out = out or sys.stdout
    correct = incorrect = invalid = 0
    for label, text in items:
        try:
            equation = grammar.parse(text)
        except ParseError as e:
            handle_error(f"Invalid equation ({label}): {text!r}\n{e}")
            invalid += 1
            continue
        line = str(equation)
        if show_value:
            line = f"{line}  [lhs = {format_number(equation.eval())}]"
        print(line, file=out)
        if equation.is_correct():
            correct += 1
        else:
            incorrect += 1
    return correct, incorrect, invalid


def main(argv=None):
    parser = argparse.ArgumentParser(description="Check arithmetic equations such as '5^2 * 2 = 50'.")
    parser.add_argument("equations", nargs='*', help="Equations to check (quote each one)")
    parser.add_argument("-f", "--file", help="Read equations from a file, one per line ('-' for stdin)")
    parser.add_argument("--strict", action="store_true", help="Reject trailing text after the right-hand number")
    parser.add_argument("--value", action="store_true", help="Also print the evaluated left-hand side")
    parser.add_argument("--debug", action="store_true", help="Debug logging")
    parser.add_argument("--log-file", help="Also write the log to this file")
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    args = parser.parse_args(argv)

    logger = setup_logging(debug=args.debug, log_file=args.log_file)

    if not args.equations and not args.file:
        parser.print_help()
        sys.exit(1)

    items = [(f"arg {i}", text) for i, text in enumerate(args.equations, start=1)]
    if args.file:
        if args.file != '-' and not Path(args.file).exists():
            handle_error(f"Equation file not found: {args.file}", fatal=True)
        try:
            items.extend((f"{args.file}:{number}", text) for number, text in read_equations(args.file))
        except (OSError, UnicodeDecodeError) as e:
            handle_error(f"Cannot read equation file {args.file}: {e}", fatal=True)

    logger.debug(f"Checking {len(items)} equations (strict: {args.strict})")
    grammar = EquationGrammar(strict=args.strict)
    correct, incorrect, invalid = check_equations(items, grammar, show_value=args.value)
    logger.info(f"{correct} correct, {incorrect} incorrect, {invalid} invalid")

    if incorrect or invalid:
        sys.exit(1)
    return 0


if __name__ == "__main__":
    main()
