# -*- coding: utf-8 -*-
"""
verbal-calc command line

Usage:
    verbalcalc words 1234567 --system indian
    verbalcalc expr "12+7×3"
    verbalcalc format 1234567.89 --system indian
    verbalcalc calc "1,200×15%"
    verbalcalc sheet data/amounts.xlsx --header Amount --system indian
    verbalcalc template data/amounts.xlsx
    verbalcalc serve --port 8000
"""

import argparse
import logging
import sys
from pathlib import Path

from verbalcalc import config
from verbalcalc.calculator import Calculator
from verbalcalc.errors import VerbalCalcError
from verbalcalc.formatting import format_expression
from verbalcalc.num2text import ERROR_TOKEN, expression_to_words, number_to_words
from verbalcalc.systems import NumberSystem
from verbalcalc.workbook import create_sample_workbook, spell_workbook

SYSTEM_CHOICES = [member.value for member in NumberSystem]


def cmd_words(args) -> int:
    words = number_to_words(args.number, args.system)
    if not words:
        print(f"Error: not a number: {args.number}", file=sys.stderr)
        return 1
    print(words)
    return 0


def cmd_expr(args) -> int:
    print(expression_to_words(args.expression.replace(',', ''), args.system))
    return 0


def cmd_format(args) -> int:
    print(format_expression(args.value, args.system))
    return 0


def cmd_calc(args) -> int:
    calculator = Calculator(args.system, expression=args.expression.replace(',', ''))
    calculator.equals()
    if calculator.result is None:
        print(f"Error: incomplete expression: {args.expression}", file=sys.stderr)
        return 1
    if calculator.result == ERROR_TOKEN:
        print(ERROR_TOKEN, file=sys.stderr)
        return 1
    print(calculator.display_expression)
    print(calculator.text)
    return 0


def cmd_sheet(args) -> int:
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: file not found: {input_path}", file=sys.stderr)
        return 1

    output_path = Path(args.output) if args.output else input_path.with_name(f"{input_path.stem}_words.xlsx")
    rows = spell_workbook(input_path, output_path, args.system, column=args.column, header=args.header)

    print(f"Rows spelled: {rows}")
    print(f"Saved: {output_path}")
    return 0


def cmd_template(args) -> int:
    path = create_sample_workbook(args.path)
    print(f"Template created: {path}")
    return 0


def cmd_serve(args) -> int:
    import uvicorn

    logging.basicConfig(level=config.LOG_LEVEL)
    uvicorn.run("verbalcalc.webapp.app:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='verbalcalc',
        description='Numbers and calculations in words (international and Indian numbering)'
    )

    # Shared by every sub-command
    system_parser = argparse.ArgumentParser(add_help=False)
    system_parser.add_argument(
        '--system', '-s',
        choices=SYSTEM_CHOICES,
        default=config.DEFAULT_SYSTEM,
        help=f'Numbering system (default: {config.DEFAULT_SYSTEM})'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    words = subparsers.add_parser('words', parents=[system_parser], help='Spell a number')
    words.add_argument('number', help='Number to spell (e.g. 12345, 3.1415); commas allowed')
    words.set_defaults(func=cmd_words)

    expr = subparsers.add_parser('expr', parents=[system_parser], help='Spell an expression without evaluating it')
    expr.add_argument('expression', help='Expression, e.g. "12+7"')
    expr.set_defaults(func=cmd_expr)

    fmt = subparsers.add_parser('format', parents=[system_parser], help='Group the digits of a number or expression')
    fmt.add_argument('value', help='Number or expression')
    fmt.set_defaults(func=cmd_format)

    calc = subparsers.add_parser('calc', parents=[system_parser], help='Evaluate an expression and spell the calculation')
    calc.add_argument('expression', help='Expression, e.g. "1,200×15%%"')
    calc.set_defaults(func=cmd_calc)

    sheet = subparsers.add_parser('sheet', parents=[system_parser], help='Spell an amount column of an Excel file')
    sheet.add_argument('input', help='Source .xlsx file')
    sheet.add_argument('--output', '-o', help='Output file (default: <input>_words.xlsx)')
    sheet.add_argument('--column', '-c', type=int, help='1-based index of the amount column')
    sheet.add_argument('--header', help='Header of the amount column')
    sheet.set_defaults(func=cmd_sheet)

    template = subparsers.add_parser('template', help='Create an example Excel file')
    template.add_argument('path', nargs='?', default='amounts.xlsx', help='Where to save (default: amounts.xlsx)')
    template.set_defaults(func=cmd_template)

    serve = subparsers.add_parser('serve', help='Run the web service')
    serve.add_argument('--host', default=config.HOST, help=f'Host (default: {config.HOST})')
    serve.add_argument('--port', '-p', type=int, default=config.PORT, help=f'Port (default: {config.PORT})')
    serve.add_argument('--reload', action='store_true', help='Reload on code changes')
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return args.func(args)
    except VerbalCalcError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    raise SystemExit(main())
