# -*- coding: utf-8 -*-
"""
Digit grouping for display: 1,234,567 (international) and 12,34,567 (Indian)
"""

import re

from verbalcalc.num2text import number_to_words
from verbalcalc.systems import NumberSystem, resolve_system

SIGNED_NUMBER_RE = re.compile(r'[+-]?[0-9]*(?:\.[0-9]*)?')
NUMERIC_RUN_RE = re.compile(r'[0-9,]+(?:\.[0-9]*)?')

THOUSANDS_RE = re.compile(r'\B(?=(?:[0-9]{3})+(?![0-9]))')
PAIRS_RE = re.compile(r'\B(?=(?:[0-9]{2})+(?![0-9]))')


def format_number_with_commas(num_str, system=None):
    """
    Insert grouping commas into a numeric string

    Works on digit positions only: the fractional part (with its dot) is kept
    as typed and input that is not a number is returned unchanged.
    """
    system = resolve_system(system)

    if num_str is None or not str(num_str).strip():
        return ''
    num_str = str(num_str)

    clean = num_str.replace(',', '').strip()
    if not SIGNED_NUMBER_RE.fullmatch(clean) or not any(c.isdigit() for c in clean):
        return num_str

    integer_part, dot, fraction = clean.partition('.')

    if integer_part:
        if system == NumberSystem.INDIAN:
            last_three = integer_part[-3:]
            other_numbers = integer_part[:-3]
            if other_numbers and other_numbers not in '+-':
                last_three = ',' + last_three
            integer_part = PAIRS_RE.sub(',', other_numbers) + last_three
        else:
            integer_part = THOUSANDS_RE.sub(',', integer_part)

    return integer_part + dot + fraction


def format_expression(expression, system=None):
    """Group the digits of every number in an expression, operators untouched"""
    if not expression:
        return ''
    system = resolve_system(system)

    def repl(match):
        return format_number_with_commas(match.group(0).replace(',', ''), system)

    return NUMERIC_RUN_RE.sub(repl, str(expression))


def format_number_with_text(value, system=None):
    """
    Format a number with its words in brackets
    Example: 12,34,567 (twelve lakh thirty four thousand five hundred sixty seven)
    """
    system = resolve_system(system)
    text = str(value)
    return f"{format_number_with_commas(text, system)} ({number_to_words(text, system)})"
