# -*- coding: utf-8 -*-
"""
Converting numbers and arithmetic expressions to English words
Supports the international (million/billion) and Indian (lakh/crore) systems
"""

import re

from verbalcalc.systems import Grouping, resolve_system

ONES = ['', 'one', 'two', 'three', 'four', 'five', 'six', 'seven', 'eight', 'nine']

TEENS = [
    'ten', 'eleven', 'twelve', 'thirteen', 'fourteen', 'fifteen',
    'sixteen', 'seventeen', 'eighteen', 'nineteen'
]

TENS = [
    '', '', 'twenty', 'thirty', 'forty', 'fifty',
    'sixty', 'seventy', 'eighty', 'ninety'
]

OPERATORS = {
    '+': 'added by',
    '-': 'subtracted by',
    '−': 'subtracted by',
    '×': 'multiplied by',
    '*': 'multiplied by',
    '/': 'divided by',
    '%': 'percent',
}

# Shown by the calculator when evaluation fails; spoken as is
ERROR_TOKEN = 'Error'

NUMBER_RE = re.compile(r'-?[0-9]*(?:\.[0-9]*)?')
OPERATOR_SPLIT_RE = re.compile(r'([+\-−×*/%])')


def spell_triplet(n):
    """Convert a number from 0 to 999 to words ("" for 0 and out-of-range values)"""
    if not 0 <= n <= 999:
        return ''

    result = []

    # Hundreds
    if n >= 100:
        result.append(f'{ONES[n // 100]} hundred')
        n %= 100

    # Tens and units; 10-19 never split into tens + units
    if 10 <= n <= 19:
        result.append(TEENS[n - 10])
    else:
        if n >= 20:
            result.append(TENS[n // 10])
            n %= 10
        if n > 0:
            result.append(ONES[n])

    return ' '.join(result).strip()


def _spell_groups(digits: str, grouping: Grouping) -> list:
    """Words for the groups below the largest scale word, highest group first"""
    groups = []
    sizes = [grouping.first_size] + [grouping.step_size] * (len(grouping.scales) - 2)

    for size, unit in zip(sizes, grouping.scales):
        if not digits:
            break
        group = int(digits[-size:])
        digits = digits[:-size]
        if group > 0:
            groups.insert(0, f'{spell_triplet(group)} {unit}'.strip())

    return groups


def _spell_integer(digits: str, grouping: Grouping) -> str:
    """
    Spell a string of digits group by group, highest group first

    Groups are sliced off the string, so the length is not limited by int().
    Digits above the largest scale word are counted in it: with the Indian
    table 10^12 reads "one lakh crore".
    """
    cycle = grouping.first_size + grouping.step_size * (len(grouping.scales) - 2)
    largest = grouping.scales[-1]

    words = []
    digits = digits.lstrip('0')
    while digits:
        words = _spell_groups(digits[-cycle:], grouping) + words
        digits = digits[:-cycle].lstrip('0')
        if digits:
            words.insert(0, largest)

    return ' '.join(words)


def number_to_words(num_str, system=None):
    """
    Convert a numeric string to words

    Args:
        num_str: digits with an optional decimal part; grouping commas are ignored
        system: NumberSystem or its name

    Returns:
        str: the number in words, "" when the input is not a number
    """
    system = resolve_system(system)
    num_str = str(num_str if num_str is not None else '').replace(',', '').strip()

    if num_str == ERROR_TOKEN:
        return ERROR_TOKEN
    if num_str == '0':
        return 'zero'
    if not NUMBER_RE.fullmatch(num_str) or not any(c.isdigit() for c in num_str):
        return ''

    if num_str.startswith('-'):
        words = number_to_words(num_str[1:], system)
        return words if words == 'zero' else f'minus {words}'

    integer_part, _, decimal_part = num_str.partition('.')

    integer_words = ''
    if integer_part.strip('0'):
        integer_words = _spell_integer(integer_part, system.grouping)

    decimal_words = ''
    if decimal_part:
        # Digit by digit, no grouping
        decimal_words = 'point ' + ' '.join(ONES[int(digit)] or 'zero' for digit in decimal_part)

    if not integer_words and not decimal_words:
        return 'zero'

    return ' '.join(part for part in (integer_words, decimal_words) if part).strip()


def expression_to_words(expression, system=None):
    """
    Convert an arithmetic expression to words, e.g. "12+7" -> "twelve added by seven"

    Tokens are rendered in order without checking that the expression is complete,
    so "5+" reads "five added by".
    """
    system = resolve_system(system)

    words = []
    for token in OPERATOR_SPLIT_RE.split(str(expression or '')):
        token = token.strip()
        if not token:
            continue
        if token in OPERATORS:
            words.append(OPERATORS[token])
        else:
            words.append(number_to_words(token, system))

    return ' '.join(word for word in words if word)
