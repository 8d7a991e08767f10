# -*- coding: utf-8 -*-
"""
Calculator session: the expression being typed, the last result and the text to speak
"""

import re
from typing import Optional

from verbalcalc.errors import EvaluationError
from verbalcalc.evaluator import evaluate
from verbalcalc.formatting import format_expression, format_number_with_commas
from verbalcalc.num2text import ERROR_TOKEN, expression_to_words, number_to_words
from verbalcalc.systems import NumberSystem, resolve_system

OPERATOR_RE = re.compile(r'[+\-*/%×−]')
TRAILING_OPERATOR_RE = re.compile(r'[+\-*/×−]$')
VALID_CHAR_RE = re.compile(r'[0-9.+\-*/%×−]')
INVALID_CHARS_RE = re.compile(r'[^0-9.+\-*/%×−]')

EQUALS_KEYS = {'Enter', '='}
BACKSPACE_KEYS = {'Backspace'}
CLEAR_KEYS = {'Escape', 'C', 'c'}


class Calculator:
    """
    One calculator, as driven by buttons or a keyboard

    The expression starts as "0"; `result` is None until "=" is pressed and
    holds either the formatted result or "Error".
    """

    def __init__(self, system=None, expression: str = '0'):
        self.system: NumberSystem = resolve_system(system)
        self.expression = expression or '0'
        self.result: Optional[str] = None

    @property
    def is_result_shown(self) -> bool:
        return self.result is not None

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def insert(self, chars: str):
        """Append characters typed or pressed on the keypad"""
        result = self.result
        self.result = None

        if result is not None and OPERATOR_RE.search(chars):
            # Continue calculating with the previous result
            self.expression = result + chars
        elif result is not None:
            self.expression = chars
        elif self.expression == '0' and chars != '.' and not OPERATOR_RE.search(chars):
            self.expression = chars
        else:
            self.expression += chars

    def set_input(self, value: str):
        """Replace the expression with free text typed into the display"""
        self.result = None

        # The display reads "expr = result" after "="
        equals_index = value.find(' = ')
        if equals_index > -1:
            value = value[:equals_index]

        sanitized = INVALID_CHARS_RE.sub('', value.replace(',', ''))
        self.expression = sanitized or '0'

    def press(self, key: str) -> bool:
        """
        Handle a key name ("7", "+", "Enter", "Backspace", ...)

        Returns:
            bool: False when the key means nothing to the calculator
        """
        if key in EQUALS_KEYS:
            self.equals()
        elif key in BACKSPACE_KEYS:
            self.backspace()
        elif key in CLEAR_KEYS:
            self.clear()
        elif len(key) == 1 and VALID_CHAR_RE.match(key):
            self.insert(key)
        else:
            return False
        return True

    def backspace(self):
        if self.is_result_shown:
            self.clear()
            return
        if len(self.expression) > 1:
            self.expression = self.expression[:-1]
        else:
            self.expression = '0'

    def clear(self):
        self.expression = '0'
        self.result = None

    def equals(self):
        """Evaluate the expression; incomplete expressions are left alone"""
        if (
            self.expression == ''
            or TRAILING_OPERATOR_RE.search(self.expression)
            or self.is_result_shown
        ):
            return

        try:
            self.result = evaluate(self.expression)
        except EvaluationError:
            self.result = ERROR_TOKEN

    def set_system(self, system):
        self.system = resolve_system(system)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    @property
    def display_expression(self) -> str:
        """What the display shows: grouped expression, then " = result" once evaluated"""
        shown = format_expression(self.expression, self.system)
        if self.is_result_shown and self.result != ERROR_TOKEN:
            return f"{shown} = {format_number_with_commas(self.result, self.system)}"
        return shown

    @property
    def text(self) -> str:
        """The expression (and result) in words, ready for a speech engine"""
        if self.is_result_shown:
            if self.result == ERROR_TOKEN:
                return ERROR_TOKEN
            spoken_expression = expression_to_words(self.expression.replace(',', ''), self.system)
            return f"{spoken_expression} is {number_to_words(self.result, self.system)}"

        if self.expression not in ('', '0'):
            return expression_to_words(self.expression.replace(',', ''), self.system)
        return 'zero'

    def snapshot(self) -> dict:
        return {
            'expression': self.expression,
            'result': self.result,
            'system': self.system.value,
            'display': self.display_expression,
            'text': self.text,
        }
