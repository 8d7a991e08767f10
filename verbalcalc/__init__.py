# -*- coding: utf-8 -*-
"""
verbal-calc: numbers and arithmetic expressions in words,
international (million/billion) and Indian (lakh/crore) numbering
"""

__version__ = '1.0.0'

from verbalcalc.errors import EvaluationError, VerbalCalcError, WorkbookError
from verbalcalc.systems import NumberSystem
from verbalcalc.num2text import expression_to_words, number_to_words, spell_triplet
from verbalcalc.formatting import format_expression, format_number_with_commas, format_number_with_text
from verbalcalc.evaluator import evaluate
from verbalcalc.calculator import Calculator

__all__ = [
    'Calculator',
    'EvaluationError',
    'NumberSystem',
    'VerbalCalcError',
    'WorkbookError',
    'evaluate',
    'expression_to_words',
    'format_expression',
    'format_number_with_commas',
    'format_number_with_text',
    'number_to_words',
    'spell_triplet',
]
