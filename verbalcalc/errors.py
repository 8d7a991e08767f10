# -*- coding: utf-8 -*-
"""
Exceptions raised by verbalcalc
"""


class VerbalCalcError(Exception):
    """Base class for all verbalcalc errors"""


class EvaluationError(VerbalCalcError):
    """An arithmetic expression could not be evaluated to a finite number"""


class WorkbookError(VerbalCalcError):
    """An Excel workbook does not have the expected layout"""
