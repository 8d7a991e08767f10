# -*- coding: utf-8 -*-
"""
Spelling a column of amounts in an Excel workbook

Two columns are appended to the active sheet: the amount with grouping commas
and the amount in words.
"""

import logging
import math
import zipfile
from pathlib import Path
from typing import Optional

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException

from verbalcalc.errors import WorkbookError
from verbalcalc.evaluator import format_result
from verbalcalc.formatting import format_number_with_commas
from verbalcalc.num2text import number_to_words
from verbalcalc.systems import resolve_system

logger = logging.getLogger(__name__)

GROUPED_HEADER = 'Grouped'
WORDS_HEADER = 'In words'

HEADER_FONT = Font(bold=True, size=11)
HEADER_FILL = PatternFill(start_color="D3D3D3", end_color="D3D3D3", fill_type="solid")
HEADER_ALIGNMENT = Alignment(horizontal='center', vertical='center', wrap_text=True)


def _style_header(cell):
    cell.font = HEADER_FONT
    cell.fill = HEADER_FILL
    cell.alignment = HEADER_ALIGNMENT


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def cell_to_number_text(value) -> Optional[str]:
    """Cell value as a numeric string; None for empty cells, "" for anything non-numeric"""
    if value is None:
        return None
    if _is_number(value):
        if not math.isfinite(value):
            return ''
        return format_result(value)
    return str(value).strip()


def find_amount_column(ws, column: Optional[int] = None, header: Optional[str] = None) -> int:
    """
    Locate the column to spell

    Args:
        ws: worksheet
        column: explicit 1-based column index
        header: header text; exact match first, then partial

    Returns:
        int: 1-based column index
    """
    if column is not None:
        if not 1 <= column <= ws.max_column:
            raise WorkbookError(f'Column {column} is outside the sheet (1-{ws.max_column})')
        return column

    headers = {}
    for col in range(1, ws.max_column + 1):
        val = ws.cell(row=1, column=col).value
        if val is not None and str(val).strip():
            headers[str(val).strip().lower()] = col

    if header is not None:
        wanted = header.strip().lower()
        if wanted in headers:
            return headers[wanted]
        for name, col in headers.items():
            if wanted in name:
                return col
        raise WorkbookError(f'Column "{header}" not found; headers: {list(headers)}')

    # First column holding a number below the header row
    for col in range(1, ws.max_column + 1):
        for row in range(2, ws.max_row + 1):
            if _is_number(ws.cell(row=row, column=col).value):
                return col

    raise WorkbookError('No numeric column found')


def spell_workbook(input_path, output_path, system=None, column=None, header=None) -> int:
    """
    Add grouped and word forms of an amount column to a workbook

    Args:
        input_path: source .xlsx
        output_path: where to save the result (may equal input_path)
        system: NumberSystem or its name
        column: 1-based index of the amount column
        header: header text of the amount column

    Returns:
        int: number of rows spelled
    """
    system = resolve_system(system)
    input_path = Path(input_path)
    if not input_path.exists():
        raise FileNotFoundError(f'Workbook not found: {input_path}')

    try:
        wb = load_workbook(input_path)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
        raise WorkbookError(f'Cannot read workbook: {e}') from e

    try:
        ws = wb.active
        source = find_amount_column(ws, column=column, header=header)

        grouped_col = ws.max_column + 1
        words_col = grouped_col + 1
        _style_header(ws.cell(row=1, column=grouped_col, value=GROUPED_HEADER))
        _style_header(ws.cell(row=1, column=words_col, value=WORDS_HEADER))

        spelled = 0
        for row in range(2, ws.max_row + 1):
            text = cell_to_number_text(ws.cell(row=row, column=source).value)
            if text is None:
                continue

            words = number_to_words(text, system)
            if not words:
                continue

            ws.cell(row=row, column=grouped_col, value=format_number_with_commas(text, system))
            ws.cell(row=row, column=words_col, value=words)
            spelled += 1

        ws.column_dimensions[get_column_letter(grouped_col)].width = 20
        ws.column_dimensions[get_column_letter(words_col)].width = 60

        wb.save(output_path)
    finally:
        wb.close()

    logger.info("Spelled %d rows of %s (%s system) -> %s", spelled, input_path.name, system.value, output_path)
    return spelled


def create_sample_workbook(path) -> Path:
    """Create a template workbook with an amount column and example rows"""
    path = Path(path)

    wb = Workbook()
    ws = wb.active
    ws.title = "Amounts"

    headers = ["Item", "Amount"]
    for col, title in enumerate(headers, start=1):
        _style_header(ws.cell(row=1, column=col, value=title))

    ws.column_dimensions['A'].width = 30
    ws.column_dimensions['B'].width = 18
    ws.row_dimensions[1].height = 30

    example_data = [
        ["Office rent", 125000],
        ["Equipment", 1234567],
        ["Consulting", 9850.75],
        ["Refund", -4200],
    ]
    for row_idx, data in enumerate(example_data, start=2):
        for col_idx, value in enumerate(data, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)

    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    wb.close()
    return path
