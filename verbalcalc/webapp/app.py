# -*- coding: utf-8 -*-
"""
verbal-calc - web service converting numbers and calculations to words
"""

import logging
import shutil
import uuid
from collections import OrderedDict
from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.responses import FileResponse
from pydantic import BaseModel
from starlette.background import BackgroundTask

from verbalcalc import __version__, config
from verbalcalc.calculator import Calculator
from verbalcalc.errors import WorkbookError
from verbalcalc.formatting import format_expression, format_number_with_commas
from verbalcalc.num2text import ERROR_TOKEN, expression_to_words, number_to_words
from verbalcalc.systems import NumberSystem, resolve_system
from verbalcalc.workbook import spell_workbook

logger = logging.getLogger(__name__)

# ============================================================================
# CONFIGURATION
# ============================================================================

UPLOAD_DIR = config.UPLOAD_DIR
UPLOAD_DIR.mkdir(parents=True, exist_ok=True)

DEFAULT_SYSTEM = resolve_system(config.DEFAULT_SYSTEM)

XLSX_MEDIA_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

# ============================================================================
# APPLICATION
# ============================================================================

app = FastAPI(title="verbal-calc", version=__version__)

# Calculator sessions (in memory, oldest first)
sessions: "OrderedDict[str, Calculator]" = OrderedDict()


class EvaluateRequest(BaseModel):
    expression: str
    system: NumberSystem = DEFAULT_SYSTEM


class KeysRequest(BaseModel):
    keys: List[str]


class InputRequest(BaseModel):
    value: str


class SystemRequest(BaseModel):
    system: NumberSystem


class SessionRequest(BaseModel):
    system: NumberSystem = DEFAULT_SYSTEM


# ============================================================================
# HELPERS
# ============================================================================

def get_session(session_id: str) -> Calculator:
    calculator = sessions.get(session_id)
    if calculator is None:
        raise HTTPException(404, "Session not found")
    return calculator


def session_response(session_id: str, calculator: Calculator, **extra) -> dict:
    return {"session_id": session_id, **calculator.snapshot(), **extra}


# ============================================================================
# ROUTES
# ============================================================================

@app.get("/health")
async def health():
    return {"status": "ok", "version": __version__}


@app.get("/api/words")
async def words(value: str, system: NumberSystem = DEFAULT_SYSTEM):
    """A single number in words"""
    return {
        "value": value,
        "system": system.value,
        "words": number_to_words(value, system),
        "formatted": format_number_with_commas(value, system),
    }


@app.get("/api/expression")
async def expression_words(expression: str, system: NumberSystem = DEFAULT_SYSTEM):
    """An expression in words, without evaluating it"""
    return {
        "expression": expression,
        "system": system.value,
        "words": expression_to_words(expression.replace(',', ''), system),
        "display": format_expression(expression, system),
    }


@app.get("/api/format")
async def format_number(value: str, system: NumberSystem = DEFAULT_SYSTEM):
    return {
        "value": value,
        "system": system.value,
        "formatted": format_number_with_commas(value, system),
    }


@app.post("/api/evaluate")
async def evaluate_expression(request: EvaluateRequest):
    """Evaluate an expression and describe the calculation in words"""
    calculator = Calculator(request.system, expression=request.expression.replace(',', ''))
    calculator.equals()
    if calculator.result == ERROR_TOKEN:
        logger.debug("Evaluation failed for %r", request.expression)
    return calculator.snapshot()


@app.post("/api/sessions")
async def create_session(request: Optional[SessionRequest] = None):
    """Start a calculator session"""
    system = request.system if request is not None else DEFAULT_SYSTEM
    session_id = str(uuid.uuid4())
    sessions[session_id] = Calculator(system)

    while len(sessions) > config.MAX_SESSIONS:
        expired_id, _ = sessions.popitem(last=False)
        logger.info("Session %s dropped (limit %d)", expired_id, config.MAX_SESSIONS)

    return session_response(session_id, sessions[session_id])


@app.get("/api/sessions/{session_id}")
async def read_session(session_id: str):
    return session_response(session_id, get_session(session_id))


@app.post("/api/sessions/{session_id}/keys")
async def press_keys(session_id: str, request: KeysRequest):
    """Press keys in order ("1", "+", "Enter", "Backspace", ...)"""
    calculator = get_session(session_id)
    unhandled = [key for key in request.keys if not calculator.press(key)]
    return session_response(session_id, calculator, unhandled=unhandled)


@app.post("/api/sessions/{session_id}/input")
async def set_input(session_id: str, request: InputRequest):
    """Replace the expression with typed text"""
    calculator = get_session(session_id)
    calculator.set_input(request.value)
    return session_response(session_id, calculator)


@app.post("/api/sessions/{session_id}/system")
async def set_system(session_id: str, request: SystemRequest):
    calculator = get_session(session_id)
    calculator.set_system(request.system)
    return session_response(session_id, calculator)


@app.delete("/api/sessions/{session_id}")
async def delete_session(session_id: str):
    get_session(session_id)
    del sessions[session_id]
    return {"status": "ok"}


@app.post("/api/workbook")
async def upload_workbook(
    file: UploadFile = File(...),
    system: NumberSystem = DEFAULT_SYSTEM,
    column: Optional[int] = None,
    header: Optional[str] = None,
):
    """Upload an Excel file, get it back with the amounts in words"""
    if not file.filename or not file.filename.endswith('.xlsx'):
        raise HTTPException(400, "Only Excel files (.xlsx)")

    upload_id = str(uuid.uuid4())
    upload_dir = UPLOAD_DIR / upload_id
    upload_dir.mkdir(parents=True, exist_ok=True)

    input_path = upload_dir / Path(file.filename).name
    with open(input_path, "wb") as f:
        content = await file.read()
        f.write(content)

    output_name = f"{input_path.stem}_words.xlsx"
    output_path = upload_dir / output_name

    try:
        rows = spell_workbook(input_path, output_path, system, column=column, header=header)
    except WorkbookError as e:
        shutil.rmtree(upload_dir)
        logger.warning("Rejected workbook %s: %s", file.filename, e)
        raise HTTPException(400, str(e))

    return FileResponse(
        output_path,
        media_type=XLSX_MEDIA_TYPE,
        filename=output_name,
        headers={"X-Rows-Spelled": str(rows)},
        background=BackgroundTask(shutil.rmtree, upload_dir, ignore_errors=True),
    )


# ============================================================================
# STARTUP
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=config.LOG_LEVEL)
    uvicorn.run(app, host=config.HOST, port=config.PORT)
