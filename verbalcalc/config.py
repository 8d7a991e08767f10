# -*- coding: utf-8 -*-
"""
Settings; every value can be overridden through a VERBALCALC_* environment variable
"""

import os
import tempfile
from pathlib import Path

# =====================================================
# Conversion
# =====================================================
# "international" or "indian"
DEFAULT_SYSTEM = os.environ.get('VERBALCALC_SYSTEM', 'international')

# Significant digits kept in evaluated results
RESULT_PRECISION = int(os.environ.get('VERBALCALC_PRECISION', '15'))

# =====================================================
# Web service
# =====================================================
HOST = os.environ.get('VERBALCALC_HOST', '0.0.0.0')
PORT = int(os.environ.get('VERBALCALC_PORT', '8000'))

UPLOAD_DIR = Path(os.environ.get(
    'VERBALCALC_UPLOAD_DIR',
    Path(tempfile.gettempdir()) / 'verbalcalc' / 'uploads'
))

# Calculator sessions kept in memory; the oldest is dropped first
MAX_SESSIONS = int(os.environ.get('VERBALCALC_MAX_SESSIONS', '1000'))

LOG_LEVEL = os.environ.get('VERBALCALC_LOG_LEVEL', 'INFO')
