# app/normalizers/types.py
from typing import Any, Dict, Literal

# Sheets we read rows from
RecordKind = Literal["store", "order"]

# A row as the Apps Script returns it: keys are column names, values are untyped
Record = Dict[str, Any]
