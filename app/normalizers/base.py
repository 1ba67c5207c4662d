# app/normalizers/base.py
from typing import Protocol
from .types import RecordKind, Record

class Normalizer(Protocol):
    def normalize_record(self, kind: RecordKind, rec: Record) -> Record:
        """Return a NEW normalized record. Never raise, never mutate `rec`."""
        ...
