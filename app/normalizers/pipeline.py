from collections.abc import Mapping
from typing import Iterable, List
from app.models import Order, Store
from app.settings import SHIFT_CORRECTION
from .base import Normalizer
from .types import RecordKind, Record
from .rules import RuleNormalizer

class NormalizerPipeline(Normalizer):
    """
    A chain of normalizers.
    Each stage takes the output of the previous stage, so extra clean-up
    steps can be added in front of or behind the rule-based one.
    """
    def __init__(self, stages: List[Normalizer]):
        self.stages = stages

    def normalize_record(self, kind: RecordKind, rec: Record) -> Record:
        out = dict(rec)  # stages return new dicts; never hand them the caller's row
        for stage in self.stages:
            out = stage.normalize_record(kind, out)
        return out

def get_default_normalizer() -> Normalizer:
    """Factory for the default pipeline, honouring the SHIFT_CORRECTION setting."""
    return NormalizerPipeline([RuleNormalizer(detect_shift=SHIFT_CORRECTION)])


# --- Row -> model helpers used by the repositories and the /stores/normalize route ---

def normalize_store(row: Record, normalizer: Normalizer | None = None) -> Store:
    """Turn one raw store row into a fully populated Store. Never raises on bad cells."""
    normalizer = normalizer or get_default_normalizer()
    if not isinstance(row, Mapping):
        row = {}  # a stray scalar in the array still yields a (blank) row
    return Store(**normalizer.normalize_record("store", row))

def normalize_stores(rows: Iterable[Record], normalizer: Normalizer | None = None) -> List[Store]:
    """One Store per row, same order, nothing filtered."""
    normalizer = normalizer or get_default_normalizer()
    return [normalize_store(r, normalizer) for r in rows]

def normalize_orders(rows: Iterable[Record], normalizer: Normalizer | None = None) -> List[Order]:
    normalizer = normalizer or get_default_normalizer()
    return [Order(**normalizer.normalize_record("order", r)) for r in rows if isinstance(r, Mapping)]
