from .pipeline import (
    get_default_normalizer,
    NormalizerPipeline,
    normalize_store,
    normalize_stores,
    normalize_orders,
)
from .rules import RuleNormalizer, looks_shifted, parse_sheet_number
from .types import RecordKind, Record
from .base import Normalizer

__all__ = [
    "get_default_normalizer",
    "NormalizerPipeline",
    "normalize_store",
    "normalize_stores",
    "normalize_orders",
    "RuleNormalizer",
    "looks_shifted",
    "parse_sheet_number",
    "RecordKind",
    "Record",
    "Normalizer",
]
