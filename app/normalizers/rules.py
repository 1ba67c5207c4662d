import logging
import math
import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Optional, Tuple
from .base import Normalizer
from .types import RecordKind, Record

log = logging.getLogger(__name__)

DEFAULT_STORE_STATUS = "LIVE"
DEFAULT_ORDER_STATUS = "Chờ xử lý"

# Values seen in the status column; a listing cell holding one of these means
# the row was read one column to the right of where it belongs.
STATUS_TOKENS = {"LIVE", "ACTIVE", "SUSPEND"}

_REGION_CODE_RE = re.compile(r"[A-Z]{2}")
_DECIMAL_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_EXPONENT_RE = re.compile(r"e([+-])0+(\d)")


class RuleNormalizer(Normalizer):
    """
    Rule-based normalizer for rows coming back from the sheet script.

    The sheet has no enforced schema, so every rule here is total: a cell
    that can't be interpreted degrades to a default instead of raising.

    `detect_shift=False` turns off the column-shift repair for store rows
    (see `looks_shifted`) without touching the rest of the mapping.
    """
    def __init__(self, detect_shift: bool = True):
        self.detect_shift = detect_shift

    def normalize_record(self, kind: RecordKind, rec: Record) -> Record:
        if kind == "store":
            return normalize_store_row(rec, detect_shift=self.detect_shift)
        if kind == "order":
            return normalize_order_row(rec)
        return dict(rec)


# --- Stores ---

def normalize_store_row(row: Record, detect_shift: bool = True) -> Record:
    """
    Map one raw store row onto the flat store shape.

    Two kinds of drift are repaired:
      * legacy rows, where the old script nested the counters under `roles`
        (`idea` -> status, `support` -> listing, `designer` -> sale);
      * flat rows read with the column order from before `region` was added,
        which leaves every value from `status` onwards one slot to the right.
    """
    region = row.get("region") or ""
    status = row.get("status") or ""
    listing = row.get("listing")
    sale = row.get("sale")

    roles = row.get("roles")
    if isinstance(roles, Mapping):
        region, status, listing, sale = _remap_legacy_roles(roles, region, status, listing, sale)
        log.debug("store %s: remapped legacy roles row", row.get("id"))
    elif detect_shift and not region and looks_shifted(status, listing):
        region, status, listing, sale = _shift_left(status, listing, sale)
        log.debug("store %s: shifted columns left (region=%r)", row.get("id"), region)

    return {
        "id": as_text(row.get("id")),
        "name": as_text(row.get("name")),
        "url": as_text(row.get("url")),
        "region": as_text(region),
        "status": as_text(status) or DEFAULT_STORE_STATUS,
        "listing": parse_sheet_number(listing),
        "sale": parse_sheet_number(sale),
    }


def _remap_legacy_roles(roles: Mapping, region: Any, status: Any, listing: Any, sale: Any) -> Tuple[Any, Any, Any, Any]:
    # Legacy rows have no region column; a short status is usually a region code
    status_str = as_text(status).strip()
    if not region and len(status_str) <= 5:
        region = status_str

    if roles.get("idea"):
        status = roles["idea"]
    if "support" in roles:
        listing = roles["support"]
    if "designer" in roles:
        sale = roles["designer"]
    return region, status, listing, sale


def _shift_left(status: Any, listing: Any, sale: Any) -> Tuple[Any, Any, Any, Any]:
    return status, listing, sale, 0


def looks_like_region(value: Any) -> bool:
    """Two ASCII letters, e.g. "US" or "vn"."""
    v = as_text(value).strip().upper()
    return len(v) == 2 and _REGION_CODE_RE.fullmatch(v) is not None


def looks_like_status(value: Any) -> bool:
    return as_text(value).strip().upper() in STATUS_TOKENS


def looks_shifted(status: Any, listing: Any) -> bool:
    """
    Guess whether a flat row was read one column off.
    Fires when the status cell holds a region code or the listing cell holds
    a status. Either can be a false positive on legitimate data.
    """
    return looks_like_region(status) or looks_like_status(listing)


# --- Orders ---

def normalize_order_row(row: Record) -> Record:
    """Coerce an order row to the Order field types."""
    return {
        "id": as_text(row.get("id")),
        "customerName": as_text(row.get("customerName")),
        "productName": as_text(row.get("productName")),
        "quantity": _as_int(parse_sheet_number(row.get("quantity"))),
        "totalAmount": float(parse_sheet_number(row.get("totalAmount"))),
        "status": as_text(row.get("status")) or DEFAULT_ORDER_STATUS,
        "date": as_text(row.get("date")),
    }


# --- Individual cell helpers ---

def _as_int(text: str) -> int:
    num = float(text)
    return int(num) if math.isfinite(num) else 0


def canonical_number(num: float) -> str:
    """
    Render a number the way the sheet client always sees it: as a double.
    No separators, no trailing ".0", plain notation from 1e-6 up to 1e21,
    short exponents outside that ("1e-7", "1e+21"). Non-finite -> "0".
    """
    try:
        num = float(num)
    except OverflowError:  # int too large for a double
        return "0"
    if not math.isfinite(num):
        return "0"
    text = repr(num)
    if num.is_integer() and abs(num) < 1e21:
        # above 2**53 keep the shortest round-trip digits, not the exact binary value
        return str(int(num)) if abs(num) < 2 ** 53 else format(Decimal(text).to_integral_value(), "f")
    if "e" in text and 1e-6 <= abs(num) < 1e21:
        return format(Decimal(text), "f")
    return _EXPONENT_RE.sub(r"e\1\2", text)


def parse_sheet_number(val: Any) -> str:
    """
    Clean a numeric sheet cell into a canonical decimal string.
    Thousands separators are dropped ("1,200" -> "1200"); empty or
    unparseable cells become "0".
    """
    if val is None or isinstance(val, bool):
        return "0"
    if isinstance(val, (int, float)):
        return canonical_number(val)
    s = str(val).strip().replace(",", "")
    if not s:
        return "0"
    if _DECIMAL_RE.fullmatch(s):
        return canonical_number(float(s))
    return "0"


def as_text(v: Optional[Any]) -> str:
    """Cell value as a string; missing -> ""."""
    if v is None:
        return ""
    if isinstance(v, str):
        return v
    if isinstance(v, float):
        return canonical_number(v)
    return str(v)
