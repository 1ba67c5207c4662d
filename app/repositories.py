import logging
import time
from typing import Any, Dict, List

import requests
from pydantic import ValidationError

from app import settings
from app.models import (
    AuthResponse, DailyRevenue, DashboardMetrics, OperationResult, Order, OrderStatus, Store, User,
)
from app.normalizers import get_default_normalizer, normalize_orders, normalize_stores
from app.normalizers.base import Normalizer
from app.sheet_client import SheetAPIError, SheetClient

log = logging.getLogger(__name__)

DEPLOY_ERROR = "Deploy error: the Apps Script has no new version deployed. Deploy it again."
LOGIN_FAILED = "Login failed (unknown reason)"
DELETE_FAILED = "Could not delete the store. Check the Apps Script deployment."


def _now_ms() -> int:
    return int(time.time() * 1000)


# -------------------------------------------------------------------
# Auth
# -------------------------------------------------------------------
def get_client_ip(session: requests.Session | None = None) -> str:
    """Public IP of this machine, or "Unknown" if the lookup service is unreachable."""
    http = session or requests
    try:
        r = http.get(settings.CLIENT_IP_URL, timeout=5)
        r.raise_for_status()
        return r.json().get("ip") or "Unknown"
    except (requests.RequestException, ValueError) as e:
        log.warning("could not resolve client IP: %s", e)
        return "Unknown"


def login(client: SheetClient, username: str, password: str, ip: str | None = None) -> AuthResponse:
    """
    Check credentials against the Users sheet.
    Never raises: every failure comes back as success=False with a message.
    """
    user = (username or "").strip()
    pw = (password or "").strip()
    ip = ip or get_client_ip(client.session)
    log.info("login attempt: user=%s ip=%s", user, ip)

    try:
        result = client.call("login", "POST", {"username": user, "password": pw, "ip": ip})
    except SheetAPIError as e:
        log.warning("login failed: user=%s error=%s", user, e)
        return AuthResponse(success=False, error=str(e))

    # An outdated deployment answers with an empty object
    if isinstance(result, dict) and not result:
        return AuthResponse(success=False, error=DEPLOY_ERROR)

    if isinstance(result, dict) and result.get("success") and result.get("user"):
        try:
            return AuthResponse(success=True, user=User.model_validate(result["user"]))
        except ValidationError as e:
            log.warning("login returned a malformed user: user=%s error=%s", user, e)
            return AuthResponse(success=False, error="Malformed user record in sheet")

    log.warning("login rejected: user=%s response=%s", user, result)
    error = result.get("error") if isinstance(result, dict) else None
    return AuthResponse(success=False, error=error or LOGIN_FAILED)


def create_user(client: SheetClient, user: Dict[str, Any]) -> AuthResponse:
    try:
        result = client.call("createUser", "POST", user)
    except SheetAPIError as e:
        log.warning("createUser failed: username=%s error=%s", user.get("username"), e)
        return AuthResponse(success=False, error=str(e))
    if isinstance(result, dict) and result.get("success"):
        return AuthResponse(success=True)
    error = result.get("error") if isinstance(result, dict) else None
    return AuthResponse(success=False, error=error or "Could not create the account")


# -------------------------------------------------------------------
# Orders
# -------------------------------------------------------------------
def get_orders(client: SheetClient, normalizer: Normalizer | None = None) -> List[Order]:
    """All orders in sheet order. Read failures degrade to an empty list."""
    try:
        data = client.call("getOrders")
    except SheetAPIError as e:
        log.warning("getOrders failed, returning no orders: %s", e)
        return []
    if not isinstance(data, list):
        log.warning("getOrders returned %s instead of a list", type(data).__name__)
        return []
    return normalize_orders(data, normalizer or get_default_normalizer())


def add_order(client: SheetClient, order: Dict[str, Any]) -> Order:
    """Assign an id and append the order. SheetAPIError propagates."""
    new_order = Order(id=f"ORD-{_now_ms()}", **order)
    client.call("addOrder", "POST", new_order.model_dump(mode="json"))
    log.info("order added: id=%s customer=%s", new_order.id, new_order.customerName)
    return new_order


# -------------------------------------------------------------------
# Stores
# -------------------------------------------------------------------
def get_stores(client: SheetClient, normalizer: Normalizer | None = None) -> List[Store]:
    """
    All stores, normalized (legacy rows remapped, shifted columns repaired,
    numbers cleaned). Read failures degrade to an empty list.
    """
    try:
        data = client.call("getStores")
    except SheetAPIError as e:
        log.warning("getStores failed, returning no stores: %s", e)
        return []
    if not isinstance(data, list):
        log.warning("getStores returned %s instead of a list", type(data).__name__)
        return []
    return normalize_stores(data, normalizer or get_default_normalizer())


def add_store(client: SheetClient, name: str, url: str = "", region: str = "") -> Store:
    # Short id: last 6 digits of the epoch millis
    new_store = Store(
        id=f"ST-{str(_now_ms())[-6:]}",
        name=name,
        url=url or "",
        region=region or "",
        status="LIVE",
        listing="0",
        sale="0",
    )
    client.call("addStore", "POST", new_store.model_dump())
    log.info("store added: id=%s name=%s", new_store.id, new_store.name)
    return new_store


def delete_store(client: SheetClient, store_id: str) -> OperationResult:
    """Only an explicit `success: true` from the script counts as deleted."""
    try:
        result = client.call("deleteStore", "POST", {"id": store_id})
    except SheetAPIError as e:
        log.warning("deleteStore failed: id=%s error=%s", store_id, e)
        return OperationResult(success=False, error=str(e) or DELETE_FAILED)
    if isinstance(result, dict) and result.get("success") is True:
        log.info("store deleted: id=%s", store_id)
        return OperationResult(success=True)
    error = result.get("error") if isinstance(result, dict) else None
    return OperationResult(success=False, error=error or DELETE_FAILED)


# -------------------------------------------------------------------
# Dashboard
# -------------------------------------------------------------------
def compute_dashboard_stats(orders: List[Order]) -> DashboardMetrics:
    revenue = sum(o.totalAmount for o in orders if o.status != OrderStatus.CANCELLED.value)
    expense = revenue * settings.EXPENSE_RATIO
    debt = sum(o.totalAmount for o in orders if o.status == OrderStatus.PROCESSING.value)
    return DashboardMetrics(
        revenue=revenue,
        netIncome=revenue - expense,
        inventoryValue=settings.INVENTORY_VALUE,
        debt=debt,
    )


def compute_daily_revenue(orders: List[Order]) -> List[DailyRevenue]:
    """Per-day revenue (cancelled excluded), oldest first, last DAILY_REVENUE_DAYS days."""
    totals: Dict[str, float] = {}
    for o in sorted(orders, key=lambda o: o.date):
        if o.status == OrderStatus.CANCELLED.value:
            continue
        day = o.date.split("T")[0]
        totals[day] = totals.get(day, 0.0) + o.totalAmount
    days = list(totals.items())[-settings.DAILY_REVENUE_DAYS:]
    return [DailyRevenue(date=d, amount=a) for d, a in days]


def get_dashboard_stats(client: SheetClient) -> DashboardMetrics:
    return compute_dashboard_stats(get_orders(client))


def get_daily_revenue(client: SheetClient) -> List[DailyRevenue]:
    return compute_daily_revenue(get_orders(client))
