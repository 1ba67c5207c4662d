from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from app.models import DailyRevenue, DashboardMetrics
from app.nl import business_summary
from app.repositories import (
    compute_daily_revenue, compute_dashboard_stats, get_daily_revenue, get_dashboard_stats, get_orders,
)
from app.sheet_client import SheetClient, get_sheet_client

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats")
def stats(client: SheetClient = Depends(get_sheet_client)) -> DashboardMetrics:
    """Revenue, net income, inventory value and outstanding debt from the Orders sheet."""
    return get_dashboard_stats(client)


@router.get("/revenue")
def revenue(client: SheetClient = Depends(get_sheet_client)) -> List[DailyRevenue]:
    return get_daily_revenue(client)


@router.post("/analysis")
def analysis(client: SheetClient = Depends(get_sheet_client)) -> Dict[str, Any]:
    """
    Ask the local model for a short written assessment of the numbers.

    Response JSON:
      {"text": "...", "metrics": {...}, "revenue": [...]}
    """
    # One sheet read feeds both figures
    orders = get_orders(client)
    metrics = compute_dashboard_stats(orders)
    daily = compute_daily_revenue(orders)
    return {
        "text": business_summary.analyze_business(metrics, daily),
        "metrics": metrics.model_dump(),
        "revenue": [d.model_dump() for d in daily],
    }
