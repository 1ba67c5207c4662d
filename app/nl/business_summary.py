import json
import logging
from typing import List

from app import settings
from app.models import DailyRevenue, DashboardMetrics
from app.nl import model_loader

log = logging.getLogger(__name__)

DISABLED_MESSAGE = "AI analysis is turned off. Set SUMMARY_ENABLED=true to use it."
UNAVAILABLE_MESSAGE = "Could not analyze the business data right now."

# Only the tail of the revenue series goes into the prompt
RECENT_POINTS = 5


def format_vnd(amount: float) -> str:
    """vi-VN grouping: 1234567.5 -> "1.234.567,5"."""
    s = f"{amount:,.2f}".rstrip("0").rstrip(".")
    return s.replace(",", "_").replace(".", ",").replace("_", ".")


def build_prompt(metrics: DashboardMetrics, daily: List[DailyRevenue]) -> str:
    recent = [d.model_dump() for d in daily[-RECENT_POINTS:]]
    return (
        "You are a professional business data analyst.\n"
        "Based on the data below, give a short assessment (3-4 sentences) of how the "
        "business is doing, the trend, and one piece of advice.\n"
        f"Answer in {settings.SUMMARY_LANGUAGE}, in a professional and positive tone.\n\n"
        "Overview:\n"
        f"- Revenue: {format_vnd(metrics.revenue)} đ\n"
        f"- Net income: {format_vnd(metrics.netIncome)} đ\n"
        f"- Customer debt: {format_vnd(metrics.debt)} đ\n\n"
        "Recent daily revenue:\n"
        f"{json.dumps(recent, ensure_ascii=False)}\n"
    )


def analyze_business(metrics: DashboardMetrics, daily: List[DailyRevenue]) -> str:
    """
    Short written assessment of the dashboard numbers.
    Always returns text; model problems turn into a fixed message.
    """
    if not settings.SUMMARY_ENABLED:
        return DISABLED_MESSAGE

    prompt = build_prompt(metrics, daily)
    try:
        text = model_loader.generate(prompt)
    except Exception:
        # download, load and generation failures all end up here
        log.exception("business summary generation failed")
        return UNAVAILABLE_MESSAGE
    return text or UNAVAILABLE_MESSAGE
