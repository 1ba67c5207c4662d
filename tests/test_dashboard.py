import pytest

from app import repositories
from app.models import DashboardMetrics
from app.nl import business_summary, model_loader


def test_stats(client, sheet, sample_orders):
    sheet.responses["getOrders"] = sample_orders
    r = client.get("/dashboard/stats")
    assert r.status_code == 200
    m = r.json()
    assert m["revenue"] == pytest.approx(600000)
    assert m["netIncome"] == pytest.approx(180000)
    assert m["debt"] == pytest.approx(200000)
    assert m["inventoryValue"] == 55000000


def test_daily_revenue_groups_by_day_without_cancelled(client, sheet, sample_orders):
    sheet.responses["getOrders"] = sample_orders
    r = client.get("/dashboard/revenue")
    assert r.status_code == 200
    assert r.json() == [
        {"date": "2024-05-01", "amount": 100000},
        {"date": "2024-05-02", "amount": 200000},
        {"date": "2024-05-03", "amount": 300000},
    ]


def test_daily_revenue_keeps_last_days(monkeypatch, sheet):
    monkeypatch.setattr(repositories.settings, "DAILY_REVENUE_DAYS", 2)
    sheet.responses["getOrders"] = [
        {"id": str(d), "totalAmount": d, "status": "Hoàn thành", "date": f"2024-05-{d:02d}"}
        for d in (3, 1, 2)
    ]
    out = repositories.get_daily_revenue(sheet)
    assert [d.date for d in out] == ["2024-05-02", "2024-05-03"]


def test_stats_with_no_orders(client, sheet):
    sheet.responses["getOrders"] = []
    m = client.get("/dashboard/stats").json()
    assert (m["revenue"], m["netIncome"], m["debt"]) == (0, 0, 0)


def test_analysis_uses_model_output(client, sheet, sample_orders, monkeypatch):
    sheet.responses["getOrders"] = sample_orders
    seen = {}

    def fake_generate(prompt, max_new_tokens=None):
        seen["prompt"] = prompt
        return "Doanh thu ổn định."

    monkeypatch.setattr(model_loader, "generate", fake_generate)
    r = client.post("/dashboard/analysis")
    assert r.status_code == 200
    out = r.json()
    assert out["text"] == "Doanh thu ổn định."
    assert out["metrics"]["revenue"] == pytest.approx(600000)
    assert "600.000 đ" in seen["prompt"]
    assert "2024-05-03" in seen["prompt"]


def test_analysis_falls_back_when_model_fails(client, sheet, monkeypatch):
    def broken(prompt, max_new_tokens=None):
        raise OSError("model not found")

    monkeypatch.setattr(model_loader, "generate", broken)
    sheet.responses["getOrders"] = []
    assert client.post("/dashboard/analysis").json()["text"] == business_summary.UNAVAILABLE_MESSAGE


def test_analysis_disabled(monkeypatch):
    monkeypatch.setattr(business_summary.settings, "SUMMARY_ENABLED", False)
    metrics = DashboardMetrics(revenue=0, netIncome=0, inventoryValue=0, debt=0)
    assert business_summary.analyze_business(metrics, []) == business_summary.DISABLED_MESSAGE


@pytest.mark.parametrize("amount,text", [(0, "0"), (1234567, "1.234.567"), (1500.5, "1.500,5"), (180000.0, "180.000")])
def test_format_vnd(amount, text):
    assert business_summary.format_vnd(amount) == text
