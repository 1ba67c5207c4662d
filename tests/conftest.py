# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.sheet_client import SheetAPIError, SheetClient, get_sheet_client


class FakeSheetClient(SheetClient):
    """
    Stand-in for the Apps Script endpoint.
    `responses` maps action -> JSON payload, or an exception instance to raise.
    Every call is recorded in `calls` as (action, method, data).
    """
    def __init__(self, responses=None):
        super().__init__("https://script.example.test/exec")
        self.responses = dict(responses or {})
        self.calls = []

    def call(self, action, method="GET", data=None):
        self.calls.append((action, method, data))
        resp = self.responses.get(action, {"success": True})
        if isinstance(resp, SheetAPIError):
            raise resp
        return resp

    def posted(self, action):
        return [d for a, m, d in self.calls if a == action and m == "POST"]


@pytest.fixture
def sheet():
    return FakeSheetClient()


# --- Override FastAPI's sheet dependency to use the fake ---
@pytest.fixture(autouse=True)
def override_sheet_client(sheet):
    def _get_sheet_client():
        yield sheet
    app.dependency_overrides[get_sheet_client] = _get_sheet_client
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


# --- Sample sheet data ---
@pytest.fixture
def sample_orders():
    return [
        {"id": "ORD-1", "customerName": "Lan", "productName": "Mug", "quantity": 1,
         "totalAmount": 100000, "status": "Hoàn thành", "date": "2024-05-01"},
        {"id": "ORD-2", "customerName": "Minh", "productName": "Poster", "quantity": "2",
         "totalAmount": "200,000", "status": "Đang giao", "date": "2024-05-02T17:00:00.000Z"},
        {"id": "ORD-3", "customerName": "Hoa", "productName": "Hoodie", "quantity": 1,
         "totalAmount": 50000, "status": "Đã hủy", "date": "2024-05-02"},
        {"id": "ORD-4", "customerName": "lan anh", "productName": "Mug", "quantity": 3,
         "totalAmount": 300000, "status": "", "date": "2024-05-03"},
    ]


@pytest.fixture
def sample_stores():
    return [
        # current flat shape
        {"id": "ST-1", "name": "Alpha", "url": "https://a.example", "region": "VN",
         "status": "LIVE", "listing": "1,250", "sale": "40"},
        # flat row read with the old column order
        {"id": "ST-2", "name": "Beta", "url": "", "status": "US", "listing": "LIVE", "sale": "300"},
        # legacy roles shape
        {"id": "ST-3", "name": "Gamma", "url": "", "status": "XY",
         "roles": {"idea": "ACTIVE", "support": 120, "designer": 45}},
    ]
