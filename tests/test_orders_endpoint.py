from app.sheet_client import SheetResponseError


def test_list_orders_newest_first_and_typed(client, sheet, sample_orders):
    sheet.responses["getOrders"] = sample_orders
    r = client.get("/orders")
    assert r.status_code == 200
    data = r.json()
    assert [o["id"] for o in data] == ["ORD-4", "ORD-2", "ORD-3", "ORD-1"]
    o2 = next(o for o in data if o["id"] == "ORD-2")
    assert o2["quantity"] == 2
    assert o2["totalAmount"] == 200000
    o4 = next(o for o in data if o["id"] == "ORD-4")
    assert o4["status"] == "Chờ xử lý"


def test_search_orders(client, sheet, sample_orders):
    sheet.responses["getOrders"] = sample_orders
    r = client.get("/orders", params={"q": "LAN"})
    assert [o["id"] for o in r.json()] == ["ORD-4", "ORD-1"]
    r = client.get("/orders", params={"q": "ord-3"})
    assert [o["id"] for o in r.json()] == ["ORD-3"]


def test_orders_degrade_to_empty_on_bad_response(client, sheet):
    sheet.responses["getOrders"] = SheetResponseError("Sheet returned HTML instead of JSON")
    r = client.get("/orders")
    assert r.status_code == 200
    assert r.json() == []


def test_add_order(client, sheet):
    r = client.post("/orders", json={
        "customerName": "Khách mới 7", "productName": "Demo", "quantity": 1,
        "totalAmount": 500000, "date": "2024-06-01",
    })
    assert r.status_code == 200
    o = r.json()
    assert o["id"].startswith("ORD-")
    assert o["status"] == "Chờ xử lý"
    posted = sheet.posted("addOrder")
    assert posted[0]["id"] == o["id"]
    assert posted[0]["totalAmount"] == 500000


def test_add_order_validation(client, sheet):
    assert client.post("/orders", json={"customerName": " ", "productName": "x"}).status_code == 400
    assert client.post("/orders", json={"customerName": "A", "productName": "x", "quantity": 0}).status_code == 422
    assert sheet.posted("addOrder") == []
