from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from app.models import Order, OrderStatus
from app.repositories import add_order, get_orders
from app.sheet_client import SheetAPIError, SheetClient, SheetNotConfigured, get_sheet_client

router = APIRouter(prefix="/orders", tags=["orders"])


class NewOrder(BaseModel):
    customerName: str
    productName: str
    quantity: int = Field(1, ge=1)
    totalAmount: float = Field(0, ge=0)
    status: OrderStatus = OrderStatus.PENDING
    date: str = Field(default_factory=lambda: date.today().isoformat())


@router.get("")
def list_orders(
    q: Optional[str] = Query(None, description="Customer name or order id contains, case-insensitive"),
    client: SheetClient = Depends(get_sheet_client),
) -> List[Order]:
    """Orders, newest first."""
    orders = sorted(get_orders(client), key=lambda o: o.date, reverse=True)
    if q:
        needle = q.lower()
        orders = [o for o in orders if needle in o.customerName.lower() or needle in o.id.lower()]
    return orders


@router.post("")
def create_order(body: NewOrder, client: SheetClient = Depends(get_sheet_client)) -> Order:
    if not body.customerName.strip():
        raise HTTPException(400, "Missing customer name")
    try:
        return add_order(client, body.model_dump(mode="json"))
    except SheetNotConfigured as e:
        raise HTTPException(503, str(e))
    except SheetAPIError as e:
        raise HTTPException(502, f"Could not add order: {e}")
