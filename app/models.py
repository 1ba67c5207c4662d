from enum import Enum
from typing import Optional

from pydantic import BaseModel

# -----------------------------
# Domain models for the sheet-backed OMS
# -----------------------------
class OrderStatus(str, Enum):
    # Values are what the sheet stores in the status column
    PENDING    = "Chờ xử lý"
    PROCESSING = "Đang giao"
    COMPLETED  = "Hoàn thành"
    CANCELLED  = "Đã hủy"


class Store(BaseModel):
    # One row of the "Stores" sheet after normalization; every field is a string
    id:      str
    name:    str
    url:     str                  # may be empty, not validated
    region:  str                  # e.g. "US", "VN", may be empty
    status:  str                  # free-form, "LIVE" when the sheet left it blank
    listing: str                  # canonical decimal string
    sale:    str                  # canonical decimal string

    def __str__(self):
        return (
            f"Store {self.id} ({self.name}, region={self.region or '-'}), "
            f"status={self.status}, listing={self.listing}, sale={self.sale}"
        )


class Order(BaseModel):
    id:           str
    customerName: str
    productName:  str
    quantity:     int
    totalAmount:  float
    status:       str             # usually an OrderStatus value
    date:         str             # YYYY-MM-DD (the sheet sometimes sends a full ISO timestamp)


class User(BaseModel):
    username: str
    fullName: str
    role:     str                 # admin / leader / support / designer / idea
    email:    Optional[str] = None
    phone:    Optional[str] = None


class AuthResponse(BaseModel):
    success: bool
    user:    Optional[User] = None
    error:   Optional[str] = None


class OperationResult(BaseModel):
    success: bool
    error:   Optional[str] = None


class DashboardMetrics(BaseModel):
    revenue:        float
    netIncome:      float
    inventoryValue: float
    debt:           float


class DailyRevenue(BaseModel):
    date:   str
    amount: float
