from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.models import OperationResult, Store
from app.normalizers import normalize_stores
from app.repositories import add_store, delete_store, get_stores
from app.sheet_client import SheetAPIError, SheetClient, SheetNotConfigured, get_sheet_client

# --------------------------------------------------------------------
# Router setup
# --------------------------------------------------------------------
router = APIRouter(prefix="/stores", tags=["stores"])


class NewStore(BaseModel):
    name: str
    url: str = ""
    region: str = ""


@router.get("")
def list_stores(client: SheetClient = Depends(get_sheet_client)) -> List[Store]:
    """Stores from the sheet, normalized. Empty when the sheet can't be read."""
    return get_stores(client)


@router.post("")
def create_store(body: NewStore, client: SheetClient = Depends(get_sheet_client)) -> Store:
    """
    Append a store. New stores start LIVE with zero listing/sale.

    Request body:
      {"name": "My Shop", "url": "https://...", "region": "US"}
    """
    name = body.name.strip()
    if not name:
        raise HTTPException(400, "Missing store name")
    try:
        return add_store(client, name, body.url.strip(), body.region.strip())
    except SheetNotConfigured as e:
        raise HTTPException(503, str(e))
    except SheetAPIError as e:
        raise HTTPException(502, f"Could not add store: {e}")


@router.delete("/{store_id}")
def remove_store(store_id: str, client: SheetClient = Depends(get_sheet_client)) -> OperationResult:
    # The result carries success/error; callers reload the list on failure
    return delete_store(client, store_id)


@router.post("/normalize")
def normalize(payload: List[Any]) -> List[Store]:
    """
    Run raw sheet rows through the store normalizer without touching the sheet.
    Handy for checking how a problem row will be displayed.
    """
    return normalize_stores(payload)
