from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.models import AuthResponse
from app.repositories import create_user, login
from app.sheet_client import SheetClient, get_sheet_client

router = APIRouter(prefix="", tags=["auth"])

ROLES = ("admin", "leader", "support", "designer", "idea")


class LoginRequest(BaseModel):
    username: str
    password: str
    ip: Optional[str] = None     # forwarded by the browser client when it knows it


class NewUser(BaseModel):
    username: str
    password: str
    fullName: str
    role: str = "support"
    email: Optional[str] = None
    phone: Optional[str] = None


@router.post("/login")
def do_login(req: LoginRequest, client: SheetClient = Depends(get_sheet_client)) -> AuthResponse:
    """
    Check a username/password against the Users sheet.
    Wrong credentials are a 200 with success=False, same as the script reports them.
    """
    if not req.username.strip() or not req.password.strip():
        raise HTTPException(400, "Username and password are required")
    return login(client, req.username, req.password, ip=req.ip)


@router.post("/users")
def add_user(req: NewUser, client: SheetClient = Depends(get_sheet_client)) -> AuthResponse:
    """Create an account. username, password and fullName are required."""
    if not (req.username.strip() and req.password.strip() and req.fullName.strip()):
        raise HTTPException(400, "username, password and fullName are required")
    if req.role not in ROLES:
        raise HTTPException(400, f"Unknown role '{req.role}'")
    return create_user(client, req.model_dump())
