from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from pydantic import BaseModel

from ...database import get_db
from ...services.auth_service import AuthService
from .common import MessageResponse

router = APIRouter()

class RegisterRequest(BaseModel):
    username: str
    password: str
    email: Optional[str] = None

class LoginRequest(BaseModel):
    username: str
    password: str

class TokenResponse(BaseModel):
    token: str


@router.post("/register", response_model=MessageResponse)
async def register(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_db)
):
    """Register a new user"""

    await AuthService(db).register(
        username=request.username,
        password=request.password,
        email=request.email
    )

    return {"message": "registered"}


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    """Exchange username and password for a JWT"""

    token = await AuthService(db).login(request.username, request.password)

    return {"token": token}
