# backend/routers/auth.py
import hmac
import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from config import ADMIN_EMAIL, ADMIN_PASSWORD, DEFAULT_USER_ID

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


class SignInInput(BaseModel):
    email: str = Field(..., examples=["aspirant@example.com"])
    password: str = Field(..., examples=["change-me"])


@router.post("/signin")
def sign_in(data: SignInInput):
    email_ok = hmac.compare_digest(data.email.strip().lower().encode(), ADMIN_EMAIL.strip().lower().encode())
    password_ok = hmac.compare_digest(data.password.encode(), ADMIN_PASSWORD.encode())
    if not (email_ok and password_ok):
        logger.warning("Failed sign-in attempt for %s", data.email)
        raise HTTPException(status_code=401, detail="Invalid email or password")

    return {"success": True, "user_id": DEFAULT_USER_ID, "message": "Authentication successful"}
