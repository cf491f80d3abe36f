# backend/dependencies.py
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from config import DEFAULT_USER_ID
from db import get_db
from models.user import User


def get_current_user(x_user_id: Optional[int] = Header(None), db: Session = Depends(get_db)) -> int:
    """The acting user: the X-User-Id header, or the default account. Must exist in `users`."""
    user_id = x_user_id if x_user_id is not None else DEFAULT_USER_ID
    if db.get(User, user_id) is None:
        raise HTTPException(status_code=401, detail=f"Unknown user: {user_id}")
    return user_id
