# backend/models/user.py
from sqlalchemy import Column, String, Integer, DateTime, func
from db import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True)
    name = Column(String(255))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
