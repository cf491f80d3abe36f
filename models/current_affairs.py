# backend/models/current_affairs.py
from sqlalchemy import Column, Integer, DateTime, ForeignKey, func
from db import Base

class CurrentAffairs(Base):
    __tablename__ = "current_affairs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    total_topics = Column(Integer, default=300)
    completed_topics = Column(Integer, default=0)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
