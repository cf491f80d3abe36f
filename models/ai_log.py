# backend/models/ai_log.py
from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, func
from db import Base

class ChatHistory(Base):
    __tablename__ = "ai_chat_history"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    query = Column(Text)
    response = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class SmartNote(Base):
    __tablename__ = "smart_notes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    subject = Column(String(200))
    topic = Column(String(300))
    content = Column(Text)
    difficulty_level = Column(String(20), default="intermediate")
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class MotivationQuote(Base):
    __tablename__ = "motivation_quotes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    quote = Column(Text)
    generated_at = Column(DateTime(timezone=True), server_default=func.now())
