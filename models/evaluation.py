# backend/models/evaluation.py
from sqlalchemy import Column, String, Integer, Float, Text, DateTime, ForeignKey, func
from db import Base

class EssayEvaluation(Base):
    __tablename__ = "essay_evaluations"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    topic = Column(String(500))
    essay = Column(Text)
    word_count = Column(Integer)
    overall_score = Column(Integer, nullable=True)
    feedback = Column(Text)
    timestamp = Column(DateTime(timezone=True), server_default=func.now())


class AnswerEvaluation(Base):
    __tablename__ = "answer_evaluations"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    question = Column(Text)
    answer = Column(Text)
    score = Column(Float, nullable=True)
    feedback = Column(Text)
    timestamp = Column(DateTime(timezone=True), server_default=func.now())
