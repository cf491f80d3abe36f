# backend/models/question.py
from sqlalchemy import Column, String, Integer, Text, Boolean, JSON, DateTime, ForeignKey, func
from db import Base

class Question(Base):
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, index=True)
    subject = Column(String(100))
    topic = Column(String(100))
    question = Column(Text)
    options = Column(JSON)
    correct_answer = Column(String(10))
    explanation = Column(Text)
    difficulty = Column(String(10), default="medium")
    year = Column(Integer, default=2024)
    exam_type = Column(String(10), default="prelims")
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class QuestionAttempt(Base):
    __tablename__ = "question_attempts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    question_id = Column(Integer, ForeignKey("questions.id"))
    selected_answer = Column(String(10))
    is_correct = Column(Boolean, default=False)
    time_taken = Column(Integer)  # seconds
    attempted_at = Column(DateTime(timezone=True), server_default=func.now())
