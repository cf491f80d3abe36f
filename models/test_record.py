# backend/models/test_record.py
from sqlalchemy import Column, String, Integer, Numeric, Date, DateTime, ForeignKey, func
from db import Base

TEST_TYPES = ("prelims", "mains")
TEST_CATEGORIES = ("sectional", "full-length", "mock", "subjective", "topic-wise", "ncert")

class TestRecord(Base):
    __tablename__ = "test_records"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    test_type = Column(String(20))
    test_category = Column(String(30))
    subject = Column(String(100))
    total_marks = Column(Integer)
    scored_marks = Column(Numeric(6, 2, asdecimal=False))
    attempt_date = Column(Date)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
