# backend/models/subject_progress.py
from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, func
from db import Base

class SubjectProgress(Base):
    __tablename__ = "subject_progress"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    subject = Column(String(100))
    category = Column(String(50))
    total_lectures = Column(Integer, default=0)
    completed_lectures = Column(Integer, default=0)
    total_dpps = Column(Integer, default=0)
    completed_dpps = Column(Integer, default=0)
    questions_count = Column(Integer, default=0)
    revisions = Column(Integer, default=0)
    # comma separated lecture / DPP numbers ticked in the UI
    completed_lectures_list = Column(Text, nullable=True)
    completed_dpps_list = Column(Text, nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
