# backend/models/section_progress.py
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, UniqueConstraint, func
from db import Base


class OptionalProgress(Base):
    __tablename__ = "optional_progress"
    __table_args__ = (UniqueConstraint("user_id", "section_name", name="unique_user_optional_section"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    section_name = Column(String(100), nullable=False)
    total_items = Column(Integer, default=140)
    completed_items = Column(Integer, default=0)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @staticmethod
    def default_total(section_name):
        return 140


class PsirProgress(Base):
    __tablename__ = "psir_progress"
    __table_args__ = (UniqueConstraint("user_id", "section_name", name="unique_user_psir_section"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    section_name = Column(String(100), nullable=False)
    total_items = Column(Integer, default=150)
    completed_items = Column(Integer, default=0)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @staticmethod
    def default_total(section_name):
        if section_name == "Lectures":
            return 250
        if section_name == "Tests":
            return 500
        return 150
