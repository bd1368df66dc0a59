"""SQLAlchemy model mirroring the JSON student record."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, String, func

from .session import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(String(64), primary_key=True)
    full_name = Column(String(255), nullable=False)
    gender = Column(String(16), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    program = Column(String(255), nullable=False)
    year_level = Column(String(64), nullable=False)
    university = Column(String(255), nullable=False)
    # keeps listing order equal to insertion order, like the JSON array
    position = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "fullName": self.full_name,
            "gender": self.gender,
            "email": self.email,
            "program": self.program,
            "yearLevel": self.year_level,
            "university": self.university,
        }
