# school_ledger/models/institution.py
from sqlalchemy import Column, String, Text, Date, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base


class AcademicSession(Base):
    __tablename__ = "academic_sessions"

    name = Column(String(100), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    # Relationships
    fee_structures = relationship("FeeStructure", back_populates="academic_session")
    enrollments = relationship("Enrollment", back_populates="academic_session")


class Institution(Base):
    __tablename__ = "institutions"

    name = Column(String(200), nullable=False)
    logo = Column(String(500))
    address = Column(Text)
    phone = Column(String(20))
    email = Column(String(100))
    website = Column(String(200))

    # The single current session is a reference here, not a flag on every session row
    current_academic_session_id = Column(
        UUID(as_uuid=True),
        ForeignKey("academic_sessions.id", ondelete="SET NULL"),
        nullable=True,
    )

    current_academic_session = relationship("AcademicSession")
