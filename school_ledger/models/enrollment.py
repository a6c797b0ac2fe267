# school_ledger/models/enrollment.py
import enum
from sqlalchemy import Column, String, Date, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base


class EnrollmentStatus(str, enum.Enum):
    ACTIVE = "active"
    TRANSFERRED = "transferred"
    GRADUATED = "graduated"
    DROPPED = "dropped"


class Enrollment(Base):
    __tablename__ = "enrollments"

    # Students, classes and sections are owned by other systems
    student_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    class_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    section_id = Column(UUID(as_uuid=True), nullable=True)
    academic_session_id = Column(UUID(as_uuid=True), ForeignKey("academic_sessions.id"), nullable=False, index=True)

    # Enrollment Details
    enrollment_date = Column(Date, nullable=False)
    status = Column(String(20), default=EnrollmentStatus.ACTIVE.value, nullable=False, index=True)

    # Relationships
    academic_session = relationship("AcademicSession", back_populates="enrollments")
