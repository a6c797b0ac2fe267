from sqlalchemy import Column, String, Boolean, Text, Date, Numeric, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base
import enum

class FeeStatus(str, enum.Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"
    WAIVED = "waived"

class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    CARD = "card"
    MOBILE_BANKING = "mobile_banking"

class FeeCategory(Base):
    __tablename__ = "fee_categories"

    name = Column(String(100), nullable=False)
    description = Column(Text)

    fee_structures = relationship("FeeStructure", back_populates="fee_category")

class FeeStructure(Base):
    __tablename__ = "fee_structures"

    # Foreign Keys
    class_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    academic_session_id = Column(UUID(as_uuid=True), ForeignKey("academic_sessions.id"), nullable=False, index=True)
    fee_category_id = Column(UUID(as_uuid=True), ForeignKey("fee_categories.id"), nullable=True, index=True)

    # Fee Information
    name = Column(String(100), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    due_date = Column(Date)
    is_recurring = Column(Boolean, default=False, nullable=False)

    # Relationships
    academic_session = relationship("AcademicSession", back_populates="fee_structures")
    fee_category = relationship("FeeCategory", back_populates="fee_structures")
    student_fees = relationship("StudentFee", back_populates="fee_structure")

class StudentFee(Base):
    __tablename__ = "student_fees"

    # Foreign Keys
    student_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    fee_structure_id = Column(UUID(as_uuid=True), ForeignKey("fee_structures.id"), nullable=False, index=True)

    # Amount Calculation
    amount = Column(Numeric(10, 2), nullable=False)
    discount_amount = Column(Numeric(10, 2), default=0, nullable=False)
    waiver_reason = Column(Text)
    final_amount = Column(Numeric(10, 2), nullable=False)

    # Payment Tracking, derived from the payments journal
    paid_amount = Column(Numeric(10, 2), default=0, nullable=False)
    status = Column(String(20), default=FeeStatus.PENDING.value, nullable=False, index=True)

    due_date = Column(Date)

    __table_args__ = (
        UniqueConstraint("student_id", "fee_structure_id", name="uq_student_fee_structure"),
    )

    # Relationships
    fee_structure = relationship("FeeStructure", back_populates="student_fees")
    payments = relationship("Payment", back_populates="student_fee", passive_deletes=True)

class Payment(Base):
    __tablename__ = "payments"

    # Foreign Keys
    student_fee_id = Column(UUID(as_uuid=True), ForeignKey("student_fees.id"), nullable=False, index=True)
    student_id = Column(UUID(as_uuid=True), nullable=False, index=True)

    # Payment Information
    amount = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(String(20), nullable=False)
    transaction_id = Column(String(100))  # External transaction ID
    payment_date = Column(Date, nullable=False)
    notes = Column(Text)

    # Caller identity that recorded the payment
    received_by = Column(UUID(as_uuid=True), nullable=True)

    # Relationships
    student_fee = relationship("StudentFee", back_populates="payments")
