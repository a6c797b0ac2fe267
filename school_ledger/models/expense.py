from sqlalchemy import Column, String, Text, Date, Numeric, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base
import enum

class ExpenseStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class ExpenseCategory(Base):
    __tablename__ = "expense_categories"

    name = Column(String(100), nullable=False)
    description = Column(Text)

    expenses = relationship("Expense", back_populates="category")

class Expense(Base):
    __tablename__ = "expenses"

    category_id = Column(UUID(as_uuid=True), ForeignKey("expense_categories.id"), nullable=True, index=True)

    # Expense Information
    title = Column(String(200), nullable=False)
    description = Column(Text)
    amount = Column(Numeric(10, 2), nullable=False)
    expense_date = Column(Date, nullable=False, index=True)
    payment_method = Column(String(20))
    reference_number = Column(String(100))  # Invoice or voucher number

    # Review
    status = Column(String(20), default=ExpenseStatus.PENDING.value, nullable=False, index=True)
    reviewed_by = Column(UUID(as_uuid=True), nullable=True)
    created_by = Column(UUID(as_uuid=True), nullable=True)

    # Relationships
    category = relationship("ExpenseCategory", back_populates="expenses")
