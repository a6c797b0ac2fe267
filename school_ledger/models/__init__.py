# school_ledger/models/__init__.py
"""Import all models here so Base.metadata is complete for Alembic and create_all."""
from .base import Base
from .institution import Institution, AcademicSession
from .enrollment import Enrollment, EnrollmentStatus
from .fee_management import FeeCategory, FeeStructure, StudentFee, Payment, FeeStatus, PaymentMethod
from .expense import ExpenseCategory, Expense, ExpenseStatus

__all__ = [
    "Base",
    "Institution",
    "AcademicSession",
    "Enrollment",
    "EnrollmentStatus",
    "FeeCategory",
    "FeeStructure",
    "StudentFee",
    "Payment",
    "FeeStatus",
    "PaymentMethod",
    "ExpenseCategory",
    "Expense",
    "ExpenseStatus",
]
