from .base_service import BaseService
from .academic_session_service import AcademicSessionService, InstitutionService
from .enrollment_service import EnrollmentService
from .fee_structure_service import FeeCategoryService, FeeStructureService
from .fee_assignment_service import FeeAssignmentService
from .student_fee_service import StudentFeeService
from .payment_service import PaymentService, derive_fee_status
from .fee_summary_service import FeeSummaryService
from .expense_service import ExpenseCategoryService, ExpenseService

__all__ = [
    "BaseService",
    "AcademicSessionService",
    "InstitutionService",
    "EnrollmentService",
    "FeeCategoryService",
    "FeeStructureService",
    "FeeAssignmentService",
    "StudentFeeService",
    "PaymentService",
    "derive_fee_status",
    "FeeSummaryService",
    "ExpenseCategoryService",
    "ExpenseService",
]
