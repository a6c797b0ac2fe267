from . import health, institution, enrollments, fee_management, payments, expenses

__all__ = [
    "health",
    "institution",
    "enrollments",
    "fee_management",
    "payments",
    "expenses"
]
