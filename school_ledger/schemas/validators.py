"""Shared field validators for partial-update schemas."""
from typing import Any


def reject_null(value: Any) -> Any:
    """Optional in a PATCH body means "may be omitted", not "may be cleared"."""
    if value is None:
        raise ValueError("may not be null")
    return value
