# school_ledger/utils/cache_invalidation.py
"""Cache invalidation utilities."""
from typing import Optional
from uuid import UUID
from ..core.cache import cache_manager

def fee_summary_key(academic_session_id: UUID) -> str:
    return cache_manager.make_key("fees", "summary", academic_session_id)

async def invalidate_fee_summary_cache(academic_session_id: Optional[UUID] = None) -> int:
    """Drop cached fee summaries after any ledger write."""
    if academic_session_id:
        return int(await cache_manager.delete(fee_summary_key(academic_session_id)))
    return await cache_manager.delete_pattern(cache_manager.make_key("fees", "summary", "*"))
