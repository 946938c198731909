"""
Audit log repository for admin action tracking
"""

from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from podium.models.audit_log import AuditLog


def stage_audit_log(
    session: AsyncSession,
    admin_id: Optional[int],
    actor: Optional[str],
    action: str,
    details: dict
) -> AuditLog:
    """
    Add an audit log entry to the session without committing, so it lands
    in the same transaction as the change it records.
    """
    audit_log = AuditLog(
        admin_id=admin_id,
        actor=actor,
        action=action,
        details=details
    )
    session.add(audit_log)
    return audit_log


async def get_audit_logs(
    session: AsyncSession,
    limit: int = 50,
    offset: int = 0,
    action: Optional[str] = None,
    admin_id: Optional[int] = None
) -> List[AuditLog]:
    """
    Get audit logs.

    Args:
        session: Database session
        limit: Maximum number of logs to return
        offset: Number of logs to skip
        action: Filter by action type
        admin_id: Filter by admin ID

    Returns:
        List of AuditLog instances, newest first
    """
    query = select(AuditLog).order_by(desc(AuditLog.id))

    if action:
        query = query.where(AuditLog.action == action)

    if admin_id:
        query = query.where(AuditLog.admin_id == admin_id)

    query = query.limit(limit).offset(offset)

    result = await session.execute(query)
    return result.scalars().all()
