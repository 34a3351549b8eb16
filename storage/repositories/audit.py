"""
Audit Log Repository.

Responsibilities:
- Append audit entries for citizen writes.
- Look up the latest entry for a record.

Non-Responsibilities:
- No decision on what gets audited.

Invariant:
Audit entries are append-only.
"""

from typing import Any, Dict, List, Optional

from ecasystem.database import AuditLog


class AuditRepository:
    """Append-only access to the audit_logs table."""

    def __init__(self, session):
        self.session = session

    def log(
        self,
        action: str,
        table_name: str,
        record_id,
        details: Optional[Dict[str, Any]] = None,
        staff_id: Optional[str] = None,
    ) -> AuditLog:
        entry = AuditLog(
            action=action,
            table_name=table_name,
            record_id=str(record_id) if record_id is not None else None,
            details=details,
            staff_id=staff_id,
        )
        self.session.add(entry)
        self.session.flush()
        return entry

    def latest_for(self, table_name: str, record_id) -> Optional[AuditLog]:
        """Most recent entry for a record, or None when it was never audited."""
        return (
            self.session.query(AuditLog)
            .filter_by(table_name=table_name, record_id=str(record_id))
            .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
            .first()
        )

    def list_recent(self, limit: int = 20) -> List[AuditLog]:
        return (
            self.session.query(AuditLog)
            .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
            .limit(limit)
            .all()
        )
