from shootbudget.core.services.audit.details import subject_details
from shootbudget.core.services.audit.helpers import record_audit
from shootbudget.core.services.audit.service import AuditService

__all__ = ["AuditService", "record_audit", "subject_details"]
