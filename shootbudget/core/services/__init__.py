from .approval import BudgetApprovalService
from .audit import AuditService
from .budget import BudgetLineService
from .reporting import BudgetReportingService
from .versioning import BudgetVersionService

__all__ = [
    "AuditService",
    "BudgetApprovalService",
    "BudgetLineService",
    "BudgetReportingService",
    "BudgetVersionService",
]
