from shootbudget.infra.db.version.mapper import version_from_orm, version_to_orm
from shootbudget.infra.db.version.repository import SqlAlchemyBudgetVersionRepository

__all__ = ["version_to_orm", "version_from_orm", "SqlAlchemyBudgetVersionRepository"]
