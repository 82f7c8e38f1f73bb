from shootbudget.core.services.auth.authorization import (
    require_authenticated,
    require_permission,
)
from shootbudget.core.services.auth.policy import build_principal, permissions_for_roles
from shootbudget.core.services.auth.session import UserSessionContext, UserSessionPrincipal

__all__ = [
    "UserSessionContext",
    "UserSessionPrincipal",
    "build_principal",
    "permissions_for_roles",
    "require_authenticated",
    "require_permission",
]
