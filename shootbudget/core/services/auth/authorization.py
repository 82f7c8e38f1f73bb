from __future__ import annotations

from shootbudget.core.exceptions import AuthError, BusinessRuleError
from shootbudget.core.services.auth.session import UserSessionContext, UserSessionPrincipal


def require_authenticated(
    user_session: UserSessionContext | None,
    *,
    operation_label: str,
) -> UserSessionPrincipal:
    principal = user_session.principal if user_session is not None else None
    if principal is None:
        raise AuthError(
            f"Sign in required to {operation_label}.",
            code="NOT_AUTHENTICATED",
        )
    return principal


def require_permission(
    user_session: UserSessionContext | None,
    permission_code: str,
    *,
    operation_label: str,
) -> UserSessionPrincipal:
    principal = require_authenticated(user_session, operation_label=operation_label)
    if user_session.has_permission(permission_code):
        return principal
    raise BusinessRuleError(
        f"Permission denied for {operation_label}. Missing '{permission_code}'.",
        code="PERMISSION_DENIED",
    )


__all__ = ["require_authenticated", "require_permission"]
