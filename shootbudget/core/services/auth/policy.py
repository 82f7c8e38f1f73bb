from __future__ import annotations

from typing import Iterable

from shootbudget.core.services.auth.session import UserSessionPrincipal

DEFAULT_PERMISSIONS: dict[str, str] = {
    "budget.read": "View budget lines, versions and approvals",
    "budget.manage": "Create and edit budget categories and line items",
    "budget.version.manage": "Save and delete budget versions",
    "budget.approval.submit": "Submit the budget for approval",
    "budget.approval.decide": "Approve, reject or request revision of a budget",
    "budget.approval.comment": "Comment on budget approvals",
    "budget.approval.delete": "Delete budget approvals",
}


DEFAULT_ROLE_PERMISSIONS: dict[str, set[str]] = {
    "viewer": {
        "budget.read",
    },
    "department_head": {
        "budget.read",
        "budget.approval.comment",
    },
    "coordinator": {
        "budget.read",
        "budget.manage",
        "budget.version.manage",
        "budget.approval.submit",
        "budget.approval.comment",
        "budget.approval.delete",
    },
    "producer": {
        "budget.read",
        "budget.manage",
        "budget.version.manage",
        "budget.approval.submit",
        "budget.approval.decide",
        "budget.approval.comment",
        "budget.approval.delete",
    },
    "admin": set(DEFAULT_PERMISSIONS.keys()),
}


def permissions_for_roles(role_names: Iterable[str]) -> frozenset[str]:
    granted: set[str] = set()
    for role in role_names:
        granted |= DEFAULT_ROLE_PERMISSIONS.get(role.strip().lower(), set())
    return frozenset(granted)


def build_principal(
    user_id: str,
    username: str,
    *,
    role_names: Iterable[str] = ("viewer",),
    display_name: str | None = None,
) -> UserSessionPrincipal:
    roles = frozenset(r.strip().lower() for r in role_names if r and r.strip())
    return UserSessionPrincipal(
        user_id=user_id,
        username=username,
        display_name=display_name,
        role_names=roles,
        permissions=permissions_for_roles(roles),
    )


__all__ = [
    "DEFAULT_PERMISSIONS",
    "DEFAULT_ROLE_PERMISSIONS",
    "permissions_for_roles",
    "build_principal",
]
