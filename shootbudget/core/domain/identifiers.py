from __future__ import annotations

from uuid import uuid4


def generate_id() -> str:
    return uuid4().hex


def clean_id(value: object) -> str | None:
    """Ids arrive from forms and query strings; blank means absent."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


__all__ = ["generate_id", "clean_id"]
