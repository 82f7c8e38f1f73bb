"""Process bootstrap: logging, schema migrations, session and service graph."""
from __future__ import annotations

import logging

from shootbudget.infra.db.base import build_engine, build_session_factory, resolve_db_url
from shootbudget.infra.logging_config import setup_logging
from shootbudget.infra.migrate import run_migrations
from shootbudget.infra.services import ServiceGraph, build_service_graph

logger = logging.getLogger(__name__)


def bootstrap(
    db_url: str | None = None,
    *,
    configure_logging: bool = True,
    migrate: bool = True,
) -> ServiceGraph:
    if configure_logging:
        setup_logging()
    url = db_url or resolve_db_url()
    if migrate:
        run_migrations(db_url=url)
    session = build_session_factory(build_engine(url))()
    logger.info("Shoot budget services ready")
    return build_service_graph(session)


__all__ = ["bootstrap"]
