# infra/db/base.py
from __future__ import annotations
import logging
import os

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from shootbudget.infra.path import default_db_path

logger = logging.getLogger(__name__)

Base = declarative_base()


def resolve_db_url() -> str:
    """``SB_DB_URL`` if set, else the SQLite file under the user data dir."""
    url = (os.getenv("SB_DB_URL") or "").strip()
    if url:
        return url
    db_path = default_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{db_path.as_posix()}"


def build_engine(db_url: str | None = None, *, echo: bool = False) -> Engine:
    url = db_url or resolve_db_url()
    logger.info("Using database at: %s", url)
    return create_engine(url, echo=echo, future=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
