from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from .config import settings
from .errors import PersistenceError
from .models.base import Base

logger = logging.getLogger(__name__)

# ---------- Engine / Session ----------
DATABASE_URL = settings.DATABASE_URL


def make_engine(url: str):
    # Для sqlite важно указать check_same_thread=False для многопоточного доступа
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            pool_pre_ping=True,
            future=True,
        )
    return create_engine(url, pool_pre_ping=True, future=True)


engine = make_engine(DATABASE_URL)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
    future=True,
)


def init_db(bind=None) -> None:
    # импорт моделей, чтобы create_all увидел все таблицы
    from .models import ad, specifications  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


# ---------- Unit of work ----------
@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    """
    Все записи внутри блока коммитятся одним commit'ом либо откатываются целиком.
    Ошибки SQLAlchemy наружу уходят как PersistenceError.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("unit of work rolled back: %s", e)
        raise PersistenceError(str(e)) from e
    except Exception:
        db.rollback()
        raise


# ---------- Dependency ----------
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
