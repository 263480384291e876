# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Database engine — single source of truth for DB connectivity.
"""

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from kitchensink.core.config import settings

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS members (
        id           BIGINT       PRIMARY KEY,
        name         VARCHAR(25)  NOT NULL,
        email        VARCHAR(255) NOT NULL,
        phone_number VARCHAR(12)  NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS counters (
        name VARCHAR(64) PRIMARY KEY,
        seq  BIGINT      NOT NULL
    )
    """,
)


def build_engine(url: str) -> Engine:
    """Create an engine; pool tuning only applies to server databases."""
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_recycle=settings.DB_POOL_RECYCLE,
    )


def init_schema(engine: Engine) -> None:
    """Create the members and counters tables if they do not exist yet."""
    with engine.begin() as conn:
        for statement in SCHEMA_STATEMENTS:
            conn.execute(text(statement))


engine = build_engine(settings.DATABASE_URL)
