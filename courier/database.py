"""
Database Connection Module

The engine and session factory are built once per application (see
``courier.main.lifespan``) and handed to services as a ``Session``.
"""
import logging
from typing import Any, Dict, Mapping

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base

from courier.config import Settings

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


def create_db_engine(settings: Settings) -> Engine:
    """Create engine for the configured store"""
    if settings.is_sqlite:
        # Sessions are handed between threadpool workers
        return create_engine(
            settings.database_url,
            connect_args={"check_same_thread": False},
            echo=settings.db_echo,
        )
    return create_engine(
        settings.database_url,
        pool_pre_ping=True,
        pool_recycle=1800,  # Recycle connections every 30 minutes
        pool_size=10,
        max_overflow=20,
        pool_timeout=10,
        echo=settings.db_echo,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to ``engine``"""
    return sessionmaker(autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Buat semua tabel jika belum ada"""
    import courier.models  # noqa: F401  registers tables on Base.metadata

    Base.metadata.create_all(bind=engine)
    logger.info("[Database] Tables ready: %s", ", ".join(sorted(Base.metadata.tables)))


def upsert_row(db: Session, model, values: Mapping[str, Any], key: str) -> None:
    """
    Insert ``values`` (attribute -> value) into the table of ``model``, or
    overwrite every given column of the row that already holds the same
    ``key``. Emitted as a single INSERT ... ON CONFLICT statement inside the
    session's transaction; does not commit.
    """
    columns = inspect(model).columns
    row = {columns[attr]: value for attr, value in values.items()}
    key_column = columns[key]
    dialect = db.get_bind().dialect.name

    if dialect in ("sqlite", "postgresql"):
        insert = sqlite.insert if dialect == "sqlite" else postgresql.insert
        stmt = insert(model.__table__).values(row)
        stmt = stmt.on_conflict_do_update(
            index_elements=[key_column],
            set_={column: stmt.excluded[column.key] for column in row if column is not key_column},
        )
    elif dialect == "mysql":
        stmt = mysql.insert(model.__table__).values(row)
        stmt = stmt.on_duplicate_key_update(
            {column: stmt.inserted[column.key] for column in row if column is not key_column}
        )
    else:
        raise NotImplementedError(f"Upsert is not supported for the {dialect} dialect")

    db.execute(stmt)


def check_connection(engine: Engine) -> Dict[str, str]:
    """Test database connection"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
        return {"status": "connected", "database": engine.url.database or ""}
    except Exception as e:
        logger.warning("[Database] Connection check failed: %s", e)
        return {"status": "error", "message": str(e)}
