# showcase/database.py
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

from showcase.core.config import get_settings


def make_engine(db_url: str) -> Engine:
    """
    Build the SQLAlchemy engine for a database URL.

    Postgres (e.g. Supabase pooler):
      - sslmode=require   : enforce SSL when running in the cloud
      - pool_size=1       : keep only 1 connection to the pooler
      - max_overflow=0    : do not open extra connections beyond the pool
      - pool_pre_ping=True: validate connections before using them

    SQLite (local dev / tests):
      - check_same_thread=False so request threads can share the engine
    """
    if db_url.startswith("sqlite"):
        return create_engine(
            db_url,
            echo=False,
            connect_args={"check_same_thread": False},
        )

    # Append sslmode=require if it is not already present
    if "sslmode=" not in db_url:
        if "?" in db_url:
            db_url = db_url + "&sslmode=require"
        else:
            db_url = db_url + "?sslmode=require"

    return create_engine(
        db_url,
        echo=False,        # set to True if you want to debug SQL queries
        pool_pre_ping=True,
        pool_size=1,
        max_overflow=0,
    )


engine = make_engine(get_settings().DATABASE_URL)


def create_db_and_tables(bind: Engine = engine) -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup. Unique indexes on
    users.email / users.username are created here too; they are what
    actually guarantees uniqueness under concurrent signups.
    """
    SQLModel.metadata.create_all(bind)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session
