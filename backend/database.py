from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from fastapi import Request

Base = declarative_base()


def _is_memory_url(url: str) -> bool:
    return url in ('sqlite://', 'sqlite:///:memory:')


def build_engine(database_url: str) -> Engine:
    """Create an engine for the configured database URL."""
    if database_url.startswith('sqlite'):
        kwargs = {'connect_args': {'check_same_thread': False}, 'echo': False}
        if _is_memory_url(database_url):
            # One shared connection so every session sees the same in-memory database
            kwargs['poolclass'] = StaticPool
        engine = create_engine(database_url, **kwargs)

        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            if not _is_memory_url(database_url):
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.execute("PRAGMA synchronous=NORMAL")
            cursor.execute("PRAGMA busy_timeout=5000")  # Wait up to 5s for locks instead of failing immediately
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,  # Verify connections are alive before using
        pool_recycle=3600  # Recycle connections after 1 hour to prevent stale connections
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine)


def get_db(request: Request):
    """Dependency for FastAPI routes"""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
