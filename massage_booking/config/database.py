"""Database configuration and connection setup"""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from massage_booking.config.settings import get_settings

settings = get_settings()


def build_engine(database_url: str) -> Engine:
    """Create an engine for the given URL.

    SQLite gets ``BEGIN IMMEDIATE`` transactions so the write lock is taken
    up front; the per-date schedule lock relies on writers queueing there
    instead of failing on lock promotion.
    """
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False, "timeout": settings.SQLITE_BUSY_TIMEOUT_SECONDS},
            echo=settings.DB_ECHO,
        )

        @event.listens_for(engine, "connect")
        def _disable_pysqlite_begin(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def _begin_immediate(conn):
            conn.exec_driver_sql("BEGIN IMMEDIATE")

        return engine

    # Create database engine with connection pooling
    return create_engine(
        database_url,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
        echo=settings.DB_ECHO,
    )


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Database dependency for FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind: Engine = None):
    """Create all database tables that do not exist yet"""
    from massage_booking.models import Base

    Base.metadata.create_all(bind=bind or engine)


if __name__ == "__main__":
    create_tables()
    print("✅ Database tables created successfully!")
