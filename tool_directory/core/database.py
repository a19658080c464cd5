from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from tool_directory.core.config import settings


if settings.DATABASE_URL.startswith("sqlite"):
    engine = create_engine(
        settings.DATABASE_URL,
        connect_args={"check_same_thread": False},  # only for SQLite
    )
else:
    engine = create_engine(
        settings.DATABASE_URL,
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True,  # Test connections before using them to detect stale connections
        pool_recycle=3600,  # Recycle connections after 1 hour
        pool_timeout=30,
    )
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()
