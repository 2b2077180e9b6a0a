import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from cueroom.core.config import settings

logger = logging.getLogger("cueroom")

def _engine_options(database_url: str) -> dict:
    if make_url(database_url).get_backend_name() == "sqlite":
        # Sync endpoints run on the threadpool, so connections cross threads
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_recycle": 3600}

if not settings.DATABASE_URL:
    raise ValueError("DATABASE_URL environment variable is required")

engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))
logger.debug(f"Database engine ready for {engine.url.get_backend_name()}")

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    """One session per request, closed when the response is sent"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
