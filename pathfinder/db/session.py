## Engine and session factory, created on first use
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from pathfinder.settings import settings


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker:
    engine = create_engine(settings.database_url, pool_pre_ping=True)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)
