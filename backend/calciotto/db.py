from sqlalchemy import create_engine
from sqlalchemy.orm import scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import Config


def _engine_options(url: str) -> dict:
    options = {"echo": Config.SQLALCHEMY_ECHO, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url:
            # one shared connection, otherwise every checkout sees an empty database
            options["poolclass"] = StaticPool
    return options


engine = create_engine(Config.DATABASE_URL, **_engine_options(Config.DATABASE_URL))
SessionLocal = scoped_session(sessionmaker(bind=engine, autoflush=False, autocommit=False))


def get_db():
    return SessionLocal()
