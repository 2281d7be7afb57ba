from sqlalchemy import create_engine, Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()


def get_connect_args(url: str) -> dict:
    """SQLite connections are shared between the event loop and worker threads."""
    if make_url(url).get_backend_name() == "sqlite":
        return {"check_same_thread": False}
    return {}


def create_storage_engine(url: str) -> Engine:
    """
    Create the engine backing durable local storage.

    An in-memory SQLite URL gets a StaticPool so every session sees the
    same database for the lifetime of the engine.
    """
    try:
        url_obj = make_url(url)
    except Exception as e:
        logger.error(f"Failed to parse STORAGE_URL: {e}")
        raise ValueError(f"Invalid STORAGE_URL format: {e}")

    kwargs = {"connect_args": get_connect_args(url)}
    if url_obj.get_backend_name() == "sqlite" and url_obj.database in (None, "", ":memory:"):
        kwargs["poolclass"] = StaticPool

    engine = create_engine(url_obj, **kwargs)
    logger.info(f"Local storage engine initialized ({url_obj.get_backend_name()})")
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
