from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from core.config_loader import get_config


def build_engine(url: str, echo: bool = False) -> Engine:
    connect_args = {}
    if url.startswith("sqlite"):
        # Sessions are handed across FastAPI's worker threads
        connect_args["check_same_thread"] = False
    return create_engine(url, echo=echo, pool_pre_ping=True, connect_args=connect_args)


_db_config = get_config().database
engine = build_engine(_db_config.url, _db_config.echo)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
