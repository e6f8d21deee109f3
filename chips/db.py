from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from .settings import DATABASE_URL

def _engine_options(url: str):
    """Return (url, create_engine kwargs) for the configured backend."""
    if url.startswith("sqlite"):
        # request handlers run in a threadpool, not the thread that opened the file
        return url, {"connect_args": {"check_same_thread": False}}
    if url.startswith("postgresql") and "sslmode" not in url:
        sep = "&" if "?" in url else "?"
        url = f"{url}{sep}sslmode=require"
    return url, {"pool_pre_ping": True, "pool_recycle": 300}

_url, _options = _engine_options(DATABASE_URL)
engine = create_engine(_url, **_options)

class Base(DeclarativeBase):
    pass

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
