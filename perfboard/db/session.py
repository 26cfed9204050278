from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from perfboard.core.config import settings


def build_engine(url: str, timeout: int = settings.STORAGE_TIMEOUT_SECONDS, **kwargs):
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False, "timeout": timeout}
    else:
        connect_args = {"connect_timeout": timeout}
    return create_engine(url, pool_pre_ping=True, connect_args=connect_args, **kwargs)


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
)

def get_db():
    """
    Request-scoped session. SqlStore commits each mutation itself, so this
    only rolls back whatever a failed request left pending.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
