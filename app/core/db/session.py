from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.core.config_file import get_settings

settings = get_settings()


def _connect_args(database_url: str) -> dict:
    """Driver specific connection arguments."""
    if database_url.startswith("sqlite"):
        # Sessions are handed across FastAPI's threadpool
        return {"check_same_thread": False}
    return {"connect_timeout": 10, "options": "-c timezone=utc"}


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    future=True,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()
