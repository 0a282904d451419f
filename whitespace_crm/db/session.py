from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from whitespace_crm.core.config import settings

database_url = settings.DATABASE_URL

if database_url.startswith("sqlite"):
    # SQLite connections are shared across the request threadpool
    engine = create_engine(
        database_url,
        connect_args={"check_same_thread": False},
        echo=False,
    )
else:
    # pool_recycle: recycle connections after 1 hour
    # pool_pre_ping: test connections before use
    engine = create_engine(
        database_url,
        pool_size=20,
        max_overflow=10,
        pool_recycle=3600,
        pool_pre_ping=True,
        echo=False,
        pool_timeout=30,
    )
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


# Dependency for FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
