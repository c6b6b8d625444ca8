import os
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from coworking.config import SQLALCHEMY_DATABASE_URL


def _connect_args(url):
    # SQLite connections are shared with the FastAPI threadpool
    if make_url(url).get_backend_name() == "sqlite":
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args=_connect_args(SQLALCHEMY_DATABASE_URL)
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_database(bind=engine):
    """Create the tables, and the directory of a file-backed SQLite database."""
    url = bind.url
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        directory = os.path.dirname(url.database)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)
    # Importing the models registers their tables on Base.metadata
    from coworking.models import booking, resource, user  # noqa: F401

    Base.metadata.create_all(bind=bind)


def get_db():
    """Provide a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
