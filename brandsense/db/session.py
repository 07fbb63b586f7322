from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from brandsense.core.config import settings

SQLALCHEMY_DATABASE_URL = settings.database_url


def build_engine(url: str, **kwargs):
    is_sqlite = url.startswith("sqlite")
    engine = create_engine(
        url,
        connect_args={"check_same_thread": False} if is_sqlite else {},
        **kwargs,
    )
    if is_sqlite:
        # SQLite leaves foreign keys off unless asked; project_data relies on cascades
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = build_engine(SQLALCHEMY_DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
