from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from wopihost.core.config import Settings


def create_db_engine(settings: Settings) -> Engine:
    connect_args = {}
    if settings.database_url.startswith("sqlite"):
        # SQLite по умолчанию запрещает использование соединения из другого потока
        connect_args["check_same_thread"] = False

    return create_engine(settings.database_url, connect_args=connect_args)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Фабрика сессий для хранилища документов"""
    return sessionmaker(bind=engine, expire_on_commit=False)
