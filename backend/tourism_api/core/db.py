from __future__ import annotations

from typing import Any, Generator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from tourism_api.core.config import settings

# Schema namespaces used by the hosted Postgres database. SQLite has no
# schemas, so local/test engines flatten them into the default namespace.
SCHEMA_NAMESPACES = ("tourism_features", "tourism_entities")


def build_engine(database_url: str, **kwargs: Any) -> Engine:
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_pre_ping", True)

    engine = create_engine(database_url, future=True, **kwargs)
    if is_sqlite:
        _enable_sqlite_savepoints(engine)
        engine = engine.execution_options(
            schema_translate_map={name: None for name in SCHEMA_NAMESPACES}
        )
    return engine


def _enable_sqlite_savepoints(engine: Engine) -> None:
    # pysqlite defers BEGIN on its own, which breaks SAVEPOINT; let SQLAlchemy emit it.
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")


def build_sessionmaker(bind: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=bind,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        future=True,
    )


engine = build_engine(settings.database_url)
SessionLocal = build_sessionmaker(engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
