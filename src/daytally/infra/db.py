from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.schema import MetaData

from daytally.infra.settings import settings

# Deterministic constraint/index names
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def _engine_kwargs(url: str) -> dict[str, object]:
    kwargs: dict[str, object] = {"pool_pre_ping": True, "future": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in IN_MEMORY_URLS:
            # One shared connection, or every session would see its own empty database
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_size"] = settings.pool_size
        kwargs["max_overflow"] = settings.max_overflow
        kwargs["pool_timeout"] = settings.pool_timeout
        if "postgresql" in url:
            kwargs["connect_args"] = {"connect_timeout": settings.connect_timeout}
    return kwargs


engine = create_engine(
    settings.database_url,
    echo=settings.echo_sql,
    **_engine_kwargs(settings.database_url),
)


SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
)


def get_engine(db_url: str | None = None, for_test: bool = False) -> Engine:
    """Get or create a database engine.

    If ``for_test`` is True, ``settings.test_database_url`` is used, or a private
    in-memory SQLite database when it is unset. Otherwise falls back to the
    provided ``db_url`` or the default ``settings.database_url``.
    Returns the global engine when using the default, to avoid unnecessary engine creation.
    """
    if for_test:
        chosen_url = settings.test_database_url or "sqlite://"
    else:
        chosen_url = db_url or settings.database_url

    if not for_test and chosen_url == settings.database_url:
        return engine

    return create_engine(chosen_url, echo=False, **_engine_kwargs(chosen_url))


def init_db(bind: Engine | None = None) -> None:
    """Create all tables on the given engine.

    Defaults to the engine the current SessionLocal is bound to.
    """
    # Import models so they register on Base.metadata
    from daytally.domain import entities  # noqa: F401

    Base.metadata.create_all(bind=bind or SessionLocal.kw.get("bind") or engine)

