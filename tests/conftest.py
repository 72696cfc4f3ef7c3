"""
Global test configuration for DayTally.

Every test runs against a fresh store, in-memory SQLite unless
TEST_DATABASE_URL is set, created and seeded with the default tags and
settings.
"""

import pytest
from sqlalchemy.orm import sessionmaker

from daytally.infra import db as db_module
from daytally.infra.logging import configure_logging
from daytally.infra.uow import session
from daytally.usecases.snapshot import seed_defaults


@pytest.fixture(scope="session", autouse=True)
def _quiet_logging():
    configure_logging("WARNING")


@pytest.fixture(autouse=True)
def _force_test_db(monkeypatch):
    """
    Point SessionLocal at the test database for each test.

    TEST_DATABASE_URL selects the database; without it each test gets a
    private in-memory SQLite store. Tables are dropped afterwards.
    """
    engine = db_module.get_engine(for_test=True)
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)

    monkeypatch.setattr(db_module, "SessionLocal", TestSessionLocal)

    db_module.init_db(engine)
    with session() as db:
        seed_defaults(db)

    yield engine
    db_module.Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db():
    """A unit-of-work session; committed when the test finishes cleanly."""
    with session() as s:
        yield s
