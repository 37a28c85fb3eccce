from __future__ import annotations

from itertools import count
from typing import Callable, Iterator

import pytest
from sqlalchemy.orm import Session, sessionmaker

from lockerdesk.infrastructure.database import Base, make_engine
from lockerdesk.infrastructure.models import models  # noqa: F401


@pytest.fixture()
def db() -> Iterator[Session]:
    """
    A fresh in-memory database per test so projections never leak between tests.
    """
    engine = make_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture()
def ids() -> Callable[[], str]:
    """Deterministic loan/person id factory: L1, L2, ..."""
    counter = count(1)
    return lambda: f"L{next(counter)}"
