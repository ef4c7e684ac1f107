"""
Shared test configuration.

The environment is pinned before the application is imported because
``petsitter.config`` reads it at import time.
"""

import os
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

import pytest  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from petsitter.database import Base, build_engine  # noqa: E402
from petsitter.main import app  # noqa: E402, F401  (registers every model on Base)


@pytest.fixture
def session_factory():
    """Fresh in-memory database per test"""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    try:
        yield factory
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    from tests.api.support import api_test_client

    with api_test_client(session_factory) as test_client:
        yield test_client
