"""
Pytest configuration and shared fixtures.
"""

import os

# Must be set before ujr.config builds its settings singleton.
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["APP_DEBUG"] = "false"

import logging

import pytest
from sqlalchemy.orm import sessionmaker

from ujr.core.constants import ROOT_LOGGER_NAME
from ujr.database.session import create_db_engine
from ujr.models import Job, User, create_all_tables, drop_all_tables


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo configure_logging() so caplog keeps seeing ujr records."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def engine():
    """Fresh in-memory database with all tables created."""
    engine = create_db_engine("sqlite:///:memory:")
    create_all_tables(engine)
    yield engine
    drop_all_tables(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Session factory bound to the test engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    """Open session; rolled back and closed after the test."""
    session = session_factory()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def make_user():
    """Build transient users, with a job when job name and salary are given."""
    def _make_user(name="Ivan", surname="Petrov", age=30, job_name=None, salary=None):
        job = Job(name=job_name, salary=salary) if job_name is not None else None
        return User(name=name, surname=surname, age=age, job=job)

    return _make_user
