"""
Shared fixtures: an in-memory SQLite store, a fake generation provider and a
TestClient wired to both through dependency overrides.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.memos.api import get_summarizer
from app.memos.summarize import SummarizationWorkflow
from app.shared.config import SummarizerConfig
from app.shared.db import Base, get_db, register_sqlite_functions
from app.shared.views import MEMOS, ViewInvalidator, views
from tests.helpers import FakeProvider


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    register_sqlite_functions(eng)
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def invalidator():
    return ViewInvalidator()


@pytest.fixture
def invalidated(invalidator):
    """Collections the ``invalidator`` fixture was told about, in order."""
    seen = []
    invalidator.subscribe(MEMOS, seen.append)
    return seen


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def workflow(provider, invalidator):
    return SummarizationWorkflow(SummarizerConfig(api_key="test-key"), provider=provider, views=invalidator)


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def app_invalidations():
    """Invalidations sent on the process-wide ``views`` during one test."""
    seen = []
    views.subscribe(MEMOS, seen.append)
    yield seen
    views.unsubscribe(MEMOS, seen.append)


@pytest.fixture
def client(session_factory, provider):
    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    wf = SummarizationWorkflow(SummarizerConfig(api_key="test-key"), provider=provider)
    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_summarizer] = lambda: wf
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
