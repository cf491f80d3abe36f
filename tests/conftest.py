import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
import requests
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import setup_db
from db import Base, get_db
from logic import assistant
from main import app
from routers.analytics import analytics_cache

engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def fresh_db():
    setup_db.init_db(bind=engine, session_factory=TestingSession)
    analytics_cache.clear()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def offline_llm(monkeypatch):
    """No network in tests: every LLM call fails unless a test stubs a reply."""
    def unreachable(*args, **kwargs):
        raise requests.ConnectionError("LLM disabled in tests")

    monkeypatch.setattr(assistant, "chat_completion", unreachable)


@pytest.fixture
def llm_reply(monkeypatch):
    """Make the LLM answer with fixed text; returns the list of prompts it saw."""
    seen = []

    def install(text):
        def reply(messages, **kwargs):
            seen.append(messages)
            return text

        monkeypatch.setattr(assistant, "chat_completion", reply)
        return seen

    return install


@pytest.fixture
def db_session():
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
