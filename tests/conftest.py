import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import juicelab.models  # noqa: F401
from juicelab.core.config import settings
from juicelab.core.database import Base, get_db
from juicelab.main import app


@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    # без контекстного менеджера: lifespan (init_db на боевой базе) не запускается
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def admin_headers(monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_TOKEN", "test-admin-token")
    return {"X-Admin-Token": "test-admin-token"}
