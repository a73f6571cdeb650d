import os
import uuid

# must be set before memberhub.config is imported
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("APP_ENV", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

import memberhub.models  # noqa: F401
from memberhub.db import Base, get_db, get_session_factory, make_engine
from memberhub.main import create_app
from memberhub.services.memberships import MembershipService

from helpers import auth, register_and_login, uniq_email

@pytest.fixture()
def engine(tmp_path):
    # file-backed so the invite worker threads each get their own connection
    database_url = os.environ.get("TEST_DATABASE_URL") or f"sqlite+pysqlite:///{tmp_path / 'test.db'}"

    engine = make_engine(database_url)
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(engine)
        engine.dispose()

@pytest.fixture()
def session_factory(engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)

@pytest.fixture()
def db_session(session_factory) -> Session:
    session: Session = session_factory()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture()
def service(session_factory) -> MembershipService:
    return MembershipService(session_factory, max_workers=4)

@pytest.fixture()
def client(session_factory) -> TestClient:
    app = create_app()

    def _override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    return TestClient(app)

@pytest.fixture()
def owner(client) -> dict:
    email = uniq_email("owner")
    jwt, user_id = register_and_login(client, email)
    return {"id": user_id, "email": email, "jwt": jwt}

@pytest.fixture()
def group_id(client, owner) -> str:
    r = client.post("/groups", json={"name": f"group-{uuid.uuid4().hex[:6]}"}, headers=auth(owner["jwt"]))
    assert r.status_code == 201, r.text
    return r.json()["id"]
