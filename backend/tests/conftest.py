import sys
from pathlib import Path

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Now import after path is set
import base64

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from application import create_app
from config.settings import Settings
from database import Base, build_engine
import models  # noqa: F401

TEST_USERNAME = "tester"
TEST_PASSWORD = "s3cret"


def basic_auth(username: str, password: str) -> dict:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def db_session():
    """Create in-memory database for testing"""
    engine = build_engine('sqlite://')
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url='sqlite://',
        data_dir=tmp_path,
        log_level="DEBUG",
        log_to_file=False,
        auth_username=TEST_USERNAME,
        auth_password=TEST_PASSWORD,
    )


@pytest.fixture
def auth_headers(settings):
    return basic_auth(settings.auth_username, settings.auth_password)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def anonymous_client(app):
    """Client that sends no credentials"""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def client(app, auth_headers):
    """Client authenticated against the access gate"""
    with TestClient(app, headers=auth_headers) as client:
        yield client
