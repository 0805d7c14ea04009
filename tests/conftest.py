import os
import tempfile

import pytest

_tmp_dir = tempfile.mkdtemp(prefix="blog_api_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmp_dir, 'test.db')}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["LOG_FILE"] = os.path.join(_tmp_dir, "test.log")

from fastapi.testclient import TestClient  # noqa: E402

from blog_api.database import engine  # noqa: E402
from blog_api.main import app  # noqa: E402
from blog_api.models import Base  # noqa: E402


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def signup(client):
    def _signup(username="alice", password="secret", name="Alice"):
        response = client.post(
            "/api/v1/user/signup",
            json={"username": username, "password": password, "name": name},
        )
        assert response.status_code == 200
        return response.text

    return _signup


@pytest.fixture
def token(signup):
    return signup()
