import pytest
from fastapi.testclient import TestClient

from wellbeing_api.app.core.config import Settings
from wellbeing_api.app.main import create_app


@pytest.fixture
def app(tmp_path):
    return create_app(Settings(database_url=str(tmp_path / "wellbeing-test.db"), db_pool_size=2))


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(client):
    """Register a user and return the response payload."""
    counter = {"n": 0}

    def _make_user(role="student", name=None, email=None, password="secret"):
        counter["n"] += 1
        name = name or f"{role.title()} {counter['n']}"
        email = email or f"{role}{counter['n']}@example.com"
        resp = client.post(
            "/auth/register",
            json={"role": role, "name": name, "email": email, "password": password},
        )
        assert resp.status_code == 200, resp.text
        return resp.json()

    return _make_user


@pytest.fixture
def tutor(make_user):
    return make_user("tutor", name="Tutor T")


@pytest.fixture
def student(make_user):
    return make_user("student", name="Student S")


@pytest.fixture
def group(client, tutor):
    resp = client.post("/groups", json={"tutorId": tutor["id"], "name": "G1", "code": "ABC"})
    assert resp.status_code == 200, resp.text
    return resp.json()


@pytest.fixture
def enrolled(client, student, group):
    resp = client.post("/groups/join", json={"studentId": student["id"], "groupCode": group["code"]})
    assert resp.status_code == 200, resp.text
    return student
