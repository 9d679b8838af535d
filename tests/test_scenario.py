def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


def test_tutor_student_end_to_end(client):
    tutor = client.post(
        "/auth/register",
        json={"role": "tutor", "name": "T", "email": "t@example.com", "password": "pw"},
    ).json()
    group = client.post("/groups", json={"tutorId": tutor["id"], "name": "G1", "code": "ABC"}).json()
    student = client.post(
        "/auth/register",
        json={"role": "student", "name": "S", "email": "s@example.com", "password": "pw"},
    ).json()
    joined = client.post("/groups/join", json={"studentId": student["id"], "groupCode": "ABC"})
    assert joined.json() == {"ok": True, "groupId": group["id"]}

    groups = client.get("/groups", params={"tutorId": tutor["id"]}).json()
    assert groups == [
        {"id": group["id"], "code": "ABC", "name": "G1", "students": [{"id": student["id"], "name": "S"}]}
    ]

    assert client.post("/mood", json={"studentId": student["id"], "mood": "muyMal"}).status_code == 200
    alerts = client.get("/alerts", params={"studentId": student["id"]}).json()
    assert len(alerts) == 1
    assert alerts[0]["severity"] == "high"


def test_routes_can_be_mounted_under_a_prefix(tmp_path):
    from fastapi.testclient import TestClient

    from wellbeing_api.app.core.config import Settings
    from wellbeing_api.app.main import create_app

    app = create_app(Settings(database_url=str(tmp_path / "prefixed.db"), api_prefix="/api/v1"))
    with TestClient(app) as client:
        assert client.get("/api/v1/health").json() == {"ok": True}
        assert client.get("/health").status_code == 404
