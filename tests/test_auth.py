def test_register_returns_public_projection(client):
    resp = client.post(
        "/auth/register",
        json={"role": "tutor", "name": "Ana", "email": "ana@example.com", "password": "pw"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["role"] == "tutor"
    assert body["name"] == "Ana"
    assert body["email"] == "ana@example.com"
    assert isinstance(body["id"], int)
    assert "password" not in body


def test_register_then_login(client, make_user):
    user = make_user("student", email="s@example.com", password="hunter2")
    resp = client.post("/auth/login", json={"email": "s@example.com", "password": "hunter2"})
    assert resp.status_code == 200
    assert resp.json() == user


def test_register_duplicate_email_conflicts(client, make_user):
    make_user("student", email="dup@example.com")
    resp = client.post(
        "/auth/register",
        json={"role": "tutor", "name": "Other", "email": "dup@example.com", "password": "x"},
    )
    assert resp.status_code == 409
    assert "error" in resp.json()


def test_login_with_wrong_password_is_unauthorized(client, make_user):
    make_user("student", email="s@example.com", password="right")
    resp = client.post("/auth/login", json={"email": "s@example.com", "password": "wrong"})
    assert resp.status_code == 401


def test_login_unknown_email_is_unauthorized(client):
    resp = client.post("/auth/login", json={"email": "nobody@example.com", "password": "x"})
    assert resp.status_code == 401


def test_password_is_not_stored_in_clear(client, app, make_user):
    make_user("student", email="s@example.com", password="plain-text")
    with app.state.pool.connection() as conn:
        stored = conn.execute("SELECT password_hash FROM users WHERE email = ?", ("s@example.com",)).fetchone()
    assert stored["password_hash"] != "plain-text"


def test_register_missing_fields_is_bad_request(client):
    resp = client.post("/auth/register", json={"role": "student", "email": "x@example.com"})
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert "name" in error
    assert "password" in error


def test_register_rejects_unknown_role(client):
    resp = client.post(
        "/auth/register",
        json={"role": "admin", "name": "A", "email": "a@example.com", "password": "x"},
    )
    assert resp.status_code == 400
