import logging


def alerts_for(client, student_id):
    resp = client.get("/alerts", params={"studentId": student_id})
    assert resp.status_code == 200
    return resp.json()


def test_submit_and_read_mood(client, student):
    resp = client.post(
        "/mood",
        json={"studentId": student["id"], "mood": "bien", "note": "ok day", "loggedDate": "2024-05-06"},
    )
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}

    history = client.get("/mood", params={"studentId": student["id"]}).json()
    assert len(history) == 1
    assert history[0]["mood"] == "bien"
    assert history[0]["note"] == "ok day"
    assert history[0]["loggedDate"] == "2024-05-06"


def test_second_mood_same_day_conflicts_regardless_of_time(client, student):
    first = client.post(
        "/mood",
        json={"studentId": student["id"], "mood": "bien", "loggedDate": "2024-05-06T08:00:00"},
    )
    assert first.status_code == 200
    second = client.post(
        "/mood",
        json={"studentId": student["id"], "mood": "mal", "loggedDate": "2024-05-06T21:30:00"},
    )
    assert second.status_code == 409


def test_conflicting_low_mood_raises_no_extra_alert(client, student):
    client.post("/mood", json={"studentId": student["id"], "mood": "bien", "loggedDate": "2024-05-06"})
    client.post("/mood", json={"studentId": student["id"], "mood": "muyMal", "loggedDate": "2024-05-06"})
    assert alerts_for(client, student["id"]) == []


def test_mood_date_with_offset_is_normalised_to_utc(client, student):
    client.post(
        "/mood",
        json={"studentId": student["id"], "mood": "bien", "loggedDate": "2024-05-06T23:30:00-05:00"},
    )
    history = client.get("/mood", params={"studentId": student["id"]}).json()
    assert history[0]["loggedDate"] == "2024-05-07"


def test_mood_defaults_to_today(client, student):
    from wellbeing_api.app.core.dates import today_utc

    client.post("/mood", json={"studentId": student["id"], "mood": "bien"})
    history = client.get("/mood", params={"studentId": student["id"]}).json()
    assert history[0]["loggedDate"] == today_utc().isoformat()


def test_invalid_mood_date_is_bad_request(client, student):
    resp = client.post("/mood", json={"studentId": student["id"], "mood": "bien", "loggedDate": "yesterday"})
    assert resp.status_code == 400


def test_very_bad_mood_raises_high_alert(client, student):
    client.post("/mood", json={"studentId": student["id"], "mood": "muyMal", "loggedDate": "2024-05-06"})
    alerts = alerts_for(client, student["id"])
    assert len(alerts) == 1
    assert alerts[0]["severity"] == "high"
    assert alerts[0]["type"] == "mood"


def test_bad_mood_raises_medium_alert(client, student):
    client.post("/mood", json={"studentId": student["id"], "mood": "mal", "loggedDate": "2024-05-06"})
    alerts = alerts_for(client, student["id"])
    assert [a["severity"] for a in alerts] == ["medium"]


def test_other_moods_raise_no_alert(client, student):
    for day, mood in enumerate(["muyBien", "bien", "regular", "happy"], start=1):
        resp = client.post(
            "/mood",
            json={"studentId": student["id"], "mood": mood, "loggedDate": f"2024-05-0{day}"},
        )
        assert resp.status_code == 200
    assert alerts_for(client, student["id"]) == []


def test_history_is_most_recent_first(client, student):
    for day in ("2024-05-01", "2024-05-03", "2024-05-02"):
        client.post("/mood", json={"studentId": student["id"], "mood": "bien", "loggedDate": day})
    history = client.get("/mood", params={"studentId": student["id"]}).json()
    assert [h["loggedDate"] for h in history] == ["2024-05-03", "2024-05-02", "2024-05-01"]


def test_mood_requires_student_and_mood(client):
    resp = client.post("/mood", json={"note": "nothing else"})
    assert resp.status_code == 400
    assert "studentId" in resp.json()["error"]


def test_mood_for_unknown_student_is_store_error(client):
    resp = client.post("/mood", json={"studentId": 999, "mood": "bien"})
    assert resp.status_code == 500
    assert "FOREIGN KEY" in resp.json()["error"]


def test_failed_alert_leaves_no_mood_log(app, client, student):
    with app.state.pool.connection() as conn:
        conn.execute("DROP TABLE alerts")

    resp = client.post("/mood", json={"studentId": student["id"], "mood": "mal", "loggedDate": "2024-05-06"})
    assert resp.status_code == 500
    assert "alerts" in resp.json()["error"]
    assert client.get("/mood", params={"studentId": student["id"]}).json() == []


def test_store_error_is_logged_with_its_code(client, caplog):
    with caplog.at_level(logging.ERROR):
        client.post("/mood", json={"studentId": 999, "mood": "bien"})
    assert any("STORE_ERROR" in record.getMessage() for record in caplog.records)
