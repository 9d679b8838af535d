def test_direct_conversation_in_both_directions(client, tutor, student):
    first = client.post("/messages", json={"fromUserId": tutor["id"], "toUserId": student["id"], "body": "Hi"})
    assert first.status_code == 200
    assert isinstance(first.json()["id"], int)
    client.post("/messages", json={"fromUserId": student["id"], "toUserId": tutor["id"], "body": "Hello"})

    resp = client.get("/messages", params={"fromUserId": student["id"], "toUserId": tutor["id"]})
    assert resp.status_code == 200
    messages = resp.json()
    assert [m["body"] for m in messages] == ["Hello", "Hi"]
    assert messages[1]["fromUserId"] == tutor["id"]
    assert messages[1]["toUserId"] == student["id"]
    assert "groupId" not in messages[0]


def test_conversation_excludes_other_users(client, tutor, student, make_user):
    other = make_user("student")
    client.post("/messages", json={"fromUserId": tutor["id"], "toUserId": other["id"], "body": "Not you"})
    messages = client.get("/messages", params={"fromUserId": tutor["id"], "toUserId": student["id"]}).json()
    assert messages == []


def test_group_messages(client, tutor, group):
    client.post("/messages", json={"fromUserId": tutor["id"], "groupId": group["id"], "body": "Welcome"})
    client.post("/messages", json={"fromUserId": tutor["id"], "groupId": group["id"], "body": "Homework"})
    messages = client.get("/messages", params={"groupId": group["id"]}).json()
    assert [m["body"] for m in messages] == ["Homework", "Welcome"]
    assert messages[0]["groupId"] == group["id"]
    assert "toUserId" not in messages[0]


def test_message_with_both_recipients_shows_in_both_views(client, tutor, student, group):
    client.post(
        "/messages",
        json={"fromUserId": tutor["id"], "toUserId": student["id"], "groupId": group["id"], "body": "Both"},
    )
    group_view = client.get("/messages", params={"groupId": group["id"]}).json()
    direct_view = client.get("/messages", params={"fromUserId": tutor["id"], "toUserId": student["id"]}).json()
    assert [m["body"] for m in group_view] == ["Both"]
    assert [m["body"] for m in direct_view] == ["Both"]


def test_message_requires_a_recipient(client, tutor):
    resp = client.post("/messages", json={"fromUserId": tutor["id"], "body": "Into the void"})
    assert resp.status_code == 400


def test_message_requires_sender_and_body(client, student):
    resp = client.post("/messages", json={"toUserId": student["id"]})
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert "fromUserId" in error
    assert "body" in error


def test_listing_requires_group_or_pair(client, tutor):
    assert client.get("/messages").status_code == 400
    assert client.get("/messages", params={"fromUserId": tutor["id"]}).status_code == 400


def test_missing_field_named_body_is_reported(client, tutor, group):
    resp = client.post("/messages", json={"fromUserId": tutor["id"], "groupId": group["id"]})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Missing or invalid fields: body"
