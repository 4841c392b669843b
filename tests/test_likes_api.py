from __future__ import annotations


def test_toggle_twice_restores_state_and_count(client, store, auth_headers):
    user = store.add_user()
    member = store.add_member("山田太郎")
    question = store.add_question(member, "学校給食について", session_date=100)
    store.add_like(999, question["id"])
    headers = auth_headers(user)

    first = client.post(f"/questions/{question['id']}/like", headers=headers)
    assert first.status_code == 200, first.text
    assert first.json() == {"liked": True, "likeCount": 2}

    second = client.post(f"/questions/{question['id']}/like", headers=headers)
    assert second.json() == {"liked": False, "likeCount": 1}


def test_toggle_requires_identity(client, store):
    member = store.add_member("山田太郎")
    question = store.add_question(member, "学校給食について", session_date=100)

    response = client.post(f"/questions/{question['id']}/like")

    assert response.status_code == 401
    assert store.likes == []


def test_toggle_unknown_question_is_not_found(client, store, auth_headers):
    user = store.add_user()
    response = client.post("/questions/4040/like", headers=auth_headers(user))

    assert response.status_code == 404
    assert store.likes == []


def test_question_detail_reports_is_liked_for_caller_only(client, store, auth_headers):
    user = store.add_user()
    member = store.add_member("山田太郎")
    question = store.add_question(member, "学校給食について", session_date=100)
    store.add_like(user["id"], question["id"])

    anonymous = client.get(f"/questions/{question['id']}").json()
    personal = client.get(f"/questions/{question['id']}", headers=auth_headers(user)).json()

    assert anonymous["isLiked"] is False
    assert personal["isLiked"] is True
    assert personal["likeCount"] == anonymous["likeCount"] == 1
