from __future__ import annotations


def test_super_admin_edits_user(client, store, auth_headers):
    boss = store.add_user(role="superAdmin")
    target = store.add_user(name="Old Name")

    response = client.patch(
        f"/admin/users/{target['id']}",
        json={"name": "  New Name ", "email": "New@Example.com"},
        headers=auth_headers(boss),
    )

    assert response.status_code == 200, response.text
    assert response.json()["name"] == "New Name"
    assert store.users[target["id"]]["email"] == "new@example.com"


def test_user_edit_rejects_taken_email(client, store, auth_headers):
    boss = store.add_user(role="superAdmin")
    target = store.add_user()
    other = store.add_user(email="taken@example.com")

    response = client.patch(
        f"/admin/users/{target['id']}", json={"email": "TAKEN@example.com"}, headers=auth_headers(boss)
    )

    assert response.status_code == 409
    assert store.users[target["id"]]["email"] != other["email"]


def test_user_edit_keeping_own_email_is_allowed(client, store, auth_headers):
    boss = store.add_user(role="superAdmin")
    target = store.add_user(email="same@example.com")

    response = client.patch(
        f"/admin/users/{target['id']}", json={"email": "same@example.com"}, headers=auth_headers(boss)
    )
    assert response.status_code == 200


def test_plain_admin_cannot_edit_users(client, store, auth_headers):
    admin = store.add_user(role="admin")
    target = store.add_user()

    response = client.patch(f"/admin/users/{target['id']}", json={"name": "x"}, headers=auth_headers(admin))
    assert response.status_code == 403


def test_super_admin_deletes_user_and_authored_content(client, store, auth_headers):
    boss = store.add_user(role="superAdmin")
    author = store.add_user(role="admin")
    member = store.add_member("山田太郎")
    question = store.add_question(member, "質問", session_date=1)
    store.add_like(author["id"], question["id"])
    store.news[500] = {"id": 500, "author_id": author["id"], "is_published": True}

    response = client.delete(f"/admin/users/{author['id']}", headers=auth_headers(boss))

    assert response.status_code == 200, response.text
    assert author["id"] not in store.users
    assert author["id"] not in store.admins
    assert store.likes == []
    assert 500 not in store.news


def test_super_admin_cannot_delete_self(client, store, auth_headers):
    boss = store.add_user(role="superAdmin")

    response = client.delete(f"/admin/users/{boss['id']}", headers=auth_headers(boss))

    assert response.status_code == 400
    assert boss["id"] in store.users


def test_delete_unknown_user_is_not_found(client, store, auth_headers):
    boss = store.add_user(role="superAdmin")
    assert client.delete("/admin/users/4242", headers=auth_headers(boss)).status_code == 404
