"""Users, messages and notifications routes"""
from datetime import timedelta

from app.models.post import Post
from app.utils.time_utils import utc_now

API = "/api/v1"


def befriend(client, headers_for, requester, addressee):
    edge_id = client.post(
        f"{API}/social/friends/request/{addressee.id}", headers=headers_for(requester.id)
    ).json()["edgeId"]
    client.post(f"{API}/social/friends/accept/{edge_id}", headers=headers_for(addressee.id))
    return edge_id


def test_get_user_profile(client, make_user, headers_for):
    me = make_user()
    other = make_user(skills="Go,Rust", location="Lisbon")

    body = client.get(f"{API}/users/{other.id}", headers=headers_for(me.id)).json()

    assert body["skills"] == "Go,Rust"
    assert body["location"] == "Lisbon"
    assert body["username"] == other.username
    assert "email" not in body

    assert client.get(f"{API}/users/9999", headers=headers_for(me.id)).status_code == 404


def test_me_requires_existing_account(client, make_user, headers_for):
    me = make_user()

    body = client.get(f"{API}/users/me", headers=headers_for(me.id)).json()
    assert body["id"] == me.id
    assert body["email"] == me.email
    assert client.get(f"{API}/users/me", headers=headers_for(4242)).status_code == 401


def test_suggestions_for_deleted_account_are_forbidden(client, headers_for):
    response = client.get(f"{API}/users/suggested-friends", headers=headers_for(4242))
    assert response.status_code == 403


def test_search_users_by_skill(client, make_user, headers_for):
    me = make_user()
    rustacean = make_user(skills="Rust")
    make_user(skills="Python")

    body = client.get(f"{API}/users", params={"skill": "Rust"}, headers=headers_for(me.id)).json()

    assert [u["id"] for u in body] == [rustacean.id]


def test_feed_route(client, db, scenario_users, headers_for):
    a, b, c = scenario_users
    befriend(client, headers_for, a, b)
    db.add_all([
        Post(user_id=b.id, content="from bob", created_at=utc_now() - timedelta(minutes=1)),
        Post(user_id=c.id, content="from carol", created_at=utc_now()),
    ])
    db.commit()

    feed = client.get(f"{API}/users/feed", headers=headers_for(a.id)).json()

    assert [p["content"] for p in feed] == ["from bob"]
    assert feed[0]["user"]["username"] == "bob"
    assert feed[0]["likesCount"] == 0
    assert feed[0]["commentsCount"] == 0
    assert feed[0]["isLiked"] is False
    assert feed[0]["mediaUrl"] is None


def test_messaging_routes(client, scenario_users, headers_for):
    a, b, c = scenario_users

    response = client.post(
        f"{API}/messages", json={"receiverId": b.id, "content": "hi"}, headers=headers_for(a.id)
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "You can only message with friends"

    befriend(client, headers_for, a, b)

    response = client.post(
        f"{API}/messages", json={"receiverId": b.id, "content": "hi"}, headers=headers_for(a.id)
    )
    assert response.status_code == 200
    assert response.json()["isSender"] is True

    conversations = client.get(f"{API}/messages", headers=headers_for(b.id)).json()
    assert conversations[0]["user"]["id"] == a.id
    assert conversations[0]["unreadCount"] == 1
    assert conversations[0]["isFriend"] is True

    messages = client.get(f"{API}/messages/{a.id}", headers=headers_for(b.id)).json()
    assert [(m["content"], m["isSender"]) for m in messages] == [("hi", False)]

    assert client.get(f"{API}/messages/{c.id}", headers=headers_for(b.id)).status_code == 400


def test_notification_routes(client, scenario_users, headers_for):
    a, b, _ = scenario_users
    befriend(client, headers_for, a, b)
    client.post(f"{API}/messages", json={"receiverId": a.id, "content": "yo"}, headers=headers_for(b.id))

    notifications = client.get(f"{API}/notifications", headers=headers_for(a.id)).json()
    assert [n["type"] for n in notifications] == ["message", "friend_accepted"]
    assert client.get(f"{API}/notifications/unread-count", headers=headers_for(a.id)).json() == {"count": 2}

    first_id = notifications[0]["id"]
    assert client.put(f"{API}/notifications/{first_id}/read", headers=headers_for(b.id)).status_code == 404
    assert client.put(f"{API}/notifications/{first_id}/read", headers=headers_for(a.id)).status_code == 200
    assert client.get(f"{API}/notifications/unread-count", headers=headers_for(a.id)).json() == {"count": 1}

    body = client.put(f"{API}/notifications/read-all", headers=headers_for(a.id)).json()
    assert body["updated"] == 1
    assert client.get(f"{API}/notifications/unread-count", headers=headers_for(a.id)).json() == {"count": 0}


def test_root_and_health(client):
    assert client.get("/").json()["status"] == "running"
    assert client.get("/health").json()["status"] == "healthy"
