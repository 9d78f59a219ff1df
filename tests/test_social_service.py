"""Friendship state machine"""
from concurrent.futures import ThreadPoolExecutor
import threading

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.database import Base
from app.models.notification import Notification
from app.models.social import Friendship
from app.models.user import User
from app.services.access_gate import access_gate
from app.services.friendship_store import friendship_store
from app.services.notification_service import notification_service
from app.services.social_service import (
    social_service,
    ALREADY_FRIENDS,
    ALREADY_RECEIVED,
    ALREADY_SENT,
)


def notifications_for(db, user_id):
    return db.query(Notification).filter(Notification.user_id == user_id).order_by(Notification.id).all()


def test_send_request_creates_pending_edge_and_notifies(db, scenario_users):
    a, b, _ = scenario_users

    response = social_service.send_friend_request(db, a.id, b.id)

    assert response.requester_id == a.id
    assert response.addressee_id == b.id
    assert response.accepted is False
    assert response.user.id == b.id
    assert response.user.username == "bob"

    edge = db.query(Friendship).one()
    assert edge.id == response.edge_id

    [notification] = notifications_for(db, b.id)
    assert notification.type == "friend_request"
    assert notification.is_read is False
    assert notifications_for(db, a.id) == []


def test_send_request_to_self_is_rejected(db, make_user):
    a = make_user()

    with pytest.raises(ValidationError):
        social_service.send_friend_request(db, a.id, a.id)


def test_send_request_to_unknown_user(db, make_user):
    a = make_user()

    with pytest.raises(NotFoundError):
        social_service.send_friend_request(db, a.id, 9999)


def test_duplicate_request_same_direction(db, scenario_users):
    a, b, _ = scenario_users
    social_service.send_friend_request(db, a.id, b.id)

    with pytest.raises(ConflictError) as exc:
        social_service.send_friend_request(db, a.id, b.id)

    assert exc.value.message == ALREADY_SENT
    assert db.query(Friendship).count() == 1


def test_reverse_request_is_rejected(db, scenario_users):
    a, b, _ = scenario_users
    social_service.send_friend_request(db, a.id, b.id)

    with pytest.raises(ConflictError) as exc:
        social_service.send_friend_request(db, b.id, a.id)

    assert exc.value.message == ALREADY_RECEIVED
    assert db.query(Friendship).count() == 1


def test_concurrent_opposite_requests_leave_one_edge(tmp_path):
    """Two sessions race A->B against B->A; the pair constraint keeps one edge"""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'race.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    SessionFactory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    try:
        with SessionFactory() as setup:
            alice = User(username="alice", email="alice@example.com", skills="Go")
            bob = User(username="bob", email="bob@example.com", skills="Go")
            setup.add_all([alice, bob])
            setup.commit()
            alice_id, bob_id = alice.id, bob.id

        barrier = threading.Barrier(2)

        def send(caller_id, target_id):
            session = SessionFactory()
            try:
                barrier.wait()
                return social_service.send_friend_request(session, caller_id, target_id)
            except ConflictError as e:
                return e
            finally:
                session.close()

        with ThreadPoolExecutor(max_workers=2) as pool:
            futures = [pool.submit(send, alice_id, bob_id), pool.submit(send, bob_id, alice_id)]
            results = [future.result() for future in futures]

        conflicts = [r for r in results if isinstance(r, ConflictError)]
        created = [r for r in results if not isinstance(r, ConflictError)]
        assert len(created) == 1
        assert len(conflicts) == 1
        assert conflicts[0].message == ALREADY_RECEIVED

        with SessionFactory() as check:
            [edge] = check.query(Friendship).all()
            assert edge.id == created[0].edge_id
            assert edge.accepted is False
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


def test_request_between_friends_is_rejected(db, scenario_users):
    a, b, _ = scenario_users
    sent = social_service.send_friend_request(db, a.id, b.id)
    social_service.accept_friend_request(db, b.id, sent.edge_id)

    for caller, target in ((a, b), (b, a)):
        with pytest.raises(ConflictError) as exc:
            social_service.send_friend_request(db, caller.id, target.id)
        assert exc.value.message == ALREADY_FRIENDS


def test_racing_request_is_reported_like_the_precheck(db, scenario_users, monkeypatch):
    """The losing insert of two concurrent requests hits the pair constraint"""
    a, b, _ = scenario_users
    friendship_store.create(db, b.id, a.id)

    real_find_between = friendship_store.find_between
    calls = []

    def stale_find_between(session, user_a, user_b):
        calls.append((user_a, user_b))
        if len(calls) == 1:
            return None  # pre-check ran before the other insert committed
        return real_find_between(session, user_a, user_b)

    monkeypatch.setattr(friendship_store, "find_between", stale_find_between)

    with pytest.raises(ConflictError) as exc:
        social_service.send_friend_request(db, a.id, b.id)

    assert exc.value.message == ALREADY_RECEIVED
    assert db.query(Friendship).count() == 1


def test_accept_makes_connection_symmetric_and_notifies_requester(db, scenario_users):
    a, b, _ = scenario_users
    sent = social_service.send_friend_request(db, a.id, b.id)

    friendship = social_service.accept_friend_request(db, b.id, sent.edge_id)

    assert friendship.accepted is True
    assert access_gate.are_connected(db, a.id, b.id)
    assert access_gate.are_connected(db, b.id, a.id)

    [notification] = notifications_for(db, a.id)
    assert notification.type == "friend_accepted"


def test_requester_cannot_accept_own_request(db, scenario_users):
    a, b, _ = scenario_users
    sent = social_service.send_friend_request(db, a.id, b.id)

    with pytest.raises(NotFoundError):
        social_service.accept_friend_request(db, a.id, sent.edge_id)

    assert not access_gate.are_connected(db, a.id, b.id)


def test_accept_twice_is_not_found(db, scenario_users):
    a, b, _ = scenario_users
    sent = social_service.send_friend_request(db, a.id, b.id)
    social_service.accept_friend_request(db, b.id, sent.edge_id)

    with pytest.raises(NotFoundError):
        social_service.accept_friend_request(db, b.id, sent.edge_id)

    assert len(notifications_for(db, a.id)) == 1


def test_accept_unknown_request(db, make_user):
    with pytest.raises(NotFoundError):
        social_service.accept_friend_request(db, make_user().id, 12345)


@pytest.mark.parametrize("canceller", ["requester", "addressee"])
def test_either_party_can_delete_pending_request(db, scenario_users, canceller):
    a, b, _ = scenario_users
    sent = social_service.send_friend_request(db, a.id, b.id)
    caller = a if canceller == "requester" else b

    social_service.cancel_or_reject_request(db, caller.id, sent.edge_id)

    assert db.query(Friendship).count() == 0


def test_outsider_cannot_delete_request(db, scenario_users):
    a, b, c = scenario_users
    sent = social_service.send_friend_request(db, a.id, b.id)

    with pytest.raises(NotFoundError):
        social_service.cancel_or_reject_request(db, c.id, sent.edge_id)

    assert db.query(Friendship).count() == 1


def test_cancel_does_not_apply_to_accepted_friendship(db, scenario_users):
    a, b, _ = scenario_users
    sent = social_service.send_friend_request(db, a.id, b.id)
    social_service.accept_friend_request(db, b.id, sent.edge_id)

    with pytest.raises(NotFoundError):
        social_service.cancel_or_reject_request(db, a.id, sent.edge_id)


def test_remove_friend_leaves_no_residual_state(db, scenario_users):
    a, b, _ = scenario_users
    sent = social_service.send_friend_request(db, a.id, b.id)
    social_service.accept_friend_request(db, b.id, sent.edge_id)
    notifications_before = db.query(Notification).count()

    social_service.remove_friend(db, b.id, sent.edge_id)

    assert not access_gate.are_connected(db, a.id, b.id)
    assert db.query(Notification).count() == notifications_before

    again = social_service.send_friend_request(db, a.id, b.id)
    assert again.accepted is False
    assert again.edge_id != sent.edge_id


def test_remove_friend_requires_accepted_edge(db, scenario_users):
    a, b, c = scenario_users
    sent = social_service.send_friend_request(db, a.id, b.id)

    with pytest.raises(NotFoundError):
        social_service.remove_friend(db, a.id, sent.edge_id)

    social_service.accept_friend_request(db, b.id, sent.edge_id)
    with pytest.raises(NotFoundError):
        social_service.remove_friend(db, c.id, sent.edge_id)


def test_notification_failure_does_not_undo_request(db, scenario_users, monkeypatch):
    a, b, _ = scenario_users

    def broken_emit(*args, **kwargs):
        raise SQLAlchemyError("notifications table unavailable")

    monkeypatch.setattr(notification_service, "emit", broken_emit)

    response = social_service.send_friend_request(db, a.id, b.id)

    assert friendship_store.get(db, response.edge_id) is not None
    assert notifications_for(db, b.id) == []

    friendship = social_service.accept_friend_request(db, b.id, response.edge_id)
    assert friendship.accepted is True


def test_friend_and_request_listings(db, make_user):
    me, f1, f2, incoming, outgoing = (make_user() for _ in range(5))
    for friend in (f1, f2):
        sent = social_service.send_friend_request(db, me.id, friend.id)
        social_service.accept_friend_request(db, friend.id, sent.edge_id)
    social_service.send_friend_request(db, incoming.id, me.id)
    social_service.send_friend_request(db, me.id, outgoing.id)

    friends = social_service.get_friends(db, me.id)
    assert [entry.user.id for entry in friends] == [f1.id, f2.id]
    assert social_service.get_friend_count(db, me.id) == 2

    [inc] = social_service.get_incoming_requests(db, me.id)
    assert inc.user.id == incoming.id
    assert inc.created_at is not None

    [out] = social_service.get_outgoing_requests(db, me.id)
    assert out.user.id == outgoing.id

    # The friend sees me from their side
    [mine] = social_service.get_friends(db, f1.id)
    assert mine.user.id == me.id
