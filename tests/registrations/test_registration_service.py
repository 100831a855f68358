from __future__ import annotations

import threading

import pytest

from src.conference_system.conference_system.core.exceptions import NotFoundError


def test_registering_twice_is_a_no_op(container, make_participant, make_session):
    session = make_session(capacity=5)
    pid = make_participant("Ann", "ann@x.com")

    first = container.registration_service.register_for_session(pid, session.session_id)
    second = container.registration_service.register_for_session(pid, session.session_id)

    assert first == second == (session.session_id,)
    assert container.registration_service.registered_count(session.session_id) == 1


def test_registration_ignores_capacity(container, make_participant, make_session):
    session = make_session(capacity=1)
    ann = make_participant("Ann", "ann@x.com")
    bob = make_participant("Bob", "bob@x.com")
    container.admission_service.check_in(ann, session.session_id)

    assert container.registration_service.register_for_session(bob, session.session_id) == (session.session_id,)


def test_concurrent_registrations_for_one_participant_end_as_the_union(container, make_participant, make_session):
    sessions = [make_session(capacity=1, title=f"Talk {i}") for i in range(8)]
    pid = make_participant("Ann", "ann@x.com")
    barrier = threading.Barrier(len(sessions))

    def register(session_id: int):
        barrier.wait()
        container.registration_service.register_for_session(pid, session_id)

    threads = [threading.Thread(target=register, args=(s.session_id,)) for s in sessions]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    expected = tuple(sorted(s.session_id for s in sessions))
    assert container.registration_service.registered_sessions(pid) == expected
    assert container.identity_service.get(pid).registered_sessions == expected


def test_unknown_references_are_not_found(container, make_participant, make_session):
    session = make_session(capacity=1)
    pid = make_participant("Ann", "ann@x.com")

    with pytest.raises(NotFoundError):
        container.registration_service.register_for_session(pid, 999)
    with pytest.raises(NotFoundError):
        container.registration_service.register_for_session(999, session.session_id)
    assert container.registration_service.registered_sessions(pid) == ()


def test_deleting_a_session_drops_it_from_registrations(container, make_participant, make_session):
    keep = make_session(capacity=1, title="Keep")
    drop = make_session(capacity=1, title="Drop")
    pid = make_participant("Ann", "ann@x.com")
    container.registration_service.register_for_session(pid, keep.session_id)
    container.registration_service.register_for_session(pid, drop.session_id)

    container.catalog_service.delete_session(drop.session_id)

    assert container.registration_service.registered_sessions(pid) == (keep.session_id,)
