import gc
import threading

from src.conference_system.conference_system.admissions.locks import SessionLockRegistry


def test_same_session_shares_one_lock():
    locks = SessionLockRegistry()

    assert locks.lock_for(1) is locks.lock_for("1")
    assert locks.lock_for(1) is not locks.lock_for(2)


def test_holding_one_session_does_not_block_another():
    locks = SessionLockRegistry()
    acquired = threading.Event()

    def other():
        with locks.hold(2):
            acquired.set()

    with locks.hold(1):
        t = threading.Thread(target=other)
        t.start()
        assert acquired.wait(timeout=2)
        t.join()


def test_holding_a_session_blocks_the_same_session():
    locks = SessionLockRegistry()

    with locks.hold(7):
        assert not locks.lock_for(7).acquire(blocking=False)
    assert locks.lock_for(7).acquire(blocking=False)


def test_idle_locks_are_released():
    locks = SessionLockRegistry()

    with locks.hold(3):
        assert len(locks) == 1
    for session_id in range(100):
        with locks.hold(session_id):
            pass
    gc.collect()

    assert len(locks) == 0
