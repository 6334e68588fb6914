import gc
import threading

import cardledger.services.balance_update as bu
from cardledger.services.balance_update import card_lock


def test_same_card_waits_for_holder():
    held = threading.Event()
    release = threading.Event()
    entered = threading.Event()

    def first():
        with card_lock("4111"):
            held.set()
            release.wait(5)

    def second():
        with card_lock("4111"):
            entered.set()

    t1 = threading.Thread(target=first)
    t1.start()
    assert held.wait(5)

    t2 = threading.Thread(target=second)
    t2.start()
    assert not entered.wait(0.2)

    release.set()
    assert entered.wait(5)
    t1.join(5)
    t2.join(5)
    assert not t1.is_alive()
    assert not t2.is_alive()


def test_other_card_is_not_blocked():
    held = threading.Event()
    release = threading.Event()

    def holder():
        with card_lock("card-a"):
            held.set()
            release.wait(5)

    t = threading.Thread(target=holder)
    t.start()
    try:
        assert held.wait(5)
        done = threading.Event()

        def other():
            with card_lock("card-b"):
                done.set()

        t2 = threading.Thread(target=other)
        t2.start()
        assert done.wait(2)
        t2.join(5)
    finally:
        release.set()
        t.join(5)


def test_released_locks_are_dropped_from_registry():
    with card_lock("short-lived"):
        assert "short-lived" in bu._card_locks

    gc.collect()
    assert "short-lived" not in bu._card_locks
