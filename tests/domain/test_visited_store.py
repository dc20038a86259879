import threading

import pytest

from wordcrawl.domain import PageResult, VisitedStore


def test_url_not_visited_initially():
    store = VisitedStore()
    assert not store.is_visited("https://example.com")
    assert len(store) == 0


def test_first_claim_wins_and_inserts_placeholder():
    store = VisitedStore()
    assert store.try_claim("https://example.com")
    assert store.is_visited("https://example.com")
    assert store.snapshot() == {"https://example.com": PageResult("https://example.com", 0, 0)}


def test_second_claim_of_same_url_fails():
    store = VisitedStore()
    assert store.try_claim("https://example.com/a")
    assert not store.try_claim("https://example.com/a")
    assert store.try_claim("https://example.com/b")
    assert len(store) == 2


def test_record_overwrites_claimed_result():
    store = VisitedStore()
    store.try_claim("https://example.com")
    store.record("https://example.com", PageResult("https://example.com", 7, 2))
    assert store.snapshot()["https://example.com"].words == 7
    assert store.snapshot()["https://example.com"].numbers == 2


def test_record_unclaimed_url_raises():
    store = VisitedStore()
    with pytest.raises(KeyError):
        store.record("https://example.com", PageResult("https://example.com", 1, 1))


def test_snapshot_is_a_copy():
    store = VisitedStore()
    store.try_claim("https://example.com")
    snap = store.snapshot()
    snap.clear()
    assert store.is_visited("https://example.com")


def test_concurrent_claims_have_exactly_one_winner():
    store = VisitedStore()
    callers = 32
    barrier = threading.Barrier(callers)
    results = []
    results_lock = threading.Lock()

    def claim():
        barrier.wait()
        won = store.try_claim("https://example.com/race")
        with results_lock:
            results.append(won)

    threads = [threading.Thread(target=claim) for _ in range(callers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == callers
    assert results.count(True) == 1
