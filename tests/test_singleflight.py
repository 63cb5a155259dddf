import threading
import time

import pytest

from walletsys.singleflight import SingleFlight


def test_success():
    sf = SingleFlight()
    assert sf.do("key", lambda: None) == (None, False)


def test_error():
    sf = SingleFlight()

    def fail():
        raise ValueError("foo")

    with pytest.raises(ValueError, match="foo"):
        sf.do("key", fail)


def test_key_released_after_error():
    sf = SingleFlight()

    def fail():
        raise ValueError("foo")

    with pytest.raises(ValueError):
        sf.do("key", fail)
    assert sf.do("key", lambda: 7) == (7, False)


def test_sequential_calls_each_run():
    sf = SingleFlight()
    calls = []

    def fn():
        calls.append(1)
        return len(calls)

    assert sf.do("k", fn) == (1, False)
    assert sf.do("k", fn) == (2, False)


def _wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError("condition not reached")
        time.sleep(0.005)


def test_concurrent_calls_share_result():
    sf = SingleFlight()
    started = threading.Event()
    release = threading.Event()
    calls = []
    results = {}

    def fn():
        calls.append(1)
        started.set()
        release.wait(5)
        return "value"

    def run(name):
        results[name] = sf.do("k", fn)

    leader = threading.Thread(target=run, args=("leader",))
    leader.start()
    assert started.wait(5)
    follower = threading.Thread(target=run, args=("follower",))
    follower.start()
    _wait_for(lambda: "k" in sf._calls and sf._calls["k"].dups == 1)
    release.set()
    leader.join(5)
    follower.join(5)

    assert len(calls) == 1
    assert results == {"leader": ("value", True), "follower": ("value", True)}


def test_forget_lets_new_call_run():
    sf = SingleFlight()
    started = threading.Event()
    release = threading.Event()
    results = {}

    def slow():
        started.set()
        release.wait(5)
        return "slow"

    thread = threading.Thread(target=lambda: results.setdefault("slow", sf.do("k", slow)))
    thread.start()
    assert started.wait(5)
    sf.forget("k")
    assert sf.do("k", lambda: "fast") == ("fast", False)
    release.set()
    thread.join(5)
    assert results["slow"] == ("slow", False)