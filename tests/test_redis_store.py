from datetime import timedelta

import pytest
import redis

from walletsys.redis_store import RedisStore

MINUTE = timedelta(minutes=1)


class FakeRedis:
    def __init__(self, fail_get=False, fail_set=False):
        self.data = {}
        self.ttls = {}
        self.fail_get = fail_get
        self.fail_set = fail_set

    def get(self, name):
        if self.fail_get:
            raise redis.exceptions.ConnectionError("down")
        return self.data.get(name)

    def setex(self, name, time, value):
        if self.fail_set:
            raise redis.exceptions.ConnectionError("down")
        self.data[name] = value.encode("utf-8") if isinstance(value, str) else value
        self.ttls[name] = time
        return True

    def delete(self, *names):
        return sum(self.data.pop(name, None) is not None for name in names)


def test_get_missing():
    assert RedisStore(FakeRedis()).get("k") is None


def test_set_get_decodes_bytes():
    client = FakeRedis()
    store = RedisStore(client)
    assert store.set_ex("k", "v", MINUTE) is True
    assert store.get("k") == "v"
    assert client.ttls["k"] == MINUTE


def test_delete_counts():
    client = FakeRedis()
    store = RedisStore(client)
    store.set_ex("a", "1", MINUTE)
    store.set_ex("b", "2", MINUTE)
    assert store.delete("a", "b", "c") == 2
    assert store.get("a") is None


def test_fetch_hit_skips_loader():
    client = FakeRedis()
    client.data["k"] = b'{"x":1}'
    calls = []
    result = RedisStore(client).fetch("k", MINUTE, lambda: calls.append(1))
    assert result == '{"x":1}'
    assert calls == []


def test_fetch_miss_stores_json():
    client = FakeRedis()
    store = RedisStore(client)
    result = store.fetch("k", MINUTE, lambda: {"balance": 100})
    assert result == '{"balance":100}'
    assert store.get("k") == result
    assert client.ttls["k"] == MINUTE


def test_fetch_get_failure_falls_back():
    client = FakeRedis(fail_get=True)
    result = RedisStore(client).fetch("k", MINUTE, lambda: [1, 2])
    assert result == "[1,2]"
    assert client.data["k"] == b"[1,2]"


def test_fetch_set_failure_still_returns():
    client = FakeRedis(fail_set=True)
    assert RedisStore(client).fetch("k", MINUTE, lambda: "v") == '"v"'
    assert client.data == {}


def test_fetch_loader_error_propagates():
    client = FakeRedis()

    def fail():
        raise ValueError("foo")

    with pytest.raises(ValueError, match="foo"):
        RedisStore(client).fetch("k", MINUTE, fail)
    assert client.data == {}