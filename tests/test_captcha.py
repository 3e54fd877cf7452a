import pytest

from adminsdk.captcha import CacheStore, new_cache_store

EXPIRATION = 6000


class MemoryCache:
    def __init__(self):
        self.data = {}
        self.expires = {}

    def get(self, key):
        if key not in self.data:
            raise KeyError(key)
        return self.data[key]

    def set(self, key, value, expire):
        self.data[key] = value
        self.expires[key] = expire

    def delete(self, key):
        self.data.pop(key, None)


class BrokenCache:
    def get(self, key):
        raise ConnectionError("down")

    def set(self, key, value, expire):
        raise ConnectionError("down")

    def delete(self, key):
        raise ConnectionError("down")


def test_set_get():
    s = new_cache_store(MemoryCache(), EXPIRATION)
    s.set("captcha id", "random-string")
    assert s.get("captcha id", False) == "random-string"


def test_get_clear():
    s = new_cache_store(MemoryCache(), EXPIRATION)
    s.set("captcha id", "932839jfffjkdss")
    assert s.get("captcha id", True) == "932839jfffjkdss"
    assert s.get("captcha id", False) == ""


def test_set_many_keeps_all():
    cache = MemoryCache()
    s = new_cache_store(cache, -1)
    for i in range(101):
        s.set(str(i), str(i))
    assert len(cache.data) == 101
    assert cache.expires["100"] == -1


def test_collect_not_expire():
    s = new_cache_store(MemoryCache(), 36000)
    for i in range(50):
        s.set(str(i), str(i))
    assert s.get("0", False) == "0"


@pytest.mark.parametrize("expiration", [36000, 180000])
def test_new_cache_store(expiration):
    cache = MemoryCache()
    store = new_cache_store(cache, expiration)
    assert store == CacheStore(cache=cache, expiration=expiration)


def test_verify():
    s = new_cache_store(MemoryCache(), EXPIRATION)
    s.set("id", "abcd")
    assert s.verify("id", "wrong", False) is False
    assert s.verify("id", "abcd", True) is True
    assert s.verify("id", "abcd", False) is False


def test_missing_id_gives_empty():
    assert new_cache_store(MemoryCache(), EXPIRATION).get("nope", True) == ""


def test_broken_cache_is_tolerated():
    s = new_cache_store(BrokenCache(), EXPIRATION)
    s.set("id", "v")
    assert s.get("id", True) == ""
    assert s.verify("id", "", False) is True