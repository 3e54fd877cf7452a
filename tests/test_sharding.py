import pytest

from adminsdk import sharding

SAMPLES = ["", "a", "小圈圈", "123456789", "user-42", "test"]


def test_crc32_check_value():
    assert sharding.crc32_hash("123456789") == "6"


def test_empty_string_is_bucket_zero():
    assert sharding.crc32_hash("") == "0"
    assert sharding.crc8_hash("") == "0"


@pytest.mark.parametrize("src", SAMPLES)
def test_buckets_in_range(src):
    assert 0 <= int(sharding.crc32_hash(src)) < 32
    assert 0 <= int(sharding.crc16_hash(src)) < 16
    assert 0 <= int(sharding.crc8_hash(src)) < 8


@pytest.mark.parametrize("src", SAMPLES)
def test_buckets_are_nested(src):
    wide = int(sharding.crc32_hash(src))
    assert int(sharding.crc16_hash(src)) == wide % 16
    assert int(sharding.crc8_hash(src)) == wide % 8


class _FakeDB:
    def __init__(self):
        self.tables = []

    def table(self, name):
        self.tables.append(name)
        return self


def test_dynamic_table_names_table():
    db = _FakeDB()
    scope = sharding.dynamic_table(sharding.crc32_hash, "test", "小圈圈")
    assert scope(db) is db
    assert db.tables == ["test_" + sharding.crc32_hash("小圈圈")]


def test_dynamic_table_uses_given_function():
    db = _FakeDB()
    sharding.dynamic_table(lambda value: value.upper(), "orders", "x")(db)
    assert db.tables == ["orders_X"]