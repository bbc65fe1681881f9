from __future__ import annotations

from replicator.domain.replication import OwnedKeys
from replicator.domain.replication.keys import current_keys, merge_data


def test_merge_without_history_only_adds_and_overwrites() -> None:
    merge = merge_data({"a": b"1"}, {"a": b"0", "f": b"9"}, None)

    assert merge.data == {"a": b"1", "f": b"9"}
    assert merge.replicated == OwnedKeys.of(["a"])
    assert merge.removed == ()


def test_merge_removes_only_previously_owned_keys() -> None:
    target = {"a": b"1", "b": b"2", "f": b"9"}

    merge = merge_data({"b": b"2", "c": b"3"}, target, OwnedKeys.of(["a", "b"]))

    assert merge.data == {"b": b"2", "c": b"3", "f": b"9"}
    assert merge.removed == ("a",)
    assert target == {"a": b"1", "b": b"2", "f": b"9"}


def test_merge_copies_buffer_values_into_bytes() -> None:
    value = bytearray(b"secret")

    merge = merge_data({"a": value}, {}, None)  # type: ignore[dict-item]
    value[:] = b"change"

    assert merge.data["a"] == b"secret"
    assert isinstance(merge.data["a"], bytes)


def test_empty_source_removes_everything_replication_owned() -> None:
    merge = merge_data({}, {"a": b"1", "f": b"9"}, OwnedKeys.of(["a"]))

    assert merge.data == {"f": b"9"}
    assert merge.replicated.serialize() == ""


def test_current_keys_is_sorted_and_comma_joined() -> None:
    assert current_keys({"b": b"", "a": b"", "c": b""}) == "a,b,c"
    assert current_keys({}) == ""
