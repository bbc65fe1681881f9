from __future__ import annotations

import pytest

from replicator.domain.model import ObjectKey, ObjectKind, Secret


def test_object_key_round_trips_through_store_format() -> None:
    key = ObjectKey.parse("team-a/creds")

    assert key == ObjectKey(namespace="team-a", name="creds")
    assert str(key) == "team-a/creds"


@pytest.mark.parametrize("value", ["creds", "/creds", "team-a/", "a/b/c"])
def test_object_key_rejects_malformed_values(value: str) -> None:
    with pytest.raises(ValueError, match="Invalid object key"):
        ObjectKey.parse(value)


def test_secret_clone_is_deep() -> None:
    secret = Secret.build(namespace="ns", name="creds", data={"a": b"1"}, annotations={"x": "y"})

    clone = secret.clone()
    clone.data["b"] = b"2"
    clone.metadata.annotations["x"] = "z"

    assert secret.data == {"a": b"1"}
    assert secret.annotations == {"x": "y"}


def test_secret_variant_maps_to_type() -> None:
    secret = Secret.blank()
    assert secret.variant is None

    secret.variant = "kubernetes.io/tls"

    assert secret.type == "kubernetes.io/tls"
    assert secret.KIND is ObjectKind.SECRET
    assert secret.metadata.name == ""
