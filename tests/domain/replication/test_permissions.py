from __future__ import annotations

import pytest

from replicator.domain.model import ObjectMeta
from replicator.domain.replication import AnnotationPermissionGate, ReplicationAnnotations
from replicator.domain.replication.permissions import namespace_matches, parse_bool

NAMES = ReplicationAnnotations()


def _source(**annotations: str) -> ObjectMeta:
    return ObjectMeta(name="creds", namespace="src", annotations=dict(annotations))


def _allowing(namespaces: str, allowed: str = "true") -> ObjectMeta:
    return ObjectMeta(
        name="creds",
        namespace="src",
        annotations={
            NAMES.replication_allowed: allowed,
            NAMES.replication_allowed_namespaces: namespaces,
        },
    )


def _target(namespace: str) -> ObjectMeta:
    return ObjectMeta(name="creds", namespace=namespace)


def test_allow_all_permits_without_annotations() -> None:
    gate = AnnotationPermissionGate(allow_all=True)

    assert gate.is_permitted(_target("any"), _source())


def test_missing_opt_in_is_denied_with_reason() -> None:
    decision = AnnotationPermissionGate().is_permitted(_target("team-a"), _source())

    assert not decision
    assert decision.reason is not None
    assert "does not explicitly allow replication" in decision.reason


@pytest.mark.parametrize("value", ["false", "0", "F"])
def test_explicit_opt_out_is_denied(value: str) -> None:
    decision = AnnotationPermissionGate().is_permitted(_target("team-a"), _allowing("team-a", value))

    assert not decision.allowed
    assert decision.reason is not None
    assert "explicitly disallows" in decision.reason


def test_illegal_opt_in_value_is_denied() -> None:
    decision = AnnotationPermissionGate().is_permitted(_target("team-a"), _allowing("team-a", "yes"))

    assert not decision.allowed
    assert decision.reason is not None
    assert "illegal annotation value" in decision.reason


def test_opt_in_without_namespaces_is_denied() -> None:
    source = _source(**{NAMES.replication_allowed: "true"})

    decision = AnnotationPermissionGate().is_permitted(_target("team-a"), source)

    assert not decision.allowed


@pytest.mark.parametrize(
    ("patterns", "namespace", "expected"),
    [
        ("team-a", "team-a", True),
        ("team-a,team-b", "team-b", True),
        (" team-a , team-b ", "team-b", True),
        ("team-.*", "team-c", True),
        ("team-.*", "staging-team-c", False),
        ("team", "team-a", False),
        ("", "team-a", False),
    ],
)
def test_allowed_namespaces_match_whole_names_or_patterns(
    patterns: str,
    namespace: str,
    expected: bool,  # noqa: FBT001
) -> None:
    decision = AnnotationPermissionGate().is_permitted(_target(namespace), _allowing(patterns))

    assert decision.allowed is expected


def test_invalid_pattern_falls_back_to_literal_comparison() -> None:
    assert namespace_matches("team-[", "team-[")
    assert not namespace_matches("team-[", "team-a")


def test_parse_bool_accepts_go_spellings() -> None:
    assert parse_bool("True") is True
    assert parse_bool("0") is False
    with pytest.raises(ValueError, match="invalid boolean"):
        parse_bool("yes")


def test_custom_prefix_is_honoured() -> None:
    names = ReplicationAnnotations(prefix="example.com")
    gate = AnnotationPermissionGate(annotations=names)
    source = ObjectMeta(
        name="creds",
        namespace="src",
        annotations={
            names.replication_allowed: "true",
            names.replication_allowed_namespaces: "team-a",
        },
    )

    assert gate.is_permitted(_target("team-a"), source).allowed
    assert not gate.is_permitted(_target("team-a"), _allowing("team-a")).allowed
