from __future__ import annotations

from sieve.path import JsonPath


def test_root_renders_empty_and_is_root() -> None:
    root = JsonPath.root()
    assert str(root) == ""
    assert root.is_root()
    assert root.len() == 0
    assert root.parent() is None
    assert root.last() is None


def test_fields_and_indices_render_like_accessors() -> None:
    path = JsonPath.root().push_field("users").push_index(0).push_field("email")
    assert str(path) == "users[0].email"
    assert path.segments == ("users", 0, "email")


def test_leading_index_and_nested_indices() -> None:
    assert str(JsonPath.from_index(0).push_field("name")) == "[0].name"
    assert str(JsonPath.from_field("matrix").push_index(1).push_index(2)) == "matrix[1][2]"


def test_push_returns_new_path() -> None:
    base = JsonPath.from_field("a")
    child = base.push_field("b")
    assert str(base) == "a"
    assert str(child) == "a.b"
    assert child.parent() == base
    assert child.last() == "b"


def test_equality_and_hash_are_by_value() -> None:
    a = JsonPath.root().push_field("x").push_index(3)
    b = JsonPath.from_field("x").push_index(3)
    assert a == b
    assert len({a, b}) == 1
    assert a != JsonPath.from_field("x").push_field("3")


def test_ordering_puts_fields_before_indices() -> None:
    paths = [JsonPath.from_index(0), JsonPath.from_field("b"), JsonPath.from_field("a")]
    assert [str(p) for p in sorted(paths)] == ["a", "b", "[0]"]
