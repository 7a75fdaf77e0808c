import pytest

from robotprefs.values import (
    EMPTY,
    PreferenceType,
    PreferenceValue,
    PreferencesSnapshot,
    element_type,
)


def test_of_infers_tags():
    assert PreferenceValue.of(True).type is PreferenceType.BOOLEAN
    assert PreferenceValue.of(3) == PreferenceValue(PreferenceType.NUMBER, 3.0)
    assert PreferenceValue.of("x").type is PreferenceType.STRING
    assert PreferenceValue.of([1, 2]).type is PreferenceType.NUMBER_ARRAY
    assert PreferenceValue.of([True]).type is PreferenceType.BOOLEAN_ARRAY
    assert PreferenceValue.of(("a",)).type is PreferenceType.STRING_ARRAY


def test_of_rejects_unsupported():
    with pytest.raises(TypeError):
        PreferenceValue.of(None)
    with pytest.raises(TypeError):
        PreferenceValue.of([1, "a"])


def test_equality_is_tag_aware():
    assert PreferenceValue.of(1) != PreferenceValue.of(True)
    assert PreferenceValue.of(float("nan")) == PreferenceValue.of(float("nan"))


def test_element_type():
    assert element_type(PreferenceType.STRING_ARRAY) is PreferenceType.STRING
    assert element_type(PreferenceType.NUMBER) is None


def test_from_name_is_case_insensitive():
    assert PreferenceType.from_name("numberarray") is PreferenceType.NUMBER_ARRAY


def test_put_returns_new_snapshot():
    snap = PreferencesSnapshot({"a": 1})
    updated = snap.put("b", "x")
    assert "b" not in snap
    assert updated["b"] == PreferenceValue.of("x")
    assert updated["a"] is snap["a"]


def test_snapshot_is_read_only():
    snap = PreferencesSnapshot({"a": 1})
    with pytest.raises(TypeError):
        snap.as_map()["a"] = PreferenceValue.of(2)  # type: ignore[index]


def test_changes_from():
    prev = PreferencesSnapshot({"a": 1, "b": 2, "c": 3})
    cur = PreferencesSnapshot({"a": 1, "b": 5, "d": 4})
    assert set(cur.changes_from(prev)) == {"b", "d"}
    assert set(cur.changes_from(None)) == {"a", "b", "d"}
    assert cur.changes_from(cur) == {}


def test_without_and_equality():
    snap = PreferencesSnapshot({"a": 1, "b": 2})
    assert snap.without("a") == PreferencesSnapshot({"b": 2})
    assert snap.without("missing") == snap
    assert EMPTY == PreferencesSnapshot()
