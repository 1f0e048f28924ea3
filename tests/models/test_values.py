from __future__ import annotations

import pytest

from terraform_testkit.models import ABSENT, UNKNOWN, box, unbox, values_equal
from terraform_testkit.models.values import (
    EqualTo,
    ListValue,
    MapValue,
    ScalarValue,
    ValueMatcher,
    path_segments,
)


class RecordingMatcher(ValueMatcher):
    def __init__(self, result: bool) -> None:
        self.result = result
        self.calls: list = []

    def matches(self, actual) -> bool:
        self.calls.append(actual)
        return self.result

    def describe(self) -> str:
        return "recorded"


@pytest.mark.parametrize(
    "value",
    [
        "text",
        10,
        1.5,
        True,
        None,
        [1, "two", [3]],
        {"name": "web", "tags": {"Team": "platform"}, "ports": [80, 443]},
    ],
)
def test_box_then_unbox_returns_equal_value(value) -> None:
    boxed = box(value)

    assert unbox(boxed) == value
    assert boxed.matches(value)


def test_box_builds_typed_wrappers() -> None:
    boxed = box({"items": [1, 2], "name": "x"})

    assert isinstance(boxed, MapValue)
    assert isinstance(boxed.get("items"), ListValue)
    assert isinstance(boxed.get("name"), ScalarValue)


def test_get_traverses_nested_paths() -> None:
    boxed = box({"versioning": [{"enabled": True}], "tags": {"Team": "platform"}})

    assert boxed.get(["versioning", 0, "enabled"]) == True  # noqa: E712
    assert boxed.get(("tags", "Team")) == "platform"
    assert boxed.get("tags").unbox() == {"Team": "platform"}


@pytest.mark.parametrize(
    "path",
    ["missing", ["tags", "Owner"], ["versioning", 3], ["versioning", "enabled"], ["name", "x"]],
)
def test_get_returns_absent_for_missing_paths(path) -> None:
    boxed = box({"name": "web", "versioning": [{"enabled": True}], "tags": {}})

    value = boxed.get(path)

    assert value is ABSENT
    assert value.unbox() is None


def test_absent_matches_expected_none() -> None:
    assert box({}).get("missing").matches(None)


def test_unknown_markers_add_unknown_values() -> None:
    boxed = box({"name": "web"}, unknown={"id": True, "name": False, "tags": {}})

    assert boxed.get("id").is_unknown
    assert boxed.get("id").unbox() is UNKNOWN
    assert not boxed.get("name").is_unknown
    assert boxed.get("tags") is ABSENT


def test_unknown_list_items_are_appended() -> None:
    boxed = box(["a"], unknown=[False, True])

    assert boxed.unbox() == ["a", UNKNOWN]


def test_sensitive_values_keep_real_value_and_mark_children() -> None:
    boxed = box({"credentials": {"user": "admin"}}, sensitive={"credentials": True})

    credentials = boxed.get("credentials")
    user = boxed.get(["credentials", "user"])

    assert credentials.is_sensitive
    assert user.is_sensitive
    assert user.matches("admin")


def test_matcher_object_receives_unboxed_actual() -> None:
    matcher = RecordingMatcher(result=True)

    assert box({"ports": [80]}).get("ports").matches(matcher)
    assert matcher.calls == [[80]]


def test_matcher_object_result_is_not_second_guessed() -> None:
    matcher = RecordingMatcher(result=False)

    assert not box("same").matches(matcher)
    assert matcher.calls == ["same"]


@pytest.mark.parametrize(
    ("left", "right", "expected"),
    [
        (1, 1.0, True),
        (True, 1, False),
        (0, False, False),
        (True, True, True),
        ({"a": [1, 2]}, {"a": [1, 2]}, True),
        ({"a": 1}, {"a": 1, "b": None}, False),
        ([1, 2], [2, 1], False),
        ([1, 2], (1, 2), True),
        ("1", 1, False),
    ],
)
def test_values_equal(left, right, expected) -> None:
    assert values_equal(left, right) is expected


def test_equal_to_describes_expected_value() -> None:
    assert EqualTo({"a": 1}).describe() == 'equal to {"a": 1}'


def test_path_segments_validates_input() -> None:
    assert path_segments("name") == ("name",)
    assert path_segments(["a", 0]) == ("a", 0)

    with pytest.raises(ValueError):
        path_segments([])
    with pytest.raises(TypeError):
        path_segments(["a", 1.5])
