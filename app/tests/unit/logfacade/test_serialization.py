"""Unit tests for logfacade.serialization module.

Tests cover:
- deep_clone() supported kinds and failures
- normalize_key() renaming rules
- bound() depth collapse and key normalization
- encode_json() compact encoding
"""

import copy
import datetime
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from uuid import UUID

import pytest
from pydantic import BaseModel

from logfacade.exceptions import SerializationError
from logfacade.serialization import bound, deep_clone, encode_json, normalize_key


class Color(Enum):
    RED = "red"


@dataclass
class Point:
    x: int
    y: int


class Account(BaseModel):
    id: int
    tags: list[str]


@pytest.mark.unit
class TestDeepClone:
    """Test suite for deep_clone()."""

    def test_clone_is_equal_but_independent(self):
        """Nested containers are copied, not shared."""
        data = {"a": {"b": [1, 2, {"c": "d"}]}}

        clone = deep_clone(data)
        clone["a"]["b"][2]["c"] = "changed"

        assert data["a"]["b"][2]["c"] == "d"

    def test_tuples_become_lists(self):
        assert deep_clone({"t": (1, 2)}) == {"t": [1, 2]}

    def test_non_string_keys_use_json_spelling(self):
        """Scalar keys are turned into strings like json.dumps does."""
        assert deep_clone({1: "a", 1.5: "b", None: "d"}) == {
            "1": "a",
            "1.5": "b",
            "null": "d",
        }
        assert deep_clone({True: "c"}) == {"true": "c"}

    def test_special_scalars(self):
        """Dates, UUIDs, decimals and enums become JSON scalars."""
        data = {
            "when": datetime.datetime(2024, 1, 2, 3, 4, 5),
            "day": datetime.date(2024, 1, 2),
            "id": UUID("12345678-1234-5678-1234-567812345678"),
            "amount": Decimal("10.50"),
            "color": Color.RED,
        }

        assert deep_clone(data) == {
            "when": "2024-01-02T03:04:05",
            "day": "2024-01-02",
            "id": "12345678-1234-5678-1234-567812345678",
            "amount": "10.50",
            "color": "red",
        }

    def test_dataclasses_and_models_become_mappings(self):
        data = {"point": Point(1, 2), "account": Account(id=7, tags=["a"])}

        assert deep_clone(data) == {
            "point": {"x": 1, "y": 2},
            "account": {"id": 7, "tags": ["a"]},
        }

    def test_shared_references_are_allowed(self):
        """The same object may appear twice as long as there is no cycle."""
        shared = {"x": 1}

        assert deep_clone({"a": shared, "b": [shared]}) == {
            "a": {"x": 1},
            "b": [{"x": 1}],
        }

    def test_cycle_raises(self):
        data = {"name": "loop"}
        data["self"] = data

        with pytest.raises(SerializationError, match="Circular reference"):
            deep_clone(data)

    def test_cycle_through_list_raises(self):
        items = []
        items.append({"items": items})

        with pytest.raises(SerializationError):
            deep_clone({"items": items})

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), -float("inf")])
    def test_non_finite_float_raises(self, value):
        with pytest.raises(SerializationError, match="Non-finite"):
            deep_clone({"value": value})

    @pytest.mark.parametrize("value", [object(), {1, 2}, b"bytes"])
    def test_unsupported_kinds_raise(self, value):
        with pytest.raises(SerializationError, match="not serializable"):
            deep_clone({"value": value})

    def test_callables_are_dropped_from_mappings(self):
        def handler():
            pass

        assert deep_clone({"handler": handler, "builtin": len, "kind": int, "n": 1}) == {
            "n": 1
        }

    def test_callables_become_none_in_sequences(self):
        assert deep_clone({"args": ["open", lambda: None, (len,)]}) == {
            "args": ["open", None, [None]]
        }

    def test_callable_root_becomes_none(self):
        assert deep_clone(print) is None

    def test_error_names_the_path(self):
        with pytest.raises(SerializationError, match="'a.b\\[1\\]'"):
            deep_clone({"a": {"b": [1, object()]}})

    def test_serialization_error_is_type_error(self):
        with pytest.raises(TypeError):
            deep_clone(object())


@pytest.mark.unit
class TestNormalizeKey:
    """Test suite for normalize_key()."""

    @pytest.mark.parametrize(
        "key,expected",
        [
            ("1", "__1"),
            ("42", "__42"),
            ("-3", "__-3"),
            ("12abc", "__12abc"),
            ("a.b$c", "a_b_c"),
            ("1.5", "__1_5"),
            ("$set", "_set"),
            ("abc1", "abc1"),
            ("name", "name"),
        ],
    )
    def test_normalize_key(self, key, expected):
        assert normalize_key(key) == expected


@pytest.mark.unit
class TestBound:
    """Test suite for bound()."""

    TREE = {"a": {"b": {"c": 1}}}

    def test_depth_zero_collapses_everything(self):
        """At depth 0 the whole tree becomes one JSON string."""
        assert bound(self.TREE, 0) == '{"a":{"b":{"c":1}}}'

    def test_depth_one_collapses_children(self):
        """At depth 1 mapping values of the top level are collapsed."""
        assert bound(self.TREE, 1) == {"a": '{"b":{"c":1}}'}

    def test_depth_two_keeps_two_levels(self):
        """The default depth keeps two mapping levels structured."""
        assert bound(self.TREE) == {"a": {"b": '{"c":1}'}}

    def test_negative_depth_collapses(self):
        assert bound({"a": 1}, -1) == '{"a":1}'

    def test_keys_normalized_at_every_structured_level(self):
        result = bound({"1": {"a.b": {"$x": 1}, "2": "v"}}, 2)

        assert result == {"__1": {"a_b": '{"$x":1}', "__2": "v"}}

    def test_collapsed_subtree_keeps_original_keys(self):
        """Keys inside a collapsed string are left alone."""
        assert bound({"a": {"1.x": 1}}, 1) == {"a": '{"1.x":1}'}

    def test_sequences_and_scalars_pass_through(self):
        """Only mappings are bounded; lists are left as they are."""
        tree = {"items": [{"a.b": {"c": {"d": 1}}}], "n": 1, "s": "x", "none": None}

        assert bound(tree, 1) == tree

    def test_input_is_not_mutated(self):
        tree = {"a.b": {"c": {"d": 1}}}
        snapshot = copy.deepcopy(tree)

        bound(tree, 1)

        assert tree == snapshot

    def test_non_mapping_root_passes_through(self):
        assert bound([1, 2], 2) == [1, 2]
        assert bound("text", 2) == "text"


@pytest.mark.unit
class TestEncodeJson:
    """Test suite for encode_json()."""

    def test_compact_output(self):
        assert encode_json([1, "a", {"b": True}]) == '[1,"a",{"b":true}]'

    def test_non_ascii_is_kept(self):
        assert encode_json(["héllo"]) == '["héllo"]'

    def test_nan_raises(self):
        with pytest.raises(SerializationError):
            encode_json([float("nan")])

    def test_unsupported_value_raises(self):
        with pytest.raises(SerializationError):
            encode_json([object()])
