"""
Tests for the generic serializer behind XdmProperty:
- optional vs required field policy
- recursive serialization of nested properties, lists and mappings
"""

from dataclasses import dataclass
from typing import Optional

import pytest

from xdm.property import XdmField, XdmProperty, serialize_value
from xdm.save_for_laters import SaveForLaters


@dataclass
class Commerce(XdmProperty):
    """Minimal parent node used to exercise nesting."""

    save_for_laters: Optional[SaveForLaters] = None
    history: Optional[list] = None
    extras: Optional[dict] = None
    count: Optional[int] = None
    flagged: bool = False

    @classmethod
    def xdm_fields(cls):
        return (
            XdmField(name="saveForLaters", attribute="save_for_laters"),
            XdmField(name="history", attribute="history"),
            XdmField(name="_extras", attribute="extras"),
            XdmField(name="count", attribute="count", required=True, default=0),
            XdmField(name="flagged", attribute="flagged", required=True, default=False),
        )


def test_abstract_property_cannot_be_instantiated():
    with pytest.raises(TypeError):
        XdmProperty()


def test_empty_parent_emits_only_required_defaults():
    assert Commerce().serialize_to_xdm() == {"count": 0, "flagged": False}


def test_nested_property_is_serialized_recursively():
    parent = Commerce(save_for_laters=SaveForLaters(id="abc123", value=9.99), count=3)
    assert parent.serialize_to_xdm() == {
        "saveForLaters": {"id": "abc123", "value": 9.99},
        "count": 3,
        "flagged": False,
    }


def test_lists_and_mappings_are_traversed():
    parent = Commerce(
        history=[SaveForLaters(value=1.0), "raw", 2],
        extras={"latest": SaveForLaters(id="x"), "tags": ("a", "b")},
    )
    out = parent.serialize_to_xdm()
    assert out["history"] == [{"value": 1.0}, "raw", 2]
    assert out["_extras"] == {"latest": {"id": "x", "value": 0.0}, "tags": ["a", "b"]}


def test_schema_keys_are_used_not_attribute_names():
    out = Commerce(save_for_laters=SaveForLaters()).serialize_to_xdm()
    assert "saveForLaters" in out
    assert "save_for_laters" not in out


def test_empty_containers_are_kept():
    """Only None means absent; an empty list is a populated value."""
    out = Commerce(history=[]).serialize_to_xdm()
    assert out["history"] == []


def test_serialize_value_leaves_scalars_untouched():
    for scalar in ("s", 1, 1.5, True, None):
        assert serialize_value(scalar) == scalar


def test_non_json_leaves_pass_through_without_raising():
    tags = frozenset({"a"})
    out = Commerce(extras={"tags": tags, "raw": b"\x00"}).serialize_to_xdm()
    assert out["_extras"] == {"tags": tags, "raw": b"\x00"}
