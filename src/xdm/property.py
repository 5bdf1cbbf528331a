"""
XDM property contract.

Every schema node of the Experience Data Model is modeled as a plain record
that implements XdmProperty. A node does not write its own serializer: it
supplies a table of XdmField descriptors, and the single recursive
serializer in this module turns the current state into a generic,
transport-ready mapping keyed by the schema field names.

Field policy:
- optional fields are emitted only when not None (no placeholder key);
- required fields are always emitted, falling back to the field's zero value;
- nested XdmProperty values, and those found inside sequences or mappings,
  are serialized recursively before insertion.
"""

from __future__ import annotations

import abc
import typing

from dataclasses import dataclass

# JSON-like target of serialization (string | number | boolean | null | mapping | sequence)
XdmValue = typing.Union[
    str,
    int,
    float,
    bool,
    None,
    typing.Mapping[str, "XdmValue"],
    typing.Sequence["XdmValue"],
]


@dataclass(frozen=True)
class XdmField:
    """
    Describes how one attribute of a schema node is emitted.

    Attributes:
        name: Schema key used in the serialized mapping (e.g. 'id').
        attribute: Name of the Python attribute holding the value.
        required: True for required/primitive fields, which are always emitted.
        default: Zero value emitted for a required field that holds None.
    """

    name: str
    attribute: str
    required: bool = False
    default: typing.Any = None


class XdmProperty(metaclass=abc.ABCMeta):
    """A node of an XDM schema that can serialize itself to a generic mapping."""

    @classmethod
    @abc.abstractmethod
    def xdm_fields(cls) -> typing.Sequence[XdmField]:
        # the descriptor table for this node type, in schema order
        raise NotImplementedError

    def serialize_to_xdm(self) -> dict[str, XdmValue]:
        """
        Return the populated schema fields of this node as a new dict.

        Pure read of the current state: the object is never mutated and no
        required-field validation is performed here.
        """
        serialized: dict[str, XdmValue] = {}
        for field in self.xdm_fields():
            value = getattr(self, field.attribute, None)
            if value is None:
                if not field.required:
                    continue
                value = field.default
            serialized[field.name] = serialize_value(value)
        return serialized


def serialize_value(value: typing.Any) -> XdmValue:
    """
    Convert one field value into its XDM form.

    Strings, numbers and booleans are returned untouched. Nested properties are
    serialized recursively; mappings and sequences are copied with each member
    converted the same way. None members inside containers are kept as-is.

    Any other leaf (sets, bytes, datetimes, ...) is passed through unchanged and
    never rejected; keeping leaves JSON-compatible is up to the node that holds them.
    """
    if isinstance(value, XdmProperty):
        return value.serialize_to_xdm()
    if isinstance(value, str):
        return value
    if isinstance(value, typing.Mapping):
        return {str(key): serialize_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_value(item) for item in value]
    return value
