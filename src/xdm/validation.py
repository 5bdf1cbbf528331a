"""
Required-field checks for XDM properties.

Serialization never validates; callers that need to know whether required
fields were populated run these checks before handing a property off.
Each problem is a single "missing required field" condition, reported
synchronously either into a stairval Notepad or as an exception.
"""

import typing

from stairval.notepad import Notepad

from .property import XdmProperty


class MissingRequiredFieldError(ValueError):
    """Raised by require_fields when at least one required field holds None."""

    def __init__(self, paths: typing.Sequence[str]):
        self.paths = list(paths)
        super().__init__(f"Missing required field(s): {', '.join(self.paths)}")


def missing_required_fields(prop: XdmProperty, prefix: str = "") -> list[str]:
    """
    Return the dotted paths of required fields that currently hold None.

    Nested properties (directly, or inside lists and mappings) are walked
    with their position appended to the path, e.g. 'items[0].value'.
    """
    missing: list[str] = []
    for field in prop.xdm_fields():
        path = f"{prefix}{field.name}"
        value = getattr(prop, field.attribute, None)
        if value is None:
            if field.required:
                missing.append(path)
            continue
        missing.extend(_walk_nested(value, path))
    return missing


def _walk_nested(value: typing.Any, path: str) -> list[str]:
    if isinstance(value, XdmProperty):
        return missing_required_fields(value, prefix=f"{path}.")
    if isinstance(value, typing.Mapping):
        found: list[str] = []
        for key, item in value.items():
            found.extend(_walk_nested(item, f"{path}.{key}"))
        return found
    if isinstance(value, (list, tuple)):
        found = []
        for index, item in enumerate(value):
            found.extend(_walk_nested(item, f"{path}[{index}]"))
        return found
    return []


def check_required_fields(prop: XdmProperty, notepad: Notepad) -> bool:
    """
    Add one error to `notepad` per missing required field.

    Returns True when every required field is populated.
    """
    missing = missing_required_fields(prop)
    for path in missing:
        notepad.add_error(f"{type(prop).__name__}: missing required field {path!r}")
    return not missing


def require_fields(prop: XdmProperty) -> None:
    """Raise MissingRequiredFieldError if any required field of `prop` is None."""
    missing = missing_required_fields(prop)
    if missing:
        raise MissingRequiredFieldError(missing)
