"""
SaveForLaters domain model.

Defines the SaveForLaters measure of the XDM commerce schema: a product list
saved for future use, for example a product wish list.
"""

from dataclasses import dataclass
from typing import Optional

from .property import XdmField, XdmProperty

_FIELDS = (
    XdmField(name="id", attribute="id"),
    XdmField(name="value", attribute="value", required=True, default=0.0),
)


@dataclass
class SaveForLaters(XdmProperty):
    """
    Represents one save-for-later measure.

    Attributes:
        id: Client-generated unique identifier of the measure taken, or None when
            unset. Identifies the measure in time, not a user or device; any
            user-identifying inputs used to build it should be hashed.
        value: The quantifiable value of this measure. Always serialized; a
            measure that was never set reads as 0.0.
    """

    id: Optional[str] = None
    value: float = 0.0

    @classmethod
    def xdm_fields(cls):
        return _FIELDS

    def get_id(self) -> Optional[str]:
        return self.id

    def set_id(self, new_value: Optional[str]) -> None:
        self.id = new_value

    def get_value(self) -> float:
        return self.value

    def set_value(self, new_value: float) -> None:
        self.value = new_value
