"""RLP serialization of field-list driven objects."""

from typing import Any, ClassVar, List

import ethereum_rlp as eth_rlp
from ethereum_types.numeric import Uint

from .base_types import Bytes


def to_serializable_element(v: Any) -> Any:
    """Return an element that can be passed to `eth_rlp.encode`."""
    if isinstance(v, int):
        return Uint(v)
    elif isinstance(v, bytes):
        return v
    elif isinstance(v, list):
        return [to_serializable_element(item) for item in v]
    elif v is None:
        return b""
    raise TypeError(f"Unable to serialize element {v} of type {type(v)}.")


class RLPSerializable:
    """
    Adds RLP serialization to a class.

    The encoded list is built from the attributes named by `get_rlp_fields()`;
    the signing envelope from the attributes named by `get_rlp_signing_fields()`.
    """

    rlp_fields: ClassVar[List[str]]
    rlp_signing_fields: ClassVar[List[str]]

    def get_rlp_fields(self) -> List[str]:
        """Return the ordered list of field names included in the serialization."""
        return self.rlp_fields

    def get_rlp_signing_fields(self) -> List[str]:
        """Return the ordered list of field names included in the signing envelope."""
        return self.rlp_signing_fields

    def to_list_from_fields(self, fields: List[str]) -> List[Any]:
        """Return the values of `fields` as an RLP serializable list."""
        values_list: List[Any] = []
        for field in fields:
            try:
                values_list.append(to_serializable_element(getattr(self, field)))
            except (AttributeError, TypeError) as e:
                raise ValueError(
                    f'Unable to rlp serialize field "{field}" '
                    f'in object type "{self.__class__.__name__}"'
                ) from e
        return values_list

    def to_list(self, signing: bool = False) -> List[Any]:
        """Return the object, or its signing envelope, as an RLP serializable list."""
        if signing:
            return self.to_list_from_fields(self.get_rlp_signing_fields())
        return self.to_list_from_fields(self.get_rlp_fields())

    def rlp_signing_bytes(self) -> Bytes:
        """Return the serialized envelope that gets signed."""
        return Bytes(eth_rlp.encode(self.to_list(signing=True)))

    def rlp(self) -> Bytes:
        """Return the serialized object."""
        return Bytes(eth_rlp.encode(self.to_list(signing=False)))
