"""
Common definitions and types.
"""

from .base_types import Address, Bytes, FixedSizeBytes, Hash, HexNumber, Number, Wei
from .conversions import to_bytes, to_number
from .json import to_json
from .pydantic import CamelModel, LiteDebugBaseModel, LiteDebugRootModel
from .serialization import RLPSerializable

__all__ = (
    "Address",
    "Bytes",
    "CamelModel",
    "FixedSizeBytes",
    "Hash",
    "HexNumber",
    "LiteDebugBaseModel",
    "LiteDebugRootModel",
    "Number",
    "RLPSerializable",
    "Wei",
    "to_bytes",
    "to_json",
    "to_number",
)
