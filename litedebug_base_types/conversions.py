"""Conversion helpers shared by the primitive types."""

from re import sub
from typing import List, SupportsBytes, TypeAlias

BytesConvertible: TypeAlias = str | bytes | SupportsBytes | List[int]
FixedSizeBytesConvertible: TypeAlias = str | bytes | SupportsBytes | List[int] | int
NumberConvertible: TypeAlias = str | bytes | SupportsBytes | int


def to_bytes(input_bytes: BytesConvertible) -> bytes:
    """Convert a hex string, a byte sequence or a list of ints into bytes."""
    if input_bytes is None:
        raise ValueError("cannot convert `None` to bytes")

    if isinstance(input_bytes, (bytes, list, SupportsBytes)):
        return bytes(input_bytes)

    if isinstance(input_bytes, str):
        # whitespace is tolerated for readability of long literals
        hex_str = sub(r"\s+", "", input_bytes).removeprefix("0x")
        if len(hex_str) % 2 == 1:
            hex_str = "0" + hex_str
        return bytes.fromhex(hex_str)

    raise TypeError(f"invalid type for bytes conversion: {type(input_bytes).__name__}")


def to_fixed_size_bytes(
    input_bytes: FixedSizeBytesConvertible,
    size: int,
    *,
    left_padding: bool = False,
) -> bytes:
    """
    Convert the input into exactly `size` bytes.

    Integers are always left-padded. Any other input must either already have the
    requested size or `left_padding` must be set.
    """
    if isinstance(input_bytes, int):
        return input_bytes.to_bytes(length=size, byteorder="big")
    converted = to_bytes(input_bytes)
    if len(converted) > size:
        raise ValueError(f"input is too large for fixed size bytes: {len(converted)} > {size}")
    if len(converted) < size:
        if not left_padding:
            raise ValueError(
                f"input is too small for fixed size bytes: {len(converted)} < {size}\n"
                "Use `left_padding=True` to allow padding."
            )
        return converted.rjust(size, b"\x00")
    return converted


def to_number(input_number: NumberConvertible) -> int:
    """Convert an int, a decimal/hex string or big-endian bytes into an int."""
    if isinstance(input_number, int):
        return input_number
    if isinstance(input_number, str):
        return int(input_number, 0)
    if isinstance(input_number, (bytes, SupportsBytes)):
        return int.from_bytes(bytes(input_number), byteorder="big")
    raise TypeError(f"invalid type for number conversion: {type(input_number).__name__}")
