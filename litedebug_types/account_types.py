"""Account-related types."""

from coincurve.keys import PrivateKey

from litedebug_base_types import Address, Bytes, Hash, Number
from litedebug_base_types.conversions import FixedSizeBytesConvertible, NumberConvertible


def address_from_public_key(public_key_bytes: bytes) -> Address:
    """Return the address of an uncompressed (65 byte) secp256k1 public key."""
    return Address(Bytes(public_key_bytes[1:]).keccak256()[32 - 20 :])


class EOA(Address):
    """
    An Externally Owned Account (EOA) is an account controlled by a private key.

    The EOA is defined by its address and (optionally) by its corresponding private key.
    When only the key is given, the address is derived from it.
    """

    key: Hash | None
    nonce: Number

    def __new__(
        cls,
        address: "FixedSizeBytesConvertible | Address | EOA | None" = None,
        *,
        key: FixedSizeBytesConvertible | None = None,
        nonce: NumberConvertible = 0,
    ):
        """Init the EOA."""
        if address is None:
            if key is None:
                raise ValueError("impossible to initialize EOA without address")
            private_key = PrivateKey(Hash(key))
            address = address_from_public_key(private_key.public_key.format(compressed=False))
        elif isinstance(address, EOA):
            return address
        instance = super(EOA, cls).__new__(cls, address)
        instance.key = Hash(key) if key is not None else None
        instance.nonce = Number(nonce)
        return instance

    def get_nonce(self) -> Number:
        """Return the current nonce of the EOA and increment it by one."""
        nonce = self.nonce
        self.nonce = Number(nonce + 1)
        return nonce
