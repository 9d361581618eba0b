"""Transaction-related types."""

from functools import cached_property
from typing import Any, ClassVar, List, Literal

from coincurve.keys import PrivateKey, PublicKey
from pydantic import ConfigDict, Field

from litedebug_base_types import (
    Address,
    Bytes,
    CamelModel,
    Hash,
    HexNumber,
    RLPSerializable,
)

from .account_types import EOA, address_from_public_key


class TransactionDefaults:
    """Default values for transactions."""

    chain_id: ClassVar[int] = 1
    gas_limit: ClassVar[int] = 21_000
    gas_price: ClassVar[int] = 10


class Transaction(CamelModel, RLPSerializable):
    """
    Legacy (type 0) value transfer transaction.

    The transaction is replay protected as described in EIP-155: the chain id is part of
    the signing envelope and folded into `v`. A transaction built with a `secret_key` is
    signed on construction and the key is discarded; the signed transaction is frozen.
    """

    ty: Literal[0] = Field(0, alias="type")
    chain_id: HexNumber = Field(default_factory=lambda: HexNumber(TransactionDefaults.chain_id))
    nonce: HexNumber = HexNumber(0)
    gas_price: HexNumber = Field(default_factory=lambda: HexNumber(TransactionDefaults.gas_price))
    gas_limit: HexNumber = Field(
        default_factory=lambda: HexNumber(TransactionDefaults.gas_limit),
        serialization_alias="gas",
    )
    to: Address | None = None
    value: HexNumber = HexNumber(0)
    data: Bytes = Field(Bytes(b""), alias="input")

    v: HexNumber = HexNumber(0)
    r: HexNumber = HexNumber(0)
    s: HexNumber = HexNumber(0)

    sender: Address | None = Field(None, alias="from")
    secret_key: Hash | None = Field(None, exclude=True)

    zero: ClassVar[Literal[0]] = 0
    rlp_signing_fields: ClassVar[List[str]] = [
        "nonce",
        "gas_price",
        "gas_limit",
        "to",
        "value",
        "data",
        "chain_id",
        "zero",
        "zero",
    ]
    rlp_fields: ClassVar[List[str]] = [
        "nonce",
        "gas_price",
        "gas_limit",
        "to",
        "value",
        "data",
        "v",
        "r",
        "s",
    ]

    model_config = ConfigDict(frozen=True)

    class UnsignedTransactionError(Exception):
        """Transaction was used where a signed one is required."""

        def __str__(self):
            """Print exception string."""
            return "transaction is not signed and no secret key was provided"

    def model_post_init(self, __context: Any) -> None:
        """Sign the transaction when a secret key is provided."""
        super().model_post_init(__context)
        if self.secret_key is not None:
            if {"v", "r", "s"} & self.model_fields_set:
                raise ValueError("can't define both a signature and a secret key")
            self._sign()

    @classmethod
    def signed(cls, *, signer: EOA, **kwargs: Any) -> "Transaction":
        """Build a transaction signed with the key of `signer`."""
        if signer.key is None:
            raise ValueError(f"EOA {signer} has no private key to sign with")
        return cls(secret_key=signer.key, **kwargs)

    def _sign(self) -> None:
        assert self.secret_key is not None
        signing_hash = self.rlp_signing_bytes().keccak256()
        signature = PrivateKey(secret=self.secret_key).sign_recoverable(signing_hash, hasher=None)
        public_key = PublicKey.from_signature_and_message(signature, signing_hash, hasher=None)
        values = {
            "v": HexNumber(signature[64] + 35 + 2 * self.chain_id),
            "r": HexNumber(int.from_bytes(signature[0:32], byteorder="big")),
            "s": HexNumber(int.from_bytes(signature[32:64], byteorder="big")),
            "sender": address_from_public_key(public_key.format(compressed=False)),
            "secret_key": None,
        }
        # the model is frozen, signing is the only mutation ever applied to it
        for field_name, value in values.items():
            object.__setattr__(self, field_name, value)
        self.model_fields_set.update(values.keys())

    @property
    def is_signed(self) -> bool:
        """Whether the transaction carries a signature."""
        return self.r != 0 and self.s != 0

    @cached_property
    def signature_bytes(self) -> Bytes:
        """Returns the 65-byte recoverable signature `r || s || recovery_id`."""
        if not self.is_signed:
            raise Transaction.UnsignedTransactionError()
        recovery_id = int(self.v) - 35 - 2 * self.chain_id
        return Bytes(
            self.r.to_bytes(32, byteorder="big")
            + self.s.to_bytes(32, byteorder="big")
            + bytes([recovery_id])
        )

    def recover_sender(self) -> Address:
        """Recover the sender address from the signature."""
        public_key = PublicKey.from_signature_and_message(
            self.signature_bytes, self.rlp_signing_bytes().keccak256(), hasher=None
        )
        return address_from_public_key(public_key.format(compressed=False))

    def rlp(self) -> Bytes:
        """Return the serialized signed transaction."""
        if not self.is_signed:
            raise Transaction.UnsignedTransactionError()
        return super().rlp()

    @cached_property
    def hash(self) -> Hash:
        """Returns hash of the transaction."""
        return self.rlp().keccak256()
