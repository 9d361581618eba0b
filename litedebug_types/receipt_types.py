"""Transaction receipt types."""

from typing import List

from pydantic import ConfigDict, Field

from litedebug_base_types import Address, Bytes, CamelModel, Hash, HexNumber


class TransactionLog(CamelModel):
    """Transaction log."""

    address: Address
    topics: List[Hash]
    data: Bytes
    block_number: HexNumber | None = None
    transaction_hash: Hash | None = None
    transaction_index: HexNumber | None = None
    block_hash: Hash | None = None
    log_index: HexNumber | None = None
    removed: bool = False


class TransactionReceipt(CamelModel):
    """
    Receipt of a transaction as returned by `eth_getTransactionReceipt`.

    `block_number` stays `None` until the node reports the transaction as included.
    """

    transaction_hash: Hash
    block_hash: Hash | None = None
    block_number: HexNumber | None = None
    transaction_index: HexNumber | None = None
    from_address: Address | None = Field(None, alias="from")
    to: Address | None = None
    gas_used: HexNumber | None = None
    cumulative_gas_used: HexNumber | None = None
    effective_gas_price: HexNumber | None = None
    contract_address: Address | None = None
    status: HexNumber | None = None
    logs: List[TransactionLog] | None = None

    model_config = ConfigDict(extra="ignore")

    @property
    def included(self) -> bool:
        """Whether the receipt reports the transaction as part of a block."""
        return self.block_number is not None
