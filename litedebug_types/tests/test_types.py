"""
Test suite for the `litedebug_types` module.
"""

import pytest
from pydantic import ValidationError

from litedebug_base_types import Address, Bytes, Hash, HexNumber

from ..account_types import EOA
from ..genesis_types import ChainSpecConfig, Genesis, GenesisAccount, PosaConfig
from ..receipt_types import TransactionReceipt
from ..transaction_types import Transaction

MINER_KEY = "0x9c647b8b7c4e7c3490668fb6c11473619db80c93704c70893d3813af4090c39c"
MINER_ADDRESS = Address("0x658bdf435d810c91414ec09147daa6db62406379")

# Example transaction from EIP-155.
EIP155_KEY = "0x" + "46" * 32
EIP155_SIGNED_RLP = (
    "0xf86c098504a817c800825208943535353535353535353535353535353535353535880de0b6b3a7640000"
    "8025a028ef61340bd939bc2195fe537567866003e1a15d3c71ff63e1590620aa636276a067cbe9d8997f761a"
    "ecb703304b3800ccf555c9f3dc64214b297fb1966a3b6d83"
)


def test_eoa_from_key():
    """The EOA address is derived from its private key."""
    eoa = EOA(key=MINER_KEY)
    assert eoa == MINER_ADDRESS
    assert eoa.key == Hash(MINER_KEY)


def test_eoa_nonce_tracking():
    """`get_nonce` returns the current nonce and increments it."""
    eoa = EOA(MINER_ADDRESS, nonce=3)
    assert eoa.key is None
    assert eoa.get_nonce() == 3
    assert eoa.get_nonce() == 4
    assert EOA(eoa) is eoa


def test_eoa_invalid_key():
    """A key that is not 32 bytes of hex is rejected."""
    with pytest.raises(ValueError):
        EOA(key="0x1234")
    with pytest.raises(ValueError):
        EOA()


def test_eip155_signing():
    """Signing the EIP-155 example transaction yields the reference encoding."""
    tx = Transaction(
        chain_id=1,
        nonce=9,
        gas_price=20 * 10**9,
        gas_limit=21_000,
        to=Address("0x" + "35" * 20),
        value=10**18,
        secret_key=EIP155_KEY,
    )
    assert tx.v == 37
    assert tx.secret_key is None
    assert tx.rlp() == Bytes(EIP155_SIGNED_RLP)
    assert tx.hash == Bytes(EIP155_SIGNED_RLP).keccak256()
    assert tx.sender == EOA(key=EIP155_KEY)
    assert tx.recover_sender() == tx.sender


def test_signed_with_chain_id():
    """The recovery id is folded into `v` together with the chain id."""
    tx = Transaction.signed(
        signer=EOA(key=MINER_KEY),
        chain_id=321,
        nonce=0,
        to=Address(0xF333),
        value=10**18,
        gas_limit=500_000,
        gas_price=100 * 10**9,
    )
    assert tx.v in (35 + 2 * 321, 36 + 2 * 321)
    assert tx.sender == MINER_ADDRESS
    assert tx.recover_sender() == MINER_ADDRESS
    assert tx.model_dump(mode="json", by_alias=True)["gas"] == "0x7a120"


def test_signed_requires_key():
    """An EOA without key cannot sign."""
    with pytest.raises(ValueError, match="no private key"):
        Transaction.signed(signer=EOA(MINER_ADDRESS), to=Address(0xF333))


def test_unsigned_transaction_cannot_be_encoded():
    """An unsigned transaction has no valid encoding."""
    tx = Transaction(to=Address(0xF333))
    with pytest.raises(Transaction.UnsignedTransactionError):
        tx.rlp()


def test_signed_transaction_is_frozen():
    """A signed transaction cannot be modified."""
    tx = Transaction(to=Address(0xF333), secret_key=MINER_KEY)
    with pytest.raises(ValidationError):
        tx.nonce = HexNumber(1)


def test_receipt_parsing():
    """Receipts are parsed from the JSON-RPC representation."""
    pending = TransactionReceipt.model_validate(
        {"transactionHash": "0x" + "11" * 32, "blockNumber": None}
    )
    assert not pending.included

    mined = TransactionReceipt.model_validate(
        {
            "transactionHash": "0x" + "11" * 32,
            "blockHash": "0x" + "22" * 32,
            "blockNumber": "0x1b",
            "from": str(MINER_ADDRESS),
            "to": str(Address(0xF333)),
            "status": "0x1",
            "gasUsed": "0x5208",
            "logs": [],
            "type": "0x0",
        }
    )
    assert mined.included
    assert mined.block_number == 27
    assert mined.from_address == MINER_ADDRESS


def test_genesis_client_layout():
    """The genesis is serialized with camel case keys and bare alloc addresses."""
    genesis = Genesis(
        config=ChainSpecConfig(chain_id=321, posa=PosaConfig(period=1, epoch=5)),
        extra_data=Genesis.signers_extra_data([MINER_ADDRESS]),
        alloc={MINER_ADDRESS: GenesisAccount(balance=10**24)},
    )
    client_genesis = genesis.client_genesis()
    assert client_genesis["config"]["chainId"] == 321
    assert client_genesis["config"]["posa"] == {"period": 1, "epoch": 5}
    assert "ishikariBlock" not in client_genesis["config"]
    assert client_genesis["alloc"] == {
        "658bdf435d810c91414ec09147daa6db62406379": {"balance": hex(10**24)}
    }
    extra_data = Bytes(client_genesis["extraData"])
    assert len(extra_data) == 32 + 20 + 65
    assert extra_data[32:52] == bytes(MINER_ADDRESS)
