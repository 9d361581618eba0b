"""Submit the value transfer every scenario traces, and wait for it to be mined."""

from typing import Tuple

from config import ChainConfig
from litedebug_base_types import Hash
from litedebug_rpc import EthRPC
from litedebug_types import EOA, Transaction

from ..logging import get_logger

logger = get_logger(__name__)


def send_value_transfer(
    eth_rpc: EthRPC, chain_config: ChainConfig, *, timeout: float | None = None
) -> Tuple[Hash, int]:
    """
    Send the configured value transfer from the miner account and wait for its receipt.

    Returns the transaction hash and the number of the block that includes it. Raises
    `WaitTimeoutError` if the transaction is not mined within `timeout` seconds, and
    propagates any RPC error other than a not (yet) known receipt.
    """
    pending_nonce = eth_rpc.get_transaction_count(chain_config.miner_address, "pending")
    sender = EOA(key=chain_config.miner_private_key)
    logger.verbose(f"Pending nonce of {sender}: {pending_nonce}")

    tx = Transaction.signed(
        signer=sender,
        chain_id=chain_config.chain_id,
        nonce=pending_nonce,
        to=chain_config.recipient,
        value=chain_config.transfer_value,
        gas_limit=chain_config.transfer_gas_limit,
        gas_price=chain_config.transfer_gas_price,
    )
    tx_hash = eth_rpc.send_transaction(tx)
    logger.info(f"Sent transaction {tx_hash} (nonce {pending_nonce})")

    receipt = eth_rpc.wait_for_transaction_receipt(tx, timeout=timeout)
    logger.info(f"Transaction {tx_hash} included in block {receipt.block_number}")
    return tx_hash, int(receipt.block_number)
