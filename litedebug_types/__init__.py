"""
Account, transaction, receipt and genesis types used by the simulator.
"""

from .account_types import EOA
from .genesis_types import ChainSpecConfig, Genesis, GenesisAccount, PosaConfig
from .receipt_types import TransactionLog, TransactionReceipt
from .transaction_types import Transaction, TransactionDefaults

__all__ = (
    "EOA",
    "ChainSpecConfig",
    "Genesis",
    "GenesisAccount",
    "PosaConfig",
    "Transaction",
    "TransactionDefaults",
    "TransactionLog",
    "TransactionReceipt",
)
