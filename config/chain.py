"""
Chain configuration of the client under test.

Classes:
- ChainConfig: Chain id, POSA parameters, fork blocks and the funded miner account,
  together with the value transfer the simulator sends on that chain.
"""

from pathlib import Path
from typing import Dict

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from litedebug_base_types import Address, Hash, HexNumber, Wei
from litedebug_types import (
    EOA,
    ChainSpecConfig,
    Genesis,
    GenesisAccount,
    PosaConfig,
)


class ChainConfig(BaseModel):
    """Parameters of the single-signer KCC POSA chain every scenario runs on."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    miner_private_key: Hash = Hash(
        "0x9c647b8b7c4e7c3490668fb6c11473619db80c93704c70893d3813af4090c39c"
    )
    """Key of the account that seals blocks and sends the test transaction."""

    miner_address: Address = Address("0x658bdf435d810c91414ec09147daa6db62406379")
    """Address of `miner_private_key`."""

    chain_id: int = 321

    posa_block_interval: int = 1
    """Seconds between two blocks."""

    posa_epoch: int = 5

    ishikari_block: int = 9
    ishikari_patch001_block: int = 10
    ishikari_patch002_block: int = 11

    recipient: Address = Address("0x000000000000000000000000000000000000f333")
    """Receiver of the value transfer: the validators system contract."""

    transfer_value: Wei = Wei("1 ether")
    transfer_gas_limit: int = 500_000
    transfer_gas_price: Wei = Wei("100 gwei")

    miner_balance: Wei = Wei("1000000 ether")
    """Genesis allocation of the miner account."""

    @model_validator(mode="after")
    def check_miner_address(self) -> "ChainConfig":
        """Ensure the configured miner address belongs to the configured key."""
        derived = EOA(key=self.miner_private_key)
        if derived != self.miner_address:
            raise ValueError(
                f"miner_address {self.miner_address} does not match the address of "
                f"miner_private_key ({derived})"
            )
        return self

    def hive_parameters(self) -> Dict[str, str]:
        """Return the hive client environment shared by all scenarios."""
        miner = str(self.miner_address)
        return {
            "HIVE_CLIQUE_PRIVATEKEY": self.miner_private_key.hex()[2:],
            "HIVE_MINER": miner[2:],
            "HIVE_CHAIN_ID": str(self.chain_id),
            "HIVE_KCC_POSA_BLOCK_INTERVAL": str(self.posa_block_interval),
            "HIVE_KCC_POSA_EPOCH": str(self.posa_epoch),
            "HIVE_KCC_POSA_ISHIKARI_INIT_VALIDATORS": miner,
            "HIVE_KCC_POSA_ADMIN": miner,
            "HIVE_FORK_KCC_ISHIKARI": str(self.ishikari_block),
            "HIVE_FORK_KCC_ISHIKARI_PATCH001": str(self.ishikari_patch001_block),
            "HIVE_FORK_KCC_ISHIKARI_PATCH002": str(self.ishikari_patch002_block),
        }

    def genesis(self) -> Genesis:
        """Return the genesis the client is started with."""
        return Genesis(
            config=ChainSpecConfig(
                chain_id=self.chain_id,
                ishikari_block=self.ishikari_block,
                ishikari_patch001_block=self.ishikari_patch001_block,
                ishikari_patch002_block=self.ishikari_patch002_block,
                posa=PosaConfig(period=self.posa_block_interval, epoch=self.posa_epoch),
            ),
            extra_data=Genesis.signers_extra_data([self.miner_address]),
            alloc={self.miner_address: GenesisAccount(balance=HexNumber(self.miner_balance))},
        )

    @classmethod
    def from_yaml(cls, path: Path) -> "ChainConfig":
        """
        Load a chain configuration from a YAML file.

        Keys that are missing from the file keep their default values. Raises
        `ValueError` if the file is not a mapping or contains invalid values.
        """
        with open(path) as f:
            data = yaml.safe_load(f)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping of chain parameters")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"{path}: invalid chain configuration\n{e}") from e
