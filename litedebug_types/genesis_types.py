"""Types describing the genesis file the client under test is started with."""

from typing import Any, Dict, List

from pydantic import Field

from litedebug_base_types import Address, Bytes, CamelModel, HexNumber, to_json

EXTRA_VANITY_LENGTH = 32
EXTRA_SEAL_LENGTH = 65


class PosaConfig(CamelModel):
    """Proof-of-staked-authority engine parameters."""

    period: int
    epoch: int


class ChainSpecConfig(CamelModel):
    """The `config` object of the genesis file."""

    chain_id: int
    homestead_block: int = 0
    eip150_block: int = 0
    eip155_block: int = 0
    eip158_block: int = 0
    byzantium_block: int = 0
    constantinople_block: int = 0
    petersburg_block: int = 0
    istanbul_block: int = 0
    berlin_block: int = 0
    london_block: int = 0
    ishikari_block: int | None = None
    ishikari_patch001_block: int | None = None
    ishikari_patch002_block: int | None = None
    posa: PosaConfig


class GenesisAccount(CamelModel):
    """Pre-funded account in the genesis allocation."""

    balance: HexNumber


class Genesis(CamelModel):
    """Genesis file of a single-signer POSA chain."""

    config: ChainSpecConfig
    nonce: HexNumber = HexNumber(0)
    timestamp: HexNumber = HexNumber(0)
    extra_data: Bytes
    gas_limit: HexNumber = HexNumber(30_000_000)
    difficulty: HexNumber = HexNumber(1)
    coinbase: Address = Address(0)
    alloc: Dict[Address, GenesisAccount] = Field(default_factory=dict)

    @staticmethod
    def signers_extra_data(signers: List[Address]) -> Bytes:
        """
        Build the header extra-data of the genesis block: 32 bytes of vanity, the
        concatenated initial signers and an empty 65 byte seal.
        """
        return Bytes(
            b"\x00" * EXTRA_VANITY_LENGTH
            + b"".join(bytes(signer) for signer in signers)
            + b"\x00" * EXTRA_SEAL_LENGTH
        )

    def client_genesis(self) -> Dict[str, Any]:
        """Return the genesis as JSON data, in the layout the client expects on disk."""
        genesis = to_json(self)
        # NOTE: some clients require account keys without '0x' prefix
        genesis["alloc"] = {k.replace("0x", ""): v for k, v in genesis["alloc"].items()}
        return genesis
