"""
Initializes the config package.

The config package holds the chain configuration the simulated clients are
started with, making it accessible to the pytest plugins and the CLI.
"""

# `from config import ChainConfig` instead of `from config.chain import ChainConfig`
from .chain import ChainConfig

__all__ = ["ChainConfig"]
