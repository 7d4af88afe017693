"""
Runtime configuration for txtrace.

Values come from the environment and can be overridden by CLI flags.
"""

import os
from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from eth_utils import to_checksum_address

from .utils.exceptions import ConfigError

DEFAULT_RPC_URL = "http://localhost:8545"
DEFAULT_TIMEOUT = 30

# Precompiled contracts 0x01 (ecrecover) through 0x0a (point evaluation)
DEFAULT_PRECOMPILES = frozenset(
    to_checksum_address(i.to_bytes(20, "big")) for i in range(0x01, 0x0b)
)


def parse_precompiles(raw: str) -> FrozenSet[str]:
    """Parse a comma separated list of addresses into checksum form."""
    return frozenset(
        to_checksum_address(item.strip())
        for item in raw.split(",")
        if item.strip()
    )


@dataclass
class TracerConfig:
    rpc_url: str = DEFAULT_RPC_URL
    timeout: int = DEFAULT_TIMEOUT
    precompiles: FrozenSet[str] = field(default_factory=lambda: DEFAULT_PRECOMPILES)

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "TracerConfig":
        """
        Build a config from TXTRACE_RPC_URL, TXTRACE_TIMEOUT and
        TXTRACE_PRECOMPILES, falling back to the defaults.

        Raises:
            ConfigError: if a variable is set to a value that cannot be parsed
        """
        env = os.environ if environ is None else environ
        config = cls()
        if env.get("TXTRACE_RPC_URL"):
            config.rpc_url = env["TXTRACE_RPC_URL"]
        if env.get("TXTRACE_TIMEOUT"):
            try:
                config.timeout = int(env["TXTRACE_TIMEOUT"])
            except ValueError as e:
                raise ConfigError("TXTRACE_TIMEOUT", env["TXTRACE_TIMEOUT"], "expected whole seconds") from e
        if env.get("TXTRACE_PRECOMPILES"):
            try:
                config.precompiles = parse_precompiles(env["TXTRACE_PRECOMPILES"])
            except ValueError as e:
                raise ConfigError("TXTRACE_PRECOMPILES", env["TXTRACE_PRECOMPILES"], str(e)) from e
        return config
