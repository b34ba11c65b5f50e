"""Chain Detect - Core Configuration."""

from functools import lru_cache
from typing import TYPE_CHECKING

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from chaindetect.blockchain.base import ChainId


class Settings(BaseSettings):
    """Detection settings loaded from environment variables.

    Endpoint lists are ordered by preference (first = most trusted).
    Override them with JSON arrays, e.g.
    ``CHAIN_DETECT_ETH_RPC_URLS='["https://my-node.example"]'``.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHAIN_DETECT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # RPC endpoints
    solana_rpc_urls: list[str] = Field(
        default=[
            "https://api.mainnet-beta.solana.com",
            "https://solana-api.projectserum.com",
            "https://rpc.ankr.com/solana",
            "https://solana.public-rpc.com",
        ],
        min_length=1,
        description="Solana RPC endpoints",
    )
    eth_rpc_urls: list[str] = Field(
        default=[
            "https://mainnet.infura.io",
            "https://1rpc.io/eth",
            "https://rpc.mevblocker.io/fast",
            "https://rpc.mevblocker.io/noreverts",
            "https://rpc.mevblocker.io/fullprivacy",
            "https://ethereum-rpc.publicnode.com",
        ],
        min_length=1,
        description="Ethereum RPC endpoints",
    )
    bsc_rpc_urls: list[str] = Field(
        default=[
            "https://1rpc.io/bnb",
            "https://rpc-bsc.48.club",
            "https://bsc.therpc.io",
            "https://bsc.drpc.org",
            "https://api.zan.top/bsc-mainnet",
        ],
        min_length=1,
        description="BNB Smart Chain RPC endpoints",
    )
    base_rpc_urls: list[str] = Field(
        default=[
            "https://1rpc.io/base",
            "https://api.zan.top/base-mainnet",
            "https://mainnet.base.org",
            "https://base.llamarpc.com",
        ],
        min_length=1,
        description="Base RPC endpoints",
    )

    # Timeouts
    rpc_timeout_seconds: float = Field(
        default=10.0, gt=0, description="Upper bound for every remote call"
    )

    # Provider cache
    provider_cache_ttl_seconds: float = Field(
        default=300.0, gt=0, description="How long a connected endpoint stays trusted"
    )

    # Rate limiting
    rate_limit_window_seconds: float = Field(
        default=60.0, gt=0, description="Fixed window length per operation key"
    )
    rate_limit_max_requests: int = Field(
        default=30, ge=1, description="Allowed requests per key per window"
    )

    # Provider fallback backoff
    backoff_initial_seconds: float = Field(default=0.1, ge=0)
    backoff_max_seconds: float = Field(default=1.0, ge=0)
    backoff_factor: float = Field(default=2.0, ge=1)

    # Fan-out width
    solana_token_rpc_count: int = Field(
        default=3, ge=1, description="Solana endpoints queried in parallel for token checks"
    )
    transaction_rpc_count: int = Field(
        default=2, ge=1, description="Endpoints per EVM chain raced for transaction lookups"
    )

    def endpoints_for(self, chain: "ChainId | str") -> tuple[str, ...]:
        """Return the ordered endpoint list for a chain.

        Raises:
            ValueError: If the chain has no configured endpoints
        """
        mapping = {
            "solana": self.solana_rpc_urls,
            "ethereum": self.eth_rpc_urls,
            "bsc": self.bsc_rpc_urls,
            "base": self.base_rpc_urls,
        }
        if chain not in mapping:
            raise ValueError(f"No endpoints configured for chain: {chain}")
        return tuple(mapping[chain])


@lru_cache
def get_settings() -> Settings:
    """Get cached detection settings."""
    return Settings()
