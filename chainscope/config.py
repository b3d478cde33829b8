"""
Runtime settings for Chainscope.

Values come from the environment (prefix ``CHAINSCOPE_``) or a local ``.env``
file. Nothing in the core reads the environment directly; the orchestrator and
gateway receive a ``Settings`` instance.
"""
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from chainscope.core.use_cases.balance_aggregator import ChartPolicy


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHAINSCOPE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Indexer
    indexer_base_url: str = Field(default="https://api-unique.uniquescan.io/v2")
    indexer_timeout: float = Field(default=20.0)
    extrinsics_path: str = Field(default="/extrinsics")
    transfers_path: str = Field(default="/events/balances/transfers")
    balance_path: str = Field(default="/balances/{address}")
    page_limit: int = Field(default=100, ge=1)

    # Display
    explorer_base_url: str = Field(default="https://unique.subscan.io")
    chart_policy: ChartPolicy = Field(default=ChartPolicy.PRIORITY)

    # Scan defaults used when the caller does not pass an address or filters
    default_address: str = Field(default="5Cnx9ZfNaSo9DeMNgjvFSqk9XiVpQ1ofX8Fourj6r5yLAtpv")
    default_method_in: Optional[List[str]] = Field(default=None)
    default_section_in: Optional[List[str]] = Field(default=None)

    # HTTP server
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000, ge=1, le=65535)

    log_level: str = Field(default="INFO")


@lru_cache
def get_settings() -> Settings:
    return Settings()
