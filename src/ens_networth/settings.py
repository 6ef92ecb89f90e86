"""Settings module with unified configuration precedence: CLI > ENV > CONFIG FILE."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .constants import (
    ASSETS_BY_SYMBOL,
    BAD_PAIR_STATUS,
    DEFAULT_BALANCE_PATH,
    DEFAULT_BALANCE_SUFFIX,
    DEFAULT_COIN_NAMES,
    DEFAULT_ENS_SUBGRAPH_URL,
    DEFAULT_PRICE_URL_PREFIX,
    DEFAULT_PROVIDER_BOOKS,
    INFURA_MAINNET_URL,
)

load_dotenv()

SECRET_FIELDS = {"infura_project_secret", "nownodes_api_key"}


class NetworthSettings(BaseSettings):
    """Single source of truth for configuration. Values may come from:
    - CLI (init kwargs)
    - ENV / .env (prefixed with ENS_NETWORTH_)
    - Config file (TOML), lowest precedence

    Do not read os.environ or files elsewhere in the codebase.
    """

    # --- naming system ---
    eth_rpc: str | None = None
    infura_project_id: str | None = None
    infura_project_secret: SecretStr | None = None
    ens_subgraph_url: str = DEFAULT_ENS_SUBGRAPH_URL

    # --- balance provider ---
    nownodes_api_key: SecretStr | None = None
    balance_path: str = DEFAULT_BALANCE_PATH
    balance_suffix: str = DEFAULT_BALANCE_SUFFIX
    provider_books: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_PROVIDER_BOOKS)
    )
    coin_names: list[str] = Field(default_factory=lambda: list(DEFAULT_COIN_NAMES))

    # --- price provider ---
    price_url_prefix: str = DEFAULT_PRICE_URL_PREFIX
    price_bad_pair_status: int = BAD_PAIR_STATUS

    # --- timeouts ---
    http_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Per-request timeout (seconds) for every upstream HTTP call.",
    )
    global_timeout_seconds: float | None = 120.0

    # --- logging ---
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="ENS_NETWORTH_",
        env_file=".env",
        extra="ignore",  # ignore unknown keys in env/config file
    )

    @field_validator("infura_project_secret", "nownodes_api_key", mode="before")
    @classmethod
    def wrap_secrets(cls, v: Any) -> SecretStr | None:
        """Wrap string secrets in SecretStr."""
        if v is None or isinstance(v, SecretStr):
            return v
        return SecretStr(v)

    @field_validator("provider_books")
    @classmethod
    def validate_provider_books(cls, v: dict[str, str]) -> dict[str, str]:
        unknown = sorted(set(v) - set(ASSETS_BY_SYMBOL))
        if unknown:
            raise ValueError(
                f"provider_books contains unsupported assets: {', '.join(unknown)}"
            )
        return {symbol: prefix.rstrip("/") for symbol, prefix in v.items()}

    @field_validator("coin_names")
    @classmethod
    def validate_coin_names(cls, v: list[str]) -> list[str]:
        unknown = sorted(set(v) - set(ASSETS_BY_SYMBOL))
        if unknown:
            raise ValueError(
                f"coin_names contains unsupported assets: {', '.join(unknown)}"
            )
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Custom config-file source with explicit precedence: CLI > ENV > FILE."""
        env_cfg = os.environ.get("ENS_NETWORTH_CONFIG")
        cfg_path = Path(env_cfg) if env_cfg else None

        class TomlConfigSource(PydanticBaseSettingsSource):
            def __init__(self, settings_cls: type[BaseSettings], path: Path | None):
                super().__init__(settings_cls)
                self._path = path

            def get_field_value(
                self, field: Any, field_name: str
            ) -> tuple[Any, str, bool]:
                return None, "", False

            def __call__(self) -> dict[str, Any]:
                if not self._path:
                    local_config = Path("ens-networth.toml")
                    user_config = (
                        Path.home() / ".config" / "ens-networth" / "config.toml"
                    )
                    if local_config.exists():
                        self._path = local_config
                    elif user_config.exists():
                        self._path = user_config
                    else:
                        return {}

                if not self._path.exists():
                    return {}

                with self._path.open("rb") as f:
                    data = tomllib.load(f)  # supports top-level or [ens_networth]
                body = data.get("ens_networth", data)
                if not isinstance(body, dict):
                    return {}

                for key in SECRET_FIELDS:
                    if key in body:
                        raise ValueError(
                            f"Security violation: '{key}' found in TOML config file. "
                            f"Secrets must only be provided via environment variables or CLI flags."
                        )

                return body

        return (
            init_settings,  # CLI (highest)
            env_settings,  # ENV
            TomlConfigSource(settings_cls, cfg_path),  # CONFIG (lowest)
            file_secret_settings,
        )

    def as_safe_dict(self) -> dict[str, Any]:
        """Return the config as a dict with secrets redacted."""
        data = self.model_dump()
        for key in SECRET_FIELDS:
            if getattr(self, key):
                data[key] = "***redacted***"
        return data

    @property
    def eth_rpc_required(self) -> str:
        """Get the Ethereum RPC endpoint, deriving it from Infura if needed."""
        if self.eth_rpc:
            return self.eth_rpc
        if self.infura_project_id:
            return INFURA_MAINNET_URL.format(project_id=self.infura_project_id)
        raise ValueError("eth_rpc or infura_project_id must be configured")

    @property
    def balance_headers(self) -> dict[str, str]:
        """Headers sent to the balance provider."""
        if self.nownodes_api_key is None:
            return {}
        return {"api-key": self.nownodes_api_key.get_secret_value()}
