# File: src/bigfile_explorer/config/settings.py

import copy
import os
from typing import Dict, Any, Optional

import yaml

from ..exceptions import ConfigError
from ..utils.config import Config

# Environment variable -> (dotted key, type)
ENV_OVERRIDES = {
    "BIGFILE_NODE_URL": ("node.url", str),
    "BIGFILE_EXPLORER_PORT": ("server.port", int),
    "BIGFILE_CACHE_TTL": ("dashboard.cache_ttl", float),
}

def default_config() -> Dict[str, Any]:
    return {
        "node": {
            "url": Config.NODE_URL,
            "timeout": Config.NODE_TIMEOUT,
            "verify_ssl": Config.NODE_VERIFY_SSL,
            "max_concurrency": Config.NODE_MAX_CONCURRENCY
        },
        "server": {
            "host": Config.HOST,
            "port": Config.PORT
        },
        "dashboard": {
            "cache_ttl": Config.CACHE_TTL,
            "recent_block_count": Config.RECENT_BLOCK_COUNT,
            "trend_points": Config.TREND_POINTS,
            "tps_window": Config.TPS_WINDOW,
            "min_tps": Config.MIN_TPS,
            "assumed_block_size": Config.ASSUMED_BLOCK_SIZE,
            "assumed_network_block_size": Config.ASSUMED_NETWORK_BLOCK_SIZE,
            "storage_cost": Config.STORAGE_COST,
            "transactions_eod_factor": Config.TRANSACTIONS_EOD_FACTOR,
            "weave_eod_factor": Config.WEAVE_EOD_FACTOR
        },
        "explorer": {
            "latest_blocks_limit": Config.LATEST_BLOCKS_LIMIT,
            "series_window": Config.SERIES_WINDOW,
            "max_transactions_per_page": Config.MAX_TRANSACTIONS_PER_PAGE,
            "default_block_time": Config.DEFAULT_BLOCK_TIME
        },
        "monitoring": {
            "metrics_prefix": Config.METRICS_PREFIX,
            "log_dir": Config.LOG_DIR,
            "log_level": Config.LOG_LEVEL
        }
    }

def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base

class ExplorerConfig:
    def __init__(
        self,
        config_path: Optional[str] = "config/explorer.yaml",
        environ: Optional[Dict[str, str]] = None
    ):
        self.config_path = config_path
        self.environ = os.environ if environ is None else environ
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        config = default_config()

        if self.config_path and os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid configuration file {self.config_path}: {e}") from e
            if not isinstance(loaded, dict):
                raise ConfigError(f"Configuration file {self.config_path} must contain a mapping")
            _merge(config, loaded)

        self._apply_env(config)
        return config

    def _apply_env(self, config: Dict[str, Any]):
        for name, (key, cast) in ENV_OVERRIDES.items():
            raw = self.environ.get(name)
            if raw is None or raw == "":
                continue
            try:
                value = cast(raw)
            except ValueError as e:
                raise ConfigError(f"Invalid value for {name}: {raw!r}") from e
            self._set(config, key, value)

    @staticmethod
    def _set(config: Dict[str, Any], key: str, value: Any):
        keys = key.split('.')
        for k in keys[:-1]:
            config = config.setdefault(k, {})
        config[keys[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        try:
            keys = key.split('.')
            value = self.config
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def section(self, name: str) -> Dict[str, Any]:
        """Return a copy of one top-level section."""
        return copy.deepcopy(self.config.get(name, {}))

    def update(self, key: str, value: Any):
        """Update configuration value in memory."""
        self._set(self.config, key, value)

    def save(self, path: Optional[str] = None):
        """Write the effective configuration as YAML."""
        path = path or self.config_path
        if not path:
            raise ConfigError("No configuration path to save to")
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, 'w') as f:
            yaml.safe_dump(self.config, f, default_flow_style=False)
