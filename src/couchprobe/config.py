from datetime import timedelta
from typing import List, Optional
from pathlib import Path
import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field, ValidationError
from .exceptions import ConfigurationError

DEFAULT_TIMEOUT_MS = 1000

class CouchbaseConfig(BaseModel):
    alias: str
    connection_string: str  # couchbase:// or couchbases://
    username: str
    password: str
    bucket: str

    # Per-cluster override of AppConfig.timeout_ms
    timeout_ms: Optional[int] = Field(default=None, ge=0)

class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="COUCHPROBE_")

    clusters: List[CouchbaseConfig] = []
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, ge=0)

    @classmethod
    def from_yaml(cls, config_path: Path) -> "AppConfig":
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

        try:
            with open(config_path, "r") as f:
                raw_config = yaml.safe_load(f) or {}
            if not isinstance(raw_config, dict):
                raise ConfigurationError(f"Invalid configuration format: expected a mapping in {config_path}")
            return cls(**raw_config)
        except (ValidationError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Invalid configuration format: {e}")

    def get_cluster_config(self, alias: str) -> CouchbaseConfig:
        for cluster in self.clusters:
            if cluster.alias == alias:
                return cluster
        raise ConfigurationError(f"Cluster alias '{alias}' not found in config")

    def timeout_for(self, cluster: CouchbaseConfig) -> timedelta:
        """Effective probe timeout for a cluster."""
        timeout_ms = cluster.timeout_ms if cluster.timeout_ms is not None else self.timeout_ms
        return timedelta(milliseconds=timeout_ms)
