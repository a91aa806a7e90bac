from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

class HealthStatus(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    UNKNOWN = "UNKNOWN"

class Health(BaseModel):
    """Finalized health report. Frozen once built, details included."""
    model_config = ConfigDict(frozen=True)

    status: HealthStatus
    details: Mapping[str, str] = Field(default_factory=dict, validate_default=True)

    @field_validator("details", mode="after")
    @classmethod
    def freeze_details(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_serializer("details")
    def serialize_details(self, value: Mapping[str, str]) -> Dict[str, str]:
        return dict(value)

class HealthBuilder:
    """
    Builder Pattern: assembles a Health report step by step.
    Starts as UNKNOWN with no details.
    """
    def __init__(self):
        self._status = HealthStatus.UNKNOWN
        self._details: Dict[str, str] = {}

    def status(self, status: HealthStatus) -> "HealthBuilder":
        self._status = HealthStatus(status)
        return self

    def up(self) -> "HealthBuilder":
        return self.status(HealthStatus.UP)

    def unknown(self) -> "HealthBuilder":
        return self.status(HealthStatus.UNKNOWN)

    def down(self, error: Optional[BaseException] = None) -> "HealthBuilder":
        if error is not None:
            self.with_exception(error)
        return self.status(HealthStatus.DOWN)

    def with_exception(self, error: BaseException) -> "HealthBuilder":
        return self.with_detail("error", f"{type(error).__name__}: {error}")

    def with_detail(self, key: str, value: str) -> "HealthBuilder":
        if not key:
            raise ValueError("Detail key must not be empty")
        self._details[key] = value
        return self

    def build(self) -> Health:
        # Copy so later builder calls don't leak into an issued report
        return Health(status=self._status, details=dict(self._details))

class ClusterInfo(BaseModel):
    """Cluster metadata snapshot: one version string per node."""
    model_config = ConfigDict(frozen=True)

    all_versions: List[str] = Field(default_factory=list)

class BucketInfo(BaseModel):
    """Bucket metadata snapshot: addresses of the nodes serving the bucket."""
    model_config = ConfigDict(frozen=True)

    name: str
    node_list: List[str] = Field(default_factory=list)
