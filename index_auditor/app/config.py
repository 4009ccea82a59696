"""
Runtime configuration for the Index Auditor service.

This module centralizes environment-driven configuration: which checks are
enabled, how the cluster is reached when the service fetches index
metadata itself, and request safety limits.

Configuration is read-only at runtime.
"""

from __future__ import annotations

import os
from typing import List

from pydantic import (
    BaseModel,
    Field,
    field_validator,
    model_validator,
    ValidationInfo,
)


class AuditorConfig(BaseModel):
    """
    Runtime configuration for the Index Auditor service.
    """

    # ------------------------------------------------------------------
    # Check gates
    # ------------------------------------------------------------------

    ENABLE_DYNAMIC_MAPPING_CHECK: bool = Field(
        True,
        description="Report fields that carry the default dynamic mapping shape",
    )

    ENABLE_INDEX_NAME_CHECK: bool = Field(
        True,
        description="Report index names using YYYY-MM-DD instead of YYYY.MM.DD",
    )

    # ------------------------------------------------------------------
    # Cluster connection
    # ------------------------------------------------------------------

    OPENSEARCH_HOSTS: List[str] = Field(
        default_factory=lambda: ["http://localhost:9200"],
        description="Cluster node URLs",
    )

    OPENSEARCH_USERNAME: str = Field(
        "",
        description="Basic auth user name (empty disables basic auth)",
    )

    OPENSEARCH_PASSWORD: str = Field(
        "",
        description="Basic auth password",
    )

    OPENSEARCH_VERIFY_CERTS: bool = Field(
        True,
        description="Verify TLS certificates of the cluster",
    )

    OPENSEARCH_TIMEOUT_SECONDS: int = Field(
        30,
        description="Per-request timeout for cluster calls",
    )

    INDEX_PATTERN: str = Field(
        "*",
        description="Index pattern whose mappings are fetched for cluster audits",
    )

    INCLUDE_HIDDEN_INDICES: bool = Field(
        False,
        description="Include indices whose names start with '.'",
    )

    # ------------------------------------------------------------------
    # Safety limits and logging
    # ------------------------------------------------------------------

    MAX_INDEX_COUNT: int = Field(
        10_000,
        description="Maximum number of indices accepted in one audit request",
    )

    LOG_LEVEL: str = Field(
        "INFO",
        description="Root logger level",
    )

    # ------------------------------------------------------------------
    # Validators (Pydantic v2)
    # ------------------------------------------------------------------

    @field_validator("OPENSEARCH_HOSTS")
    @classmethod
    def at_least_one_host(cls, v: List[str]) -> List[str]:
        hosts = [h.strip() for h in v if h.strip()]
        if not hosts:
            raise ValueError("OPENSEARCH_HOSTS must contain at least one host.")
        return hosts

    @field_validator("OPENSEARCH_TIMEOUT_SECONDS", "MAX_INDEX_COUNT")
    @classmethod
    def must_be_positive(cls, v: int, info: ValidationInfo) -> int:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be positive, got {v}.")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
        level = v.upper()
        if level not in allowed:
            raise ValueError(
                f"Unsupported LOG_LEVEL '{v}'. "
                f"Allowed values: {sorted(allowed)}"
            )
        return level

    @model_validator(mode="after")
    def credentials_come_in_pairs(self):
        if bool(self.OPENSEARCH_USERNAME) != bool(self.OPENSEARCH_PASSWORD):
            raise ValueError(
                "OPENSEARCH_USERNAME and OPENSEARCH_PASSWORD must be set together."
            )
        return self

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "AuditorConfig":
        """
        Load configuration from environment variables.

        All values are parsed once at startup and must remain immutable.
        """

        def env_bool(name: str, default: bool) -> bool:
            raw = os.getenv(name)
            if raw is None:
                return default
            return raw.lower() in {"1", "true", "yes", "on"}

        hosts_env = os.getenv(
            "INDEX_AUDITOR_OPENSEARCH_HOSTS", "http://localhost:9200"
        )

        return cls(
            ENABLE_DYNAMIC_MAPPING_CHECK=env_bool(
                "INDEX_AUDITOR_ENABLE_DYNAMIC_MAPPING_CHECK", True
            ),
            ENABLE_INDEX_NAME_CHECK=env_bool(
                "INDEX_AUDITOR_ENABLE_INDEX_NAME_CHECK", True
            ),
            OPENSEARCH_HOSTS=hosts_env.split(","),
            OPENSEARCH_USERNAME=os.getenv(
                "INDEX_AUDITOR_OPENSEARCH_USERNAME", ""
            ),
            OPENSEARCH_PASSWORD=os.getenv(
                "INDEX_AUDITOR_OPENSEARCH_PASSWORD", ""
            ),
            OPENSEARCH_VERIFY_CERTS=env_bool(
                "INDEX_AUDITOR_OPENSEARCH_VERIFY_CERTS", True
            ),
            OPENSEARCH_TIMEOUT_SECONDS=os.getenv(
                "INDEX_AUDITOR_OPENSEARCH_TIMEOUT_SECONDS", "30"
            ),
            INDEX_PATTERN=os.getenv("INDEX_AUDITOR_INDEX_PATTERN", "*"),
            INCLUDE_HIDDEN_INDICES=env_bool(
                "INDEX_AUDITOR_INCLUDE_HIDDEN_INDICES", False
            ),
            MAX_INDEX_COUNT=os.getenv("INDEX_AUDITOR_MAX_INDEX_COUNT", "10000"),
            LOG_LEVEL=os.getenv("INDEX_AUDITOR_LOG_LEVEL", "INFO"),
        )

    model_config = {
        "frozen": True,
    }
