"""
Standardized finding schema.

Defines the canonical structure used to report offenses detected by the
index metadata checks. Every finding corresponds to exactly one log line
emitted by a check (the summary line of the dynamic mapping check is not
a finding; its per-field detail lines are).

This schema is:
- immutable
- check-traceable
- severity-graded

All findings included in an AuditReport MUST conform to this schema.
"""

from enum import Enum
from typing import Optional, Dict

from pydantic import BaseModel, Field
from pydantic import ConfigDict


# ---------------------------------------------------------------------------
# Enumerations (FROZEN CONTRACTS)
# ---------------------------------------------------------------------------


class Severity(str, Enum):
    """
    Severity level of a finding.

    Ordering is intentional and MUST remain stable.
    """

    CRITICAL = "critical"
    MAJOR = "major"
    MINOR = "minor"
    INFO = "info"


class FindingSource(str, Enum):
    """
    Check that produced the finding.
    """

    DYNAMIC_MAPPING = "dynamic_mapping"
    INDEX_NAME = "index_name"


class FindingCategory(str, Enum):
    """
    High-level issue taxonomy.
    """

    MAPPING = "mapping"
    NAMING = "naming"
    OTHER = "other"


# ---------------------------------------------------------------------------
# Canonical Finding Object (PUBLIC, FROZEN)
# ---------------------------------------------------------------------------


class FindingObject(BaseModel):
    """
    Canonical audit finding.

    Represents a single immutable offense against one index.
    Findings are descriptive, not prescriptive.
    """

    finding_id: str = Field(
        ...,
        description="Stable identifier for the finding kind (e.g., 'MAP-MIN-001')",
    )

    source: FindingSource = Field(
        ...,
        description="Check that produced the finding",
    )

    category: FindingCategory = Field(
        ...,
        description="High-level classification of the issue",
    )

    severity: Severity = Field(
        ...,
        description="Severity level of the finding",
    )

    title: str = Field(
        ...,
        description="Short human-readable summary of the finding",
    )

    description: str = Field(
        ...,
        description="The formatted message logged for this offense",
    )

    index_name: str = Field(
        ...,
        description="Name of the offending index",
    )

    location: Optional[str] = Field(
        None,
        description="Dot-joined field path inside the index mapping, if any",
    )

    suggested_fix: Optional[str] = Field(
        None,
        description="Optional advisory remediation suggestion",
    )

    metadata: Optional[Dict] = Field(
        None,
        description="Optional structured metadata for tooling or reviewers",
    )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )
